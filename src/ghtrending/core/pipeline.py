import logging
from typing import List, Protocol

from ghtrending.cache import CacheStore, cache_key
from ghtrending.models import ALL_LANGUAGES, DeveloperRollup, RepositoryRecord, TimeRange
from .aggregate import by_developer, filter_by_language

logger = logging.getLogger(__name__)


class UpstreamClient(Protocol):
    async def fetch(self, time_range: TimeRange, language: str = ALL_LANGUAGES) -> List[RepositoryRecord]: ...


class TrendingPipeline:
    """Entry point for the presentation layer: cache first, upstream on a miss.

    Errors from the upstream client propagate unchanged; nothing is retried
    here and expired entries are never served. Concurrent misses for the same
    key each go upstream and the last ``put`` wins.
    """

    def __init__(self, client: UpstreamClient, store: CacheStore):
        self.client = client
        self.store = store

    async def fetch_trending_repos(
        self, time_range: TimeRange | str, language: str = ALL_LANGUAGES
    ) -> List[RepositoryRecord]:
        time_range = TimeRange(time_range)
        key = cache_key(time_range, language)

        cached = self.store.get(key)
        if cached is not None:
            logger.info(f"Cache hit for {key} ({len(cached)} repositories)")
            return cached

        logger.info(f"Cache miss for {key}; fetching from upstream")
        records = await self.client.fetch(time_range, language)
        self.store.put(key, records)
        return records

    async def fetch_top_developers(self, time_range: TimeRange | str) -> List[DeveloperRollup]:
        return by_developer(await self.fetch_trending_repos(time_range, ALL_LANGUAGES))

    @staticmethod
    def filter_by_language(records: List[RepositoryRecord], language: str) -> List[RepositoryRecord]:
        return filter_by_language(records, language)
