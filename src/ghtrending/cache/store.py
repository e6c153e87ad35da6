import logging
import time
from typing import Callable, List, Optional

from pydantic import ValidationError

from ghtrending.models import ALL_LANGUAGES, CacheEntry, RepositoryRecord, TimeRange
from .backends import KeyValueBackend

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "github_trending_data"
CACHE_DURATION = 60 * 60 * 1000  # 1 hour in milliseconds


def now_ms() -> int:
    return int(time.time() * 1000)


def cache_key(time_range: TimeRange, language: str = ALL_LANGUAGES) -> str:
    return f"{CACHE_KEY_PREFIX}:{TimeRange(time_range).value}:{language}"


class CacheStore:
    """Per-key TTL cache of fetched repository lists.

    No size bound and no eviction besides expiry; an expired entry is removed
    by the first ``get`` that sees it.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        clock: Callable[[], int] = now_ms,
        duration: int = CACHE_DURATION,
    ):
        self.backend = backend
        self.clock = clock
        self.duration = duration

    def get(self, key: str) -> Optional[List[RepositoryRecord]]:
        raw = self.backend.get(key)
        if raw is None:
            return None

        try:
            entry = CacheEntry.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Dropping undecodable cache entry '{key}': {e}")
            self.backend.remove(key)
            return None

        age = self.clock() - entry.timestamp
        if age > self.duration:
            logger.debug(f"Cache entry '{key}' expired {age - self.duration} ms ago")
            self.backend.remove(key)
            return None
        return entry.items

    def put(self, key: str, records: List[RepositoryRecord]) -> None:
        entry = CacheEntry(items=list(records), timestamp=self.clock())
        self.backend.set(key, entry.model_dump_json())

    def clear(self, key: str) -> None:
        self.backend.remove(key)
