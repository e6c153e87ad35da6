import asyncio
import logging
from typing import Any, List, Tuple

import aiohttp
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)

from ghtrending.config import Settings, get_settings
from ghtrending.models import ALL_LANGUAGES, RepositoryRecord, TimeRange
from .errors import MalformedResponseError, NetworkError, RateLimitedError, UpstreamStatusError
from .normalize import decode_payload
from .query import build_search_params, build_trending_params
from .rate_limiting import RateLimiter

logger = logging.getLogger(__name__)

USER_AGENT = "ghtrending (+https://github.com)"


# --- Tenacity Callbacks ---
def log_retry(retry_state: RetryCallState):
    """Log retry attempts."""
    attempt = retry_state.attempt_number
    exception = retry_state.outcome.exception()
    wait_time = retry_state.next_action.sleep
    logger.warning(
        f"Retrying attempt {attempt} after exception {exception}. Waiting {wait_time:.2f}s."
    )


def wait_strategy(retry_state: RetryCallState) -> float:
    """Respect the Retry-After header sent with a secondary rate limit."""
    exception = retry_state.outcome.exception()
    if isinstance(exception, RateLimitedError):
        return float(exception.retry_after)
    return 0.0


def build_headers(settings: Settings) -> dict[str, str]:
    headers = {
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }
    if settings.has_token:
        headers["Authorization"] = f"Bearer {settings.github_token.strip()}"
    return headers


class TrendingClient:
    """Async client for either the trending feed or the GitHub search API.

    Only secondary rate limits that come with a ``Retry-After`` header are
    retried; transport failures and other statuses surface immediately.
    """

    def __init__(self, settings: Settings | None = None, *, limiter: RateLimiter | None = None):
        self._settings = settings or get_settings()
        self._headers = build_headers(self._settings)
        self._limiter = limiter or RateLimiter(
            capacity=self._settings.bucket_capacity,
            refill_per_min=self._settings.bucket_refill_per_min,
        )
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self):
        self._session = aiohttp.ClientSession(
            headers=self._headers,
            timeout=aiohttp.ClientTimeout(total=self._settings.request_timeout),
        )
        return self

    async def __aexit__(self, *exc):
        if self._session is not None:
            await self._session.close()
            self._session = None

    def request_for(
        self, time_range: TimeRange, language: str = ALL_LANGUAGES
    ) -> Tuple[str, dict[str, str]]:
        """Endpoint and query parameters for the configured source."""
        if self._settings.source == "search":
            return self._settings.search_endpoint, build_search_params(
                time_range,
                language,
                min_stars=self._settings.min_stars,
                per_page=self._settings.per_page,
            )
        return self._settings.trending_endpoint, build_trending_params(time_range, language)

    async def fetch(
        self, time_range: TimeRange, language: str = ALL_LANGUAGES
    ) -> List[RepositoryRecord]:
        time_range = TimeRange(time_range)
        url, params = self.request_for(time_range, language)

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max(1, self._settings.rate_limit_attempts)),
            wait=wait_strategy,
            retry=retry_if_exception_type(RateLimitedError),
            before_sleep=log_retry,
            reraise=True,
        ):
            with attempt:
                payload = await self._get_json(url, params)

        records = decode_payload(payload, time_range)
        logger.info(
            f"Fetched {len(records)} repositories ({time_range.value}, {language}) from {url}"
        )
        return records

    async def _get_json(self, url: str, params: dict[str, str]) -> Any:
        if self._session is None:
            raise RuntimeError("TrendingClient must be used as 'async with TrendingClient() as c'")

        await self._limiter.acquire()
        logger.debug(f"GET {url} params={params}")

        try:
            async with self._session.get(url, params=params) as resp:
                if resp.status >= 400:
                    await self._raise_for_status(resp, url)
                try:
                    payload = await resp.json(content_type=None)
                except ValueError as e:
                    raise MalformedResponseError(f"Upstream returned invalid JSON: {e}") from e
        except asyncio.TimeoutError as e:
            raise NetworkError(
                f"Timed out after {self._settings.request_timeout}s fetching {url}"
            ) from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        logger.debug(f"Response from {url} decoded")
        return payload

    async def _raise_for_status(self, resp: aiohttp.ClientResponse, url: str):
        reason = resp.reason or ""
        if resp.status in (403, 429):
            body_text = (await resp.text(errors="replace")).lower()
            if "rate limit" in body_text or "abuse" in body_text:
                retry_after_header = resp.headers.get("Retry-After")
                if retry_after_header:
                    try:
                        wait_seconds = int(retry_after_header)
                    except ValueError:
                        logger.error(f"Could not parse Retry-After header: {retry_after_header}")
                    else:
                        logger.warning(
                            f"GitHub rate limit detected. Will retry after {wait_seconds} seconds."
                        )
                        raise RateLimitedError(
                            resp.status, reason, url, retry_after=wait_seconds
                        )
                else:
                    logger.warning("GitHub rate limit detected, but no Retry-After header found.")

        logger.warning(f"Upstream {url} answered {resp.status} {reason}")
        raise UpstreamStatusError(resp.status, reason, url)
