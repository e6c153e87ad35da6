class FetchError(Exception):
    """Base class for everything that can go wrong while fetching trending data."""


class NetworkError(FetchError):
    """The transport failed (DNS, TLS, connection reset, timeout)."""


class UpstreamStatusError(FetchError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status: int, reason: str = "", url: str = ""):
        self.status = status
        self.reason = reason
        self.url = url
        super().__init__(f"Upstream returned {status} {reason}".rstrip())


class RateLimitedError(UpstreamStatusError):
    """GitHub secondary rate limit hit. Retry after ``retry_after`` seconds."""

    def __init__(self, status: int, reason: str = "", url: str = "", *, retry_after: int):
        self.retry_after = retry_after
        super().__init__(status, reason, url)


class MalformedResponseError(FetchError):
    """Upstream JSON is missing fields we need to build repository records."""
