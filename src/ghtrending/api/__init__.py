from .errors import (
    FetchError,
    MalformedResponseError,
    NetworkError,
    RateLimitedError,
    UpstreamStatusError,
)
from .github_client import TrendingClient

__all__ = [
    "FetchError",
    "MalformedResponseError",
    "NetworkError",
    "RateLimitedError",
    "TrendingClient",
    "UpstreamStatusError",
]
