from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App-wide configuration pulled from environment variables or .env."""

    # GitHub
    github_token: str = ""
    trending_endpoint: str = "https://github-trending-iota.vercel.app/repo"
    search_endpoint: str = "https://api.github.com/search/repositories"
    source: Literal["trending", "search"] = "trending"
    request_timeout: float = 10.0

    # Search query
    min_stars: int = 1000
    per_page: int = 50

    # Cache (empty url -> no persistence, every lookup misses)
    cache_db_url: str = ""

    # Rate-limit bucket (GitHub search allows 30 requests/minute with a token)
    bucket_capacity: int = 10
    bucket_refill_per_min: int = 30
    rate_limit_attempts: int = 3

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def has_token(self) -> bool:
        return bool(self.github_token.strip())


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    return Settings()
