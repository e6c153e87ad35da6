from .models import (
    ALL_LANGUAGES,
    CacheEntry,
    Contributor,
    DeveloperRollup,
    LanguageBucket,
    Owner,
    RepositoryRecord,
    TimeRange,
)

__all__ = [
    "ALL_LANGUAGES",
    "CacheEntry",
    "Contributor",
    "DeveloperRollup",
    "LanguageBucket",
    "Owner",
    "RepositoryRecord",
    "TimeRange",
]
