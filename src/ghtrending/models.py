from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

ALL_LANGUAGES = "all"

# Filters offered to the presentation layer; any other label is still accepted.
KNOWN_LANGUAGES = [
    "JavaScript",
    "TypeScript",
    "Python",
    "Go",
    "Swift",
    "Rust",
    "Java",
    "Kotlin",
]


class TimeRange(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Owner(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str
    avatar_url: str = ""


class Contributor(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str
    avatar_url: str = ""


class RepositoryRecord(BaseModel):
    """One repository as shown in the trending table.

    ``stargazers_count``/``forks_count`` are cumulative totals, ``new_stars``/
    ``new_forks`` only cover the requested time range.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    full_name: str
    html_url: str
    description: Optional[str] = None
    owner: Owner
    stargazers_count: int = Field(ge=0)
    forks_count: int = Field(ge=0)
    new_stars: int = Field(ge=0)
    new_forks: int = Field(ge=0)
    total_stars: int = Field(ge=0)
    total_forks: int = Field(ge=0)
    language: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""
    contributors: List[Contributor] = Field(default_factory=list)


class CacheEntry(BaseModel):
    items: List[RepositoryRecord]
    timestamp: int  # epoch milliseconds


class LanguageBucket(BaseModel):
    name: str
    stars: int
    repos: int
    color: str = "#8b949e"


class DeveloperRollup(BaseModel):
    login: str
    avatar_url: str
    total_stars: int
    total_repos: int
    top_repos: List[RepositoryRecord]
