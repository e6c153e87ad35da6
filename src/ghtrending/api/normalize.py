"""Map upstream payloads onto :class:`RepositoryRecord`.

Two payload shapes are understood:

* the trending feed, a JSON list of ``{repo, desc, stars, forks, change, lang, build_by}``
  items carrying real star deltas;
* the search API, ``{"items": [...]}`` of plain repositories with totals only.

:func:`decode_payload` picks the normalizer from the payload's shape.
"""
import math
from itertools import count
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError, field_validator

from ghtrending.models import Contributor, Owner, RepositoryRecord, TimeRange
from .errors import MalformedResponseError

GITHUB_URL = "https://github.com"

# The search API has no deltas, so new stars/forks are guessed as a share of the total.
ESTIMATE_RATIOS = {
    TimeRange.DAILY: 0.05,
    TimeRange.WEEKLY: 0.2,
    TimeRange.MONTHLY: 0.4,
}


def _to_int(value: Any) -> Any:
    # The feed renders counts like "1,234"
    if value is None:
        return 0
    if isinstance(value, str):
        return int(value.replace(",", "").strip() or 0)
    return value


class FeedBuilder(BaseModel):
    by: str
    avatar: str = ""


class FeedItem(BaseModel):
    repo: str
    desc: Optional[str] = None
    stars: int
    forks: int = 0
    change: int = 0
    lang: Optional[str] = None
    build_by: Optional[List[FeedBuilder]] = None

    @field_validator("stars", "forks", "change", mode="before")
    @classmethod
    def _parse_count(cls, value: Any) -> Any:
        return _to_int(value)


class SearchOwner(BaseModel):
    login: str
    avatar_url: str = ""


class SearchItem(BaseModel):
    id: int
    name: str
    full_name: str
    html_url: str
    description: Optional[str] = None
    owner: SearchOwner
    stargazers_count: int
    forks_count: int
    language: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""


class SearchResponse(BaseModel):
    items: List[SearchItem]


def estimate_delta(total: int, time_range: TimeRange) -> int:
    """``round(total * ratio)``, never below 1. A heuristic, not a measured delta."""
    ratio = ESTIMATE_RATIOS[TimeRange(time_range)]
    return max(1, math.floor(total * ratio + 0.5))


def normalize_trending_item(item: FeedItem, synthetic_id: int) -> RepositoryRecord:
    segments = [s for s in item.repo.split("/") if s]
    if len(segments) < 2:
        raise MalformedResponseError(f"Trending item has no owner/name path: {item.repo!r}")
    owner, name = segments[0], segments[-1]
    path = "/" + "/".join(segments)
    contributors = [
        Contributor(login=b.by.strip("/"), avatar_url=b.avatar) for b in item.build_by or []
    ]
    owner_avatar = next((c.avatar_url for c in contributors if c.login == owner), "")

    return RepositoryRecord(
        id=synthetic_id,
        name=name,
        full_name=f"{owner}/{name}",
        html_url=GITHUB_URL + path,
        description=item.desc,
        owner=Owner(login=owner, avatar_url=owner_avatar),
        stargazers_count=item.stars,
        forks_count=item.forks,
        new_stars=max(0, item.change),
        new_forks=0,  # the feed has no fork deltas
        total_stars=item.stars,
        total_forks=item.forks,
        language=item.lang or None,
        created_at="",
        updated_at="",
        contributors=contributors,
    )


def normalize_search_item(item: SearchItem, time_range: TimeRange) -> RepositoryRecord:
    return RepositoryRecord(
        id=item.id,
        name=item.name,
        full_name=item.full_name,
        html_url=item.html_url,
        description=item.description,
        owner=Owner(login=item.owner.login, avatar_url=item.owner.avatar_url),
        stargazers_count=item.stargazers_count,
        forks_count=item.forks_count,
        new_stars=estimate_delta(item.stargazers_count, time_range),
        new_forks=estimate_delta(item.forks_count, time_range),
        total_stars=item.stargazers_count,
        total_forks=item.forks_count,
        language=item.language,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def decode_trending_feed(payload: list) -> List[RepositoryRecord]:
    ids = count(1)  # stable within one batch, which is all the UI keys on
    try:
        items = [FeedItem.model_validate(raw) for raw in payload]
    except (ValidationError, ValueError) as e:
        raise MalformedResponseError(f"Malformed trending feed: {e}") from e
    return [normalize_trending_item(item, next(ids)) for item in items]


def decode_search_response(payload: dict, time_range: TimeRange) -> List[RepositoryRecord]:
    try:
        response = SearchResponse.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(f"Malformed search response: {e}") from e
    return [normalize_search_item(item, time_range) for item in response.items]


def decode_payload(payload: Any, time_range: TimeRange) -> List[RepositoryRecord]:
    if isinstance(payload, list):
        return decode_trending_feed(payload)
    if isinstance(payload, dict) and "items" in payload:
        return decode_search_response(payload, time_range)
    raise MalformedResponseError(
        f"Unrecognised upstream payload of type {type(payload).__name__}"
    )
