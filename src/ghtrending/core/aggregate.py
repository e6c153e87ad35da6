"""Chart-ready rollups over an already fetched list of repositories.

Everything here is pure: no I/O, and inputs are never mutated.
"""
from typing import Dict, List, Sequence

from ghtrending.models import (
    ALL_LANGUAGES,
    DeveloperRollup,
    LanguageBucket,
    RepositoryRecord,
)

TOP_N = 10
DEFAULT_COLOR = "#8b949e"

LANGUAGE_COLORS = {
    "JavaScript": "#f1e05a",
    "TypeScript": "#3178c6",
    "Python": "#3572A5",
    "Java": "#b07219",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "C++": "#f34b7d",
    "C": "#555555",
    "Ruby": "#701516",
    "PHP": "#4F5D95",
    "Swift": "#F05138",
    "Kotlin": "#A97BFF",
    "Dart": "#00B4AB",
    "Vue": "#41b883",
    "HTML": "#e34c26",
    "CSS": "#563d7c",
}

SORT_KEYS = {
    "stars": lambda r: r.stargazers_count,
    "forks": lambda r: r.forks_count,
    "new_stars": lambda r: r.new_stars,
    "new_forks": lambda r: r.new_forks,
    "name": lambda r: r.full_name.lower(),
    "updated_at": lambda r: r.updated_at,
}


def language_color(language: str | None) -> str:
    return LANGUAGE_COLORS.get(language or "", DEFAULT_COLOR)


def filter_by_language(
    records: Sequence[RepositoryRecord], language: str
) -> List[RepositoryRecord]:
    if language == ALL_LANGUAGES:
        return list(records)
    return [r for r in records if r.language == language]


def by_language(records: Sequence[RepositoryRecord]) -> List[LanguageBucket]:
    """Sum ``new_stars`` per language, top 10 by stars.

    Records without a language are skipped. ``sorted`` is stable, so equal
    sums keep first-seen order.
    """
    buckets: Dict[str, LanguageBucket] = {}
    for repo in records:
        if not repo.language:
            continue
        bucket = buckets.get(repo.language)
        if bucket is None:
            bucket = buckets[repo.language] = LanguageBucket(
                name=repo.language, stars=0, repos=0, color=language_color(repo.language)
            )
        bucket.stars += repo.new_stars
        bucket.repos += 1

    return sorted(buckets.values(), key=lambda b: b.stars, reverse=True)[:TOP_N]


def language_repo_stars(
    records: Sequence[RepositoryRecord], language: str
) -> List[LanguageBucket]:
    """Bars for the language chart: per-language totals for ``all``, else the top repos of one language."""
    if language == ALL_LANGUAGES:
        return by_language(records)

    color = language_color(language)
    bars = [
        LanguageBucket(name=r.name, stars=r.new_stars, repos=1, color=color)
        for r in filter_by_language(records, language)
    ]
    return sorted(bars, key=lambda b: b.stars, reverse=True)[:TOP_N]


def by_developer(records: Sequence[RepositoryRecord]) -> List[DeveloperRollup]:
    rollups: Dict[str, DeveloperRollup] = {}
    for repo in records:
        login = repo.owner.login
        rollup = rollups.get(login)
        if rollup is None:
            rollup = rollups[login] = DeveloperRollup(
                login=login,
                avatar_url=repo.owner.avatar_url,
                total_stars=0,
                total_repos=0,
                top_repos=[],
            )
        rollup.total_stars += repo.stargazers_count
        rollup.total_repos += 1
        rollup.top_repos.append(repo)

    return sorted(rollups.values(), key=lambda d: d.total_stars, reverse=True)[:TOP_N]


def sort_records(
    records: Sequence[RepositoryRecord], key: str = "stars", descending: bool = True
) -> List[RepositoryRecord]:
    try:
        sort_key = SORT_KEYS[key]
    except KeyError:
        raise ValueError(f"Unknown sort key {key!r}; expected one of {sorted(SORT_KEYS)}") from None
    return sorted(records, key=sort_key, reverse=descending)
