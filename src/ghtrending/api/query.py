from datetime import date

from dateutil.relativedelta import relativedelta

from ghtrending.models import ALL_LANGUAGES, TimeRange

_LOOKBACK = {
    TimeRange.DAILY: relativedelta(days=1),
    TimeRange.WEEKLY: relativedelta(weeks=1),
    TimeRange.MONTHLY: relativedelta(months=1),
}


def pushed_since(time_range: TimeRange, today: date | None = None) -> str:
    """Start of the window as ``yyyy-MM-dd``."""
    today = today or date.today()
    return (today - _LOOKBACK[TimeRange(time_range)]).strftime("%Y-%m-%d")


def build_search_query(
    time_range: TimeRange,
    language: str = ALL_LANGUAGES,
    *,
    min_stars: int = 1000,
    today: date | None = None,
) -> str:
    parts = [f"stars:>{min_stars}", f"pushed:>{pushed_since(time_range, today)}"]
    if language and language != ALL_LANGUAGES:
        parts.append(f"language:{language}")
    return " ".join(parts)


def build_search_params(
    time_range: TimeRange,
    language: str = ALL_LANGUAGES,
    *,
    min_stars: int = 1000,
    per_page: int = 50,
    today: date | None = None,
) -> dict[str, str]:
    return {
        "q": build_search_query(time_range, language, min_stars=min_stars, today=today),
        "sort": "stars",
        "order": "desc",
        "per_page": str(per_page),
    }


def build_trending_params(time_range: TimeRange, language: str = ALL_LANGUAGES) -> dict[str, str]:
    params = {"since": TimeRange(time_range).value}
    if language and language != ALL_LANGUAGES:
        params["lang"] = language
    return params
