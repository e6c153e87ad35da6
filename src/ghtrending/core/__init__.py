from .aggregate import (
    by_developer,
    by_language,
    filter_by_language,
    language_color,
    language_repo_stars,
    sort_records,
)
from .pipeline import TrendingPipeline

__all__ = [
    "TrendingPipeline",
    "by_developer",
    "by_language",
    "filter_by_language",
    "language_color",
    "language_repo_stars",
    "sort_records",
]
