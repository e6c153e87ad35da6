import asyncio
import json
import logging

import typer

from ghtrending.api import FetchError, TrendingClient
from ghtrending.cache import CacheStore, cache_key, probe_backend
from ghtrending.config import get_settings
from ghtrending.core import TrendingPipeline, language_repo_stars, sort_records
from ghtrending.core.aggregate import SORT_KEYS
from ghtrending.models import ALL_LANGUAGES, KNOWN_LANGUAGES, TimeRange

app = typer.Typer(help="GitHub trending repositories, cached for an hour.")

LANG_HELP = f"Language filter: {ALL_LANGUAGES} or a label such as {', '.join(KNOWN_LANGUAGES)}."


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging.")):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)


def _run(coro_factory):
    """Open a client, build the pipeline and run ``coro_factory(pipeline)``."""
    settings = get_settings()
    store = CacheStore(probe_backend(settings))

    async def runner():
        async with TrendingClient(settings) as client:
            return await coro_factory(TrendingPipeline(client, store))

    try:
        return asyncio.run(runner())
    except FetchError as e:
        typer.echo(f"Failed to fetch trending repositories: {e}", err=True)
        raise typer.Exit(code=1)


def _dump(models) -> str:
    return json.dumps([m.model_dump() for m in models], indent=2)


@app.command()
def repos(
    since: TimeRange = TimeRange.DAILY,
    lang: str = typer.Option(ALL_LANGUAGES, help=LANG_HELP),
    sort: str = typer.Option("new_stars", help="stars, forks, new_stars, new_forks, name, updated_at"),
    as_json: bool = typer.Option(False, "--json"),
):
    """List trending repositories."""
    if sort not in SORT_KEYS:
        raise typer.BadParameter(f"expected one of {sorted(SORT_KEYS)}", param_hint="--sort")
    records = sort_records(_run(lambda p: p.fetch_trending_repos(since, lang)), sort)

    if as_json:
        typer.echo(_dump(records))
        return
    for r in records:
        typer.echo(
            f"{r.full_name:<45} {r.language or '-':<12} "
            f"★ {r.stargazers_count:>8,} (+{r.new_stars:,})  ⑂ {r.forks_count:>7,}"
        )


@app.command()
def languages(
    since: TimeRange = TimeRange.DAILY,
    lang: str = typer.Option(ALL_LANGUAGES, help=LANG_HELP),
    as_json: bool = typer.Option(False, "--json"),
):
    """New stars per language (or per repository of one language)."""
    records = _run(lambda p: p.fetch_trending_repos(since, lang))
    bars = language_repo_stars(records, lang)

    if as_json:
        typer.echo(_dump(bars))
        return
    for b in bars:
        typer.echo(f"{b.name:<30} +{b.stars:<8,} {b.repos} repos")


@app.command()
def developers(
    since: TimeRange = TimeRange.DAILY,
    as_json: bool = typer.Option(False, "--json"),
):
    """Top repository owners by total stars."""
    rollups = _run(lambda p: p.fetch_top_developers(since))

    if as_json:
        typer.echo(_dump(rollups))
        return
    for d in rollups:
        typer.echo(f"{d.login:<30} ★ {d.total_stars:>9,}  {d.total_repos} repos")


@app.command("cache-clear")
def cache_clear(
    since: TimeRange = TimeRange.DAILY,
    lang: str = typer.Option(ALL_LANGUAGES, help=LANG_HELP),
):
    """Drop the cached result for one time range / language."""
    key = cache_key(since, lang)
    CacheStore(probe_backend(get_settings())).clear(key)
    typer.echo(f"Cleared {key}")


if __name__ == "__main__":
    app()
