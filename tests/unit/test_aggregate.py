import pytest

from ghtrending.core import (
    by_developer,
    by_language,
    filter_by_language,
    language_color,
    language_repo_stars,
    sort_records,
)

from fixtures import make_record


@pytest.fixture()
def records():
    return [
        make_record("rust-lang/rust", id=1, language="Rust", stars=90000, new_stars=300),
        make_record("torvalds/linux", id=2, language="C", stars=180000, new_stars=120),
        make_record("astral-sh/uv", id=3, language="Rust", stars=45000, new_stars=800),
        make_record("psf/requests", id=4, language="Python", stars=50000, new_stars=20),
        make_record("someone/notes", id=5, language=None, stars=10, new_stars=999),
        make_record("someone/blank", id=6, language="", stars=10, new_stars=999),
        make_record("astral-sh/ruff", id=7, language="Rust", stars=30000, new_stars=600),
    ]


def test_by_language_sums_new_stars(records):
    buckets = by_language(records)

    assert [(b.name, b.stars, b.repos) for b in buckets] == [
        ("Rust", 1700, 3),
        ("C", 120, 1),
        ("Python", 20, 1),
    ]
    assert buckets[0].color == language_color("Rust")


def test_by_language_skips_missing_languages(records):
    names = [b.name for b in by_language(records)]
    assert None not in names
    assert "" not in names


def test_by_language_keeps_first_seen_order_on_ties():
    records = [
        make_record("a/x", language="Go", new_stars=10),
        make_record("b/y", language="Zig", new_stars=10),
        make_record("c/z", language="Elm", new_stars=10),
    ]
    assert [b.name for b in by_language(records)] == ["Go", "Zig", "Elm"]


def test_by_language_top_ten():
    records = [
        make_record(f"o/r{i}", id=i, language=f"Lang{i}", new_stars=i) for i in range(15)
    ]
    buckets = by_language(records)

    assert len(buckets) == 10
    assert [b.stars for b in buckets] == list(range(14, 4, -1))


def test_by_developer(records):
    rollups = by_developer(records)

    assert [d.login for d in rollups] == ["torvalds", "rust-lang", "astral-sh", "psf", "someone"]
    astral = rollups[2]
    assert astral.total_stars == 75000
    assert astral.total_repos == 2
    assert [r.full_name for r in astral.top_repos] == ["astral-sh/uv", "astral-sh/ruff"]
    assert sum(d.total_repos for d in rollups) == len(records)


def test_by_developer_top_ten_sorted():
    records = [make_record(f"dev{i}/repo", id=i, stars=i * 100) for i in range(12)]
    rollups = by_developer(records)

    assert len(rollups) == 10
    stars = [d.total_stars for d in rollups]
    assert stars == sorted(stars, reverse=True)
    assert rollups[0].login == "dev11"


def test_by_developer_uses_owner_avatar():
    [rollup] = by_developer([make_record("octo/cat", avatar_url="o.png")])
    assert rollup.avatar_url == "o.png"


def test_filter_by_language(records):
    assert filter_by_language(records, "all") == records
    rust = filter_by_language(records, "Rust")
    assert {r.full_name for r in rust} == {"rust-lang/rust", "astral-sh/uv", "astral-sh/ruff"}
    assert filter_by_language(records, "rust") == []


def test_language_repo_stars_for_one_language(records):
    bars = language_repo_stars(records, "Rust")
    assert [(b.name, b.stars) for b in bars] == [("uv", 800), ("ruff", 600), ("rust", 300)]
    assert {b.color for b in bars} == {"#dea584"}


def test_language_repo_stars_for_all_is_by_language(records):
    assert language_repo_stars(records, "all") == by_language(records)


def test_language_color_default():
    assert language_color("Brainfuck") == "#8b949e"
    assert language_color(None) == "#8b949e"


def test_sort_records(records):
    by_new = sort_records(records, "new_stars")
    assert [r.new_stars for r in by_new][:3] == [999, 999, 800]

    by_name = sort_records(records, "name", descending=False)
    assert by_name[0].full_name == "astral-sh/ruff"


def test_sort_records_unknown_key(records):
    with pytest.raises(ValueError):
        sort_records(records, "watchers")


def test_aggregates_do_not_mutate_input(records):
    before = [r.model_copy() for r in records]
    by_language(records)
    by_developer(records)
    assert records == before
