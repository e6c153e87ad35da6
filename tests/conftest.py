import pytest

from ghtrending.cache import CacheStore, MemoryBackend, SqlBackend
from ghtrending.config import Settings
from ghtrending.models import ALL_LANGUAGES, TimeRange

from fixtures import make_record


class FakeClock:
    """Epoch-milliseconds clock the tests move by hand."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


class FakeClient:
    """Stands in for TrendingClient; records every upstream call."""

    def __init__(self, records=None, error: Exception | None = None):
        self.records = records if records is not None else [make_record()]
        self.error = error
        self.calls: list[tuple[TimeRange, str]] = []

    async def fetch(self, time_range, language=ALL_LANGUAGES):
        self.calls.append((time_range, language))
        if self.error is not None:
            raise self.error
        return list(self.records)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def memory_backend():
    return MemoryBackend()


@pytest.fixture()
def store(memory_backend, clock):
    return CacheStore(memory_backend, clock=clock)


@pytest.fixture()
def sql_backend():
    return SqlBackend.from_url("sqlite://")


@pytest.fixture()
def make_settings():
    def factory(**overrides) -> Settings:
        values = {"github_token": "", "cache_db_url": ""}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return factory


@pytest.fixture()
def fake_client():
    return FakeClient()
