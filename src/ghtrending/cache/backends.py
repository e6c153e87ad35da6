"""Key-value media the cache store can sit on.

The medium is optional: when none is reachable the store falls back to
:class:`NullBackend` and every lookup simply misses.
"""
import logging
from typing import Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ghtrending.config import Settings
from ghtrending.db import dal
from ghtrending.db.engine import make_engine, make_session_factory

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class NullBackend:
    """Medium for contexts without persistence: reads miss, writes vanish."""

    def get(self, key: str) -> Optional[str]:
        return None

    def set(self, key: str, value: str) -> None:
        pass

    def remove(self, key: str) -> None:
        pass


class MemoryBackend:
    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class SqlBackend:
    """Stores values in the ``cache_entries`` table."""

    def __init__(self, session_factory: sessionmaker):
        self._sessions = session_factory

    @classmethod
    def from_url(cls, url: str) -> "SqlBackend":
        return cls(make_session_factory(make_engine(url)))

    def ping(self) -> None:
        dal.ping(self._sessions)

    def get(self, key: str) -> Optional[str]:
        return dal.get_value(self._sessions, key)

    def set(self, key: str, value: str) -> None:
        dal.set_value(self._sessions, key, value)

    def remove(self, key: str) -> None:
        dal.remove_value(self._sessions, key)


def probe_backend(settings: Settings) -> KeyValueBackend:
    """Return the configured medium, or a NullBackend when it is absent or unreachable."""
    if not settings.cache_db_url:
        logger.info("No cache database configured; caching disabled.")
        return NullBackend()
    try:
        backend = SqlBackend.from_url(settings.cache_db_url)
        backend.ping()
    except (SQLAlchemyError, ImportError) as e:
        logger.warning(f"Cache database unavailable ({e}); caching disabled.")
        return NullBackend()
    return backend
