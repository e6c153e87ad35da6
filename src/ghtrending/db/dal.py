"""High‑level, sync helpers around SQLAlchemy session.

These keep SQL in **one place** so the cache backend only deals in keys and strings.
"""
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import delete, select, text
from sqlalchemy.orm import Session, sessionmaker

from .models import CacheRow

@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

def ping(session_factory: sessionmaker) -> None:
    """Raise if the database cannot answer a trivial query."""
    with session_scope(session_factory) as s:
        s.execute(text("SELECT 1"))

def get_value(session_factory: sessionmaker, key: str) -> str | None:
    with session_scope(session_factory) as s:
        return s.execute(select(CacheRow.value).where(CacheRow.key == key)).scalar_one_or_none()

def set_value(session_factory: sessionmaker, key: str, value: str) -> None:
    """Insert a new row or overwrite the value of an existing one."""
    with session_scope(session_factory) as s:
        s.merge(CacheRow(key=key, value=value))

def remove_value(session_factory: sessionmaker, key: str) -> None:
    with session_scope(session_factory) as s:
        s.execute(delete(CacheRow).where(CacheRow.key == key))
