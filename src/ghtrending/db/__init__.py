from .engine import make_engine, make_session_factory
from .models import Base, CacheRow

__all__ = ["Base", "CacheRow", "make_engine", "make_session_factory"]
