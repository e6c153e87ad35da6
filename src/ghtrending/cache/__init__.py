from .backends import KeyValueBackend, MemoryBackend, NullBackend, SqlBackend, probe_backend
from .store import CACHE_DURATION, CacheStore, cache_key

__all__ = [
    "CACHE_DURATION",
    "CacheStore",
    "KeyValueBackend",
    "MemoryBackend",
    "NullBackend",
    "SqlBackend",
    "cache_key",
    "probe_backend",
]
