from .backends import KeyValueBackend, MemoryBackend, RedisBackend, StorageError
from .store import ExpiringStore, utcnow
from .manager import EnrichmentCache, build_cache

__all__ = [
    "KeyValueBackend",
    "MemoryBackend",
    "RedisBackend",
    "StorageError",
    "ExpiringStore",
    "utcnow",
    "EnrichmentCache",
    "build_cache",
]
