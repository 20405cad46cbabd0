"""ExpiringStore: one cache tier with TTL-based expiry.

Used twice: once over a MemoryBackend holding live objects, once over a
persisted backend holding JSON. Expired entries are removed on read.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from pydantic import ValidationError

from bol_enrichment.schemas.enrichment import CacheEntry
from .backends import KeyValueBackend, StorageError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExpiringStore:
    """Namespaced CacheEntry store over any KeyValueBackend."""

    def __init__(
        self,
        backend: KeyValueBackend,
        namespace: str = "",
        serialize: bool = False,
        clock: Clock | None = None,
        name: str = "memory",
    ):
        self.backend = backend
        self.namespace = namespace
        self.serialize = serialize
        self.clock = clock or utcnow
        self.name = name

    def key_for(self, company_id: str) -> str:
        return f"{self.namespace}{company_id}"

    async def get(self, company_id: str) -> CacheEntry | None:
        """Return a live entry, or None when absent or expired."""
        key = self.key_for(company_id)
        stored = await self.backend.get(key)
        if stored is None:
            return None

        entry = self._decode(key, stored)
        if entry is None:
            await self.backend.delete(key)
            raise StorageError(f"{self.name} tier holds an unreadable entry at {key}")

        if entry.is_expired(self.clock()):
            logger.info(f"{self.name} cache entry expired: {key}")
            await self.backend.delete(key)
            return None
        return entry

    async def put(self, company_id: str, entry: CacheEntry) -> None:
        value = entry.model_dump_json() if self.serialize else entry
        await self.backend.set(self.key_for(company_id), value)

    async def remove(self, company_id: str) -> None:
        await self.backend.delete(self.key_for(company_id))

    async def clear(self) -> int:
        """Remove every key under this store's namespace. Returns the count."""
        keys = await self.backend.keys(self.namespace)
        for key in keys:
            await self.backend.delete(key)
        return len(keys)

    def _decode(self, key: str, stored) -> CacheEntry | None:
        if not self.serialize:
            return stored if isinstance(stored, CacheEntry) else None
        try:
            return CacheEntry.model_validate_json(stored)
        except ValidationError as e:
            logger.warning(f"Discarding corrupt {self.name} cache entry {key}: {e}")
            return None
