"""Two-tier enrichment cache: process memory first, persisted store second.

Tiers are independent. A memory miss can still hit the persisted tier
(which then re-warms memory), and a failing persisted tier only costs a
warning: memory stays authoritative for the life of the process.
"""

import logging
from datetime import timedelta

from bol_enrichment.config import settings
from bol_enrichment.schemas.enrichment import CacheEntry, EnrichmentResult
from .backends import MemoryBackend, RedisBackend, StorageError
from .store import Clock, ExpiringStore, utcnow

logger = logging.getLogger(__name__)


class EnrichmentCache:
    """Compose a memory ExpiringStore and a persisted ExpiringStore."""

    def __init__(
        self,
        memory: ExpiringStore,
        persisted: ExpiringStore,
        ttl: timedelta | None = None,
        clock: Clock | None = None,
    ):
        self.memory = memory
        self.persisted = persisted
        self.ttl = ttl or timedelta(days=settings.CACHE_TTL_DAYS)
        self.clock = clock or utcnow

    async def get(self, company_id: str) -> EnrichmentResult | None:
        """Return a cached result from the first tier holding a live entry."""
        entry = await self._tier_get(self.memory, company_id)
        if entry is not None:
            return entry.data

        entry = await self._tier_get(self.persisted, company_id)
        if entry is not None:
            logger.info(f"Persisted cache hit for {company_id}; warming memory tier")
            await self._tier_put(self.memory, company_id, entry)
            return entry.data

        return None

    async def put(self, company_id: str, result: EnrichmentResult) -> CacheEntry:
        """Write to both tiers with one fresh timestamp."""
        entry = CacheEntry(data=result, created_at=self.clock(), ttl=self.ttl)
        await self._tier_put(self.memory, company_id, entry)
        await self._tier_put(self.persisted, company_id, entry)
        return entry

    async def clear(self) -> None:
        """Empty memory and drop every namespaced persisted entry."""
        for tier in (self.memory, self.persisted):
            try:
                removed = await tier.clear()
                logger.info(f"Cleared {removed} {tier.name} cache entries")
            except StorageError as e:
                logger.warning(f"Failed to clear {tier.name} cache: {e}")

    async def _tier_get(self, tier: ExpiringStore, company_id: str) -> CacheEntry | None:
        try:
            return await tier.get(company_id)
        except StorageError as e:
            logger.warning(f"Failed to read {tier.name} cache for {company_id}: {e}")
            return None

    async def _tier_put(self, tier: ExpiringStore, company_id: str, entry: CacheEntry) -> None:
        try:
            await tier.put(company_id, entry)
        except StorageError as e:
            logger.warning(f"Failed to save {company_id} to {tier.name} cache: {e}")


def build_cache(clock: Clock | None = None) -> EnrichmentCache:
    """Cache wired from settings: Redis when REDIS_URL is set, else in-process."""
    if settings.REDIS_URL:
        persisted_backend = RedisBackend.from_url(settings.REDIS_URL)
    else:
        logger.warning("REDIS_URL not set; persisted cache tier is in-process only")
        persisted_backend = MemoryBackend()

    return EnrichmentCache(
        memory=ExpiringStore(MemoryBackend(), clock=clock, name="memory"),
        persisted=ExpiringStore(
            persisted_backend,
            namespace=settings.CACHE_NAMESPACE,
            serialize=True,
            clock=clock,
            name="persisted",
        ),
        clock=clock,
    )
