"""Batch enrichment, strictly sequential, with a pause between companies.

The gateway publishes no concurrency limit, so companies are enriched one
at a time with a small delay in between rather than fanned out. A failure
for one company is recorded as None and the batch moves on.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence

from bol_enrichment.config import settings
from bol_enrichment.schemas.enrichment import EnrichmentResult
from .engine import EnrichmentEngine

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class BatchEnricher:
    """Enrich a list of companies in order, reporting progress."""

    def __init__(
        self,
        engine: EnrichmentEngine,
        delay_seconds: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.engine = engine
        self.delay_seconds = (
            settings.BATCH_DELAY_SECONDS if delay_seconds is None else delay_seconds
        )
        self._sleep = sleep

    async def stream(
        self, company_ids: Sequence[str]
    ) -> AsyncIterator[tuple[str, EnrichmentResult | None]]:
        """Yield (company_id, result) as each company completes.

        Stopping iteration stops the batch before the next company starts.
        """
        total = len(company_ids)
        for i, company_id in enumerate(company_ids):
            try:
                result = await self.engine.enrich_company(company_id)
            except Exception as e:
                logger.warning(f"  {company_id}: enrichment failed ({e})")
                result = None

            yield company_id, result

            if i < total - 1:
                await self._sleep(self.delay_seconds)

    async def run(
        self,
        company_ids: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> dict[str, EnrichmentResult | None]:
        """Enrich every company; the mapping preserves input order."""
        total = len(company_ids)
        results: dict[str, EnrichmentResult | None] = {}
        completed = 0

        logger.info(f"Batch enrichment: {total} companies")
        async for company_id, result in self.stream(company_ids):
            results[company_id] = result
            completed += 1
            if on_progress:
                on_progress(completed, total)

        enriched = sum(1 for r in results.values() if r is not None)
        logger.info(f"Batch enrichment complete: {enriched}/{total} enriched")
        return results
