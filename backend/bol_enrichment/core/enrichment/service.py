"""Public enrichment operations used by the rest of the application.

A single process-wide engine backs these functions, so the memory cache
tier is shared by every caller in the process.
"""

from bol_enrichment.schemas.enrichment import EnrichmentResult, KpiView
from .batch import BatchEnricher, ProgressCallback
from .engine import EnrichmentEngine

_engine: EnrichmentEngine | None = None


def get_engine() -> EnrichmentEngine:
    global _engine
    if _engine is None:
        _engine = EnrichmentEngine()
    return _engine


def set_engine(engine: EnrichmentEngine | None) -> None:
    """Swap the process-wide engine (None resets to lazy construction)."""
    global _engine
    _engine = engine


async def enrich_company(company_id: str) -> EnrichmentResult | None:
    return await get_engine().enrich_company(company_id)


async def batch_enrich_companies(
    company_ids: list[str],
    on_progress: ProgressCallback | None = None,
) -> dict[str, EnrichmentResult | None]:
    return await BatchEnricher(get_engine()).run(company_ids, on_progress)


async def compute_kpis(company_id: str) -> KpiView | None:
    return await get_engine().compute_kpis(company_id)


async def clear_enrichment_cache() -> None:
    await get_engine().clear_cache()
