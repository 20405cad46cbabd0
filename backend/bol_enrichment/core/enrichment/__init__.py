from .engine import BolFetcher, EnrichmentEngine, validate_company_id
from .batch import BatchEnricher
from .service import (
    batch_enrich_companies,
    clear_enrichment_cache,
    compute_kpis,
    enrich_company,
    get_engine,
    set_engine,
)

__all__ = [
    "BolFetcher",
    "EnrichmentEngine",
    "validate_company_id",
    "BatchEnricher",
    "batch_enrich_companies",
    "clear_enrichment_cache",
    "compute_kpis",
    "enrich_company",
    "get_engine",
    "set_engine",
]
