"""Enrichment API routes — company KPIs, lanes and regions for the CRM views.

A null enrichment is a valid answer ("not enough data") and is returned
with a 200; the front end shows its placeholder state for it.
"""

from fastapi import APIRouter, Depends, HTTPException

from bol_enrichment.core.enrichment import BatchEnricher, EnrichmentEngine, get_engine
from bol_enrichment.schemas.enrichment import BatchEnrichRequest

router = APIRouter(prefix="/enrichment", tags=["Enrichment"])


@router.get("/companies/{company_id:path}")
async def get_company_enrichment(
    company_id: str,
    engine: EnrichmentEngine = Depends(get_engine),
):
    """Enrichment for one company (cache-aware)."""
    try:
        result = await engine.enrich_company(company_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"company_id": company_id, "enrichment": result}


@router.post("/batch")
async def batch_enrich(
    req: BatchEnrichRequest,
    engine: EnrichmentEngine = Depends(get_engine),
):
    """Enrich several companies sequentially."""
    results = await BatchEnricher(engine).run(req.company_ids)
    return {
        "total": len(req.company_ids),
        "enriched": sum(1 for r in results.values() if r is not None),
        "results": results,
    }


@router.delete("/cache")
async def clear_cache(engine: EnrichmentEngine = Depends(get_engine)):
    """Drop every cached enrichment result (memory and persisted)."""
    await engine.clear_cache()
    return {"status": "cleared"}
