"""KPI routes: the thin projection behind dashboard tiles."""

from fastapi import APIRouter, Depends, HTTPException

from bol_enrichment.core.enrichment import EnrichmentEngine, get_engine

router = APIRouter(prefix="/kpis", tags=["KPIs"])


@router.get("/companies/{company_id:path}")
async def get_company_kpis(
    company_id: str,
    engine: EnrichmentEngine = Depends(get_engine),
):
    """TEU, FCL/LCL, trend, top ports and 12 monthly buckets for one company."""
    try:
        kpis = await engine.compute_kpis(company_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"company_id": company_id, "kpis": kpis}
