"""Logistic Intel Shipment Enrichment — FastAPI Application.

Derives shipment KPIs (TEU, FCL/LCL mix, trend, trade lanes, regional
breakdown) for companies from their bill-of-lading records, with a
30-day two-tier cache so repeat views never re-fetch.
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bol_enrichment.api.routes import enrichment, kpis
from bol_enrichment.config import settings
from bol_enrichment.core.cache import RedisBackend
from bol_enrichment.core.enrichment import get_engine

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = get_engine()
    logger.info(
        f"Enrichment engine ready (cache TTL {settings.CACHE_TTL_DAYS}d, "
        f"persisted tier: {'redis' if settings.REDIS_URL else 'in-process'})"
    )
    yield
    backend = engine.cache.persisted.backend
    if isinstance(backend, RedisBackend):
        await backend.close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Shipment enrichment and KPI aggregation over bill-of-lading data: "
        "TEU volume, FCL/LCL mix, trade lanes, regional breakdowns and trends."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(enrichment.router, prefix="/api/v1")
app.include_router(kpis.router, prefix="/api/v1")


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "operational",
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}
