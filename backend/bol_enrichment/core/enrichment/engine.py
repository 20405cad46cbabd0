"""Enrichment engine — turns a company's BOL rows into KPIs and aggregates.

Flow for one company:
cache (memory → persisted) → [miss] one bounded gateway fetch →
normalize → calculators + aggregators → EnrichmentResult → cache both tiers.

"No data" is a normal outcome and comes back as None. Upstream failures
are logged and also come back as None; only caller mistakes (a malformed
company id) raise.
"""

import logging
from collections.abc import Sequence
from datetime import date
from typing import Any, Protocol

from bol_enrichment.config import settings
from bol_enrichment.core.aggregation import RegionalAggregator, TradeLaneAggregator
from bol_enrichment.core.cache import EnrichmentCache, build_cache, utcnow
from bol_enrichment.core.cache.store import Clock
from bol_enrichment.core.metrics import (
    build_monthly_volume,
    count_container_classes,
    determine_primary_mode,
    determine_shipment_trend,
    estimate_total_teu,
    last_shipment_date,
    monthly_shipment_series,
    top_ports,
    total_shipment_count,
)
from bol_enrichment.core.normalization import ShipmentNormalizer
from bol_enrichment.schemas.enrichment import EnrichmentResult, KpiView, NormalizedShipment

logger = logging.getLogger(__name__)


class BolFetcher(Protocol):
    async def fetch_company_bols(
        self,
        company_id: str,
        limit: int,
        offset: int = 0,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> dict[str, Any]: ...


def validate_company_id(company_id: Any) -> str:
    if not isinstance(company_id, str) or not company_id.strip():
        raise ValueError(f"Invalid company identifier: {company_id!r}")
    return company_id.strip()


class EnrichmentEngine:
    """Build and cache per-company enrichment results."""

    def __init__(
        self,
        fetcher: BolFetcher | None = None,
        cache: EnrichmentCache | None = None,
        normalizer: ShipmentNormalizer | None = None,
        clock: Clock | None = None,
    ):
        if fetcher is None:
            from bol_enrichment.core.gateway import GatewayClient
            fetcher = GatewayClient()
        self.fetcher = fetcher
        self.clock = clock or utcnow
        self.cache = cache or build_cache(self.clock)
        self.normalizer = normalizer or ShipmentNormalizer()
        self.lane_aggregator = TradeLaneAggregator()
        self.region_aggregator = RegionalAggregator()

    async def enrich_company(self, company_id: str) -> EnrichmentResult | None:
        """Cache-aware enrichment for one company."""
        company_id = validate_company_id(company_id)

        cached = await self.cache.get(company_id)
        if cached is not None:
            return cached

        rows = await self._fetch_rows(company_id, limit=settings.ENRICHMENT_BOL_LIMIT)
        if rows is None:
            return None

        shipments = self.normalizer.normalize_all(rows)
        result = self.build_result(company_id, shipments)

        await self.cache.put(company_id, result)
        logger.info(
            f"Enriched {company_id}: {result.shipment_count} shipments, "
            f"{result.teu_estimate} TEU ({result.teu_basis}), "
            f"{len(result.lanes)} lanes, trend={result.trend}"
        )
        return result

    async def compute_kpis(self, company_id: str) -> KpiView | None:
        """Dashboard-tile projection: no lanes or regions, not cached."""
        company_id = validate_company_id(company_id)

        today = self.clock().date()
        rows = await self._fetch_rows(
            company_id,
            limit=settings.KPI_BOL_LIMIT,
            start_date=settings.KPI_HISTORY_START,
            end_date=today,
        )
        if rows is None:
            return None

        shipments = self.normalizer.normalize_all(rows)
        return self.build_kpis(company_id, shipments, today)

    async def clear_cache(self) -> None:
        await self.cache.clear()

    def build_result(
        self, company_id: str, shipments: Sequence[NormalizedShipment]
    ) -> EnrichmentResult:
        teu, teu_basis = estimate_total_teu(shipments)
        fcl, lcl = count_container_classes(shipments)

        return EnrichmentResult(
            company_id=company_id,
            teu_estimate=teu,
            teu_basis=teu_basis,
            fcl_count=fcl,
            lcl_count=lcl,
            primary_mode=determine_primary_mode(shipments),
            trend=determine_shipment_trend(monthly_shipment_series(shipments)),
            shipment_count=total_shipment_count(shipments),
            lanes=self.lane_aggregator.aggregate(shipments),
            regions=self.region_aggregator.aggregate(shipments),
            enriched_at=self.clock(),
        )

    def build_kpis(
        self,
        company_id: str,
        shipments: Sequence[NormalizedShipment],
        today: date,
    ) -> KpiView:
        teu, teu_basis = estimate_total_teu(shipments)
        fcl, lcl = count_container_classes(shipments)

        return KpiView(
            company_id=company_id,
            teu=teu,
            teu_basis=teu_basis,
            fcl_count=fcl,
            lcl_count=lcl,
            trend=determine_shipment_trend(monthly_shipment_series(shipments)),
            top_origin_ports=top_ports(shipments, "origin_port"),
            top_destination_ports=top_ports(shipments, "destination_port"),
            monthly_volume=build_monthly_volume(shipments, today),
            last_shipment_date=last_shipment_date(shipments),
            shipment_count=total_shipment_count(shipments),
            computed_at=self.clock(),
        )

    async def _fetch_rows(self, company_id: str, **params) -> list[Any] | None:
        """One bounded fetch. None means there is nothing to compute on."""
        try:
            response = await self.fetcher.fetch_company_bols(company_id, offset=0, **params)
        except Exception as e:
            logger.error(f"BOL fetch failed for {company_id}: {e}")
            return None

        if not isinstance(response, dict) or not response.get("ok"):
            logger.warning(f"Gateway returned no usable response for {company_id}")
            return None

        rows = response.get("rows")
        if not isinstance(rows, list) or not rows:
            logger.info(f"No BOL data available for {company_id}")
            return None
        return rows
