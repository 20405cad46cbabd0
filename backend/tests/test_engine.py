"""
End-to-end tests for EnrichmentEngine against a scripted fetcher.

Covers the cache contract (idempotent reads within the TTL, recompute
after expiry), the null-result paths, and the KPI projection.
"""

from __future__ import annotations

import asyncio
from datetime import date, timedelta

import pytest

from bol_enrichment.core.cache import MemoryBackend
from bol_enrichment.core.enrichment import EnrichmentEngine
from bol_enrichment.core.gateway import GatewayAPIError
from bol_enrichment.schemas.enrichment import Region
from conftest import FakeFetcher, make_cache, sample_rows


class TestEnrichCompany:
    def test_result_for_sample_rows(self, engine) -> None:
        result = asyncio.run(engine.enrich_company("company/acme"))

        assert result.company_id == "company/acme"
        assert result.shipment_count == 3
        assert result.teu_estimate == 4  # 2 + 0.5 + 1 = 3.5, half-up
        assert result.teu_basis == "measured"
        assert (result.fcl_count, result.lcl_count) == (2, 1)
        assert result.primary_mode == "Ocean"
        assert result.trend == "up"  # Mar, four idle months, then Aug and Sep

        assert [lane.shipment_count for lane in result.lanes] == [2, 1]
        assert result.lanes[0].origin_port == "Shanghai"
        assert result.lanes[0].suppliers == ["Ningbo Bright Co", "Yiwu Trading"]
        assert result.lanes[0].last_shipment_date == date(2026, 9, 14)

        assert set(result.regions) == {Region.WEST, Region.SOUTHEAST}
        assert result.regions[Region.WEST].shipment_count == 2
        assert sum(r.market_share for r in result.regions.values()) == pytest.approx(100.0)

    def test_cached_result_is_reused(self, engine, fetcher) -> None:
        async def scenario():
            first = await engine.enrich_company("company/acme")
            second = await engine.enrich_company("company/acme")
            return first, second

        first, second = asyncio.run(scenario())
        assert second is first
        assert len(fetcher.calls) == 1

    def test_recomputed_after_ttl(self, engine, fetcher, clock) -> None:
        async def scenario():
            first = await engine.enrich_company("company/acme")
            clock.advance(timedelta(days=30, milliseconds=1))
            second = await engine.enrich_company("company/acme")
            return first, second

        first, second = asyncio.run(scenario())
        assert len(fetcher.calls) == 2
        assert second is not first
        assert second.enriched_at > first.enriched_at

    def test_persisted_tier_survives_process_restart(self, fetcher, clock) -> None:
        persisted = MemoryBackend()
        before = EnrichmentEngine(fetcher, make_cache(clock, persisted), clock=clock)
        after = EnrichmentEngine(fetcher, make_cache(clock, persisted), clock=clock)

        async def scenario():
            await before.enrich_company("company/acme")
            return await after.enrich_company("company/acme")

        result = asyncio.run(scenario())
        assert result.teu_estimate == 4
        assert len(fetcher.calls) == 1

    def test_overflowing_values_do_not_break_enrichment(self, clock) -> None:
        rows = sample_rows() + [
            {"origin": "X", "destination": "Y", "teu": "1e999"},
            {"origin": "X", "destination": "Y", "shipments": "inf"},
            {"origin": "X", "destination": "Y", "containers": [{"type": "40", "count": "1e999"}]},
        ]
        fetcher = FakeFetcher({"company/noisy": {"ok": True, "rows": rows}})
        engine = EnrichmentEngine(fetcher, make_cache(clock), clock=clock)

        result = asyncio.run(engine.enrich_company("company/noisy"))

        assert result.shipment_count == 6
        assert result.teu_estimate == 4

    def test_fetch_uses_enrichment_limit(self, engine, fetcher) -> None:
        asyncio.run(engine.enrich_company("company/acme"))
        call = fetcher.calls[0]
        assert call["limit"] == 500
        assert call["offset"] == 0

    @pytest.mark.parametrize(
        "response",
        [
            {"ok": True, "rows": []},
            {"ok": False, "rows": sample_rows()},
            {"ok": True},
            GatewayAPIError(503, "unavailable"),
            RuntimeError("socket closed"),
        ],
    )
    def test_no_usable_data_is_none(self, clock, response) -> None:
        fetcher = FakeFetcher({"company/empty": response})
        engine = EnrichmentEngine(fetcher, make_cache(clock), clock=clock)
        assert asyncio.run(engine.enrich_company("company/empty")) is None

    def test_null_results_are_not_cached(self, clock) -> None:
        fetcher = FakeFetcher({"company/empty": {"ok": True, "rows": []}})
        engine = EnrichmentEngine(fetcher, make_cache(clock), clock=clock)

        async def scenario():
            await engine.enrich_company("company/empty")
            await engine.enrich_company("company/empty")

        asyncio.run(scenario())
        assert len(fetcher.calls) == 2

    @pytest.mark.parametrize("company_id", ["", "   ", None])
    def test_invalid_identifier_raises(self, engine, company_id) -> None:
        with pytest.raises(ValueError):
            asyncio.run(engine.enrich_company(company_id))

    def test_clear_cache_forces_refetch(self, engine, fetcher) -> None:
        async def scenario():
            await engine.enrich_company("company/acme")
            await engine.clear_cache()
            await engine.enrich_company("company/acme")

        asyncio.run(scenario())
        assert len(fetcher.calls) == 2


def _alternating_year() -> list[dict]:
    """One shipment per month, Nov 2025 through Oct 2026, FCL/LCL alternating."""
    rows = []
    for i in range(12):
        index = 2025 * 12 + 10 + i  # Nov 2025
        year, month = index // 12, index % 12 + 1
        rows.append({
            "date": f"{year:04d}-{month:02d}-15",
            "container_type": "40ft FCL" if i % 2 == 0 else "LCL",
            "origin_port": "Busan" if i < 7 else "Qingdao",
            "destination_port": "Oakland",
        })
    return rows


class TestComputeKpis:
    def test_trailing_year_projection(self, clock) -> None:
        fetcher = FakeFetcher({"company/kpi": {"ok": True, "rows": _alternating_year()}})
        engine = EnrichmentEngine(fetcher, make_cache(clock), clock=clock)

        kpis = asyncio.run(engine.compute_kpis("company/kpi"))

        assert (kpis.fcl_count, kpis.lcl_count) == (6, 6)
        assert kpis.shipment_count == 12
        assert kpis.trend == "flat"
        assert kpis.teu == 60
        assert kpis.teu_basis == "shipment_count_heuristic"
        assert len(kpis.monthly_volume) == 12
        assert all(b.shipments > 0 for b in kpis.monthly_volume)
        assert kpis.monthly_volume[0].month == "2025-11"
        assert kpis.monthly_volume[0].fcl == 1
        assert kpis.monthly_volume[1].lcl == 0
        assert kpis.top_origin_ports == ["Busan", "Qingdao"]
        assert kpis.top_destination_ports == ["Oakland"]
        assert kpis.last_shipment_date == date(2026, 10, 15)

    def test_fetch_window_and_limit(self, clock) -> None:
        fetcher = FakeFetcher({"company/kpi": {"ok": True, "rows": _alternating_year()}})
        engine = EnrichmentEngine(fetcher, make_cache(clock), clock=clock)

        asyncio.run(engine.compute_kpis("company/kpi"))

        call = fetcher.calls[0]
        assert call["limit"] == 100
        assert call["start_date"] == date(2019, 1, 1)
        assert call["end_date"] == date(2026, 10, 19)

    def test_kpis_are_not_cached(self, engine, fetcher) -> None:
        async def scenario():
            await engine.compute_kpis("company/acme")
            await engine.compute_kpis("company/acme")

        asyncio.run(scenario())
        assert len(fetcher.calls) == 2

    def test_no_data_is_none(self, engine) -> None:
        assert asyncio.run(engine.compute_kpis("company/unknown")) is None
