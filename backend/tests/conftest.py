"""Shared fixtures: a scripted BOL fetcher, a manual clock, in-process caches."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest

from bol_enrichment.core.cache import EnrichmentCache, ExpiringStore, MemoryBackend
from bol_enrichment.core.enrichment import EnrichmentEngine


class ManualClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class FakeFetcher:
    """Returns scripted gateway envelopes; exceptions in the script are raised."""

    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses = responses or {}
        self.calls: list[dict[str, Any]] = []

    async def fetch_company_bols(
        self,
        company_id: str,
        limit: int,
        offset: int = 0,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> dict[str, Any]:
        self.calls.append({
            "company_id": company_id,
            "limit": limit,
            "offset": offset,
            "start_date": start_date,
            "end_date": end_date,
        })
        response = self.responses.get(company_id, {"ok": True, "rows": []})
        if isinstance(response, Exception):
            raise response
        return response


def make_cache(clock: ManualClock, persisted_backend=None) -> EnrichmentCache:
    return EnrichmentCache(
        memory=ExpiringStore(MemoryBackend(), clock=clock, name="memory"),
        persisted=ExpiringStore(
            persisted_backend if persisted_backend is not None else MemoryBackend(),
            namespace="lit_enriched_",
            serialize=True,
            clock=clock,
            name="persisted",
        ),
        ttl=timedelta(days=30),
        clock=clock,
    )


def sample_rows() -> list[dict[str, Any]]:
    return [
        {
            "bol_number": "BOL-1",
            "shipped_on": "2026-09-14",
            "origin": "Shanghai",
            "origin_country": "CN",
            "destination": "Los Angeles, CA, 90001, US",
            "dest_country": "US",
            "container_type": "40ft FCL",
            "teu": 2,
            "mode": "Ocean",
            "supplier": "Ningbo Bright Co",
        },
        {
            "bol_number": "BOL-2",
            "shipped_on": "2026-08-02",
            "origin": "Shanghai",
            "origin_country": "CN",
            "destination": "Los Angeles, CA, 90001, US",
            "dest_country": "US",
            "container_type": "LCL",
            "teu": 0.5,
            "mode": "ocean",
            "shipper": "Yiwu Trading",
        },
        {
            "bol_number": "BOL-3",
            "shipped_on": "2026-03-20",
            "origin": "Ho Chi Minh",
            "origin_country": "VN",
            "destination": "Savannah, GA, 31401, US",
            "dest_country": "US",
            "container_type": "FCL 20GP",
            "teu": 1,
            "mode": "vessel",
            "supplier": "Saigon Furniture",
        },
    ]


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher({"company/acme": {"ok": True, "rows": sample_rows()}})


@pytest.fixture()
def engine(fetcher: FakeFetcher, clock: ManualClock) -> EnrichmentEngine:
    return EnrichmentEngine(fetcher=fetcher, cache=make_cache(clock), clock=clock)
