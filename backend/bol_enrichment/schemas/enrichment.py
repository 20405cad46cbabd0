"""Pydantic models for normalized shipments, aggregates, and results.

Everything that leaves the engine is frozen: a recomputation builds new
objects instead of mutating cached ones.
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContainerClass(str, Enum):
    FCL = "FCL"
    LCL = "LCL"
    UNKNOWN = "UNKNOWN"


class Region(str, Enum):
    SOUTHEAST = "Southeast"
    NORTHEAST = "Northeast"
    SOUTHWEST = "Southwest"
    NORTHWEST = "Northwest"
    MIDWEST = "Midwest"
    WEST = "West"
    INTERNATIONAL = "International"


PrimaryMode = Literal["Ocean", "Air", "Mixed"]
Trend = Literal["up", "down", "flat"]
TeuBasis = Literal["measured", "shipment_count_heuristic"]


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Normalized input ─────────────────────────────────────────────

class NormalizedShipment(FrozenModel):
    origin_port: str = "Unknown"
    origin_country: str = "Unknown"
    destination_port: str = "Unknown"
    destination_country: str = "Unknown"
    container_class: ContainerClass = ContainerClass.UNKNOWN
    teu: float = Field(default=0.0, ge=0)
    teu_reported: bool = False
    shipment_date: Optional[date] = None
    supplier: Optional[str] = None
    transport_mode: Optional[str] = None
    destination_state: Optional[str] = None
    shipment_count: int = Field(default=1, ge=1)
    bol_number: Optional[str] = None

    @property
    def lane_key(self) -> tuple[str, str, str, str]:
        return (
            self.origin_port,
            self.origin_country,
            self.destination_port,
            self.destination_country,
        )

    @property
    def has_lane(self) -> bool:
        """True when both ends of the route carry a known port or country."""
        origin_known = self.origin_port != "Unknown" or self.origin_country != "Unknown"
        dest_known = self.destination_port != "Unknown" or self.destination_country != "Unknown"
        return origin_known and dest_known


# ── Aggregates ───────────────────────────────────────────────────

class TradeLane(FrozenModel):
    id: str
    origin_port: str
    origin_country: str
    destination_port: str
    destination_country: str
    shipment_count: int = 0
    teu_volume: float = 0.0
    fcl_count: int = 0
    lcl_count: int = 0
    suppliers: list[str] = []
    last_shipment_date: Optional[date] = None


class RegionalBreakdown(FrozenModel):
    region: Region
    shipment_count: int = 0
    teu_volume: float = 0.0
    fcl_count: int = 0
    lcl_count: int = 0
    market_share: float = 0.0
    top_suppliers: list[str] = []


class MonthlyVolume(FrozenModel):
    month: str  # YYYY-MM
    label: str  # Jan, Feb, ...
    fcl: float = 0.0
    lcl: float = 0.0
    total: float = 0.0
    shipments: int = 0


# ── Results ──────────────────────────────────────────────────────

class EnrichmentResult(FrozenModel):
    company_id: str
    teu_estimate: int
    teu_basis: TeuBasis = "measured"
    fcl_count: int = 0
    lcl_count: int = 0
    primary_mode: Optional[PrimaryMode] = None
    trend: Trend = "flat"
    shipment_count: int = 0
    lanes: list[TradeLane] = []
    regions: dict[Region, RegionalBreakdown] = {}
    enriched_at: datetime


class KpiView(FrozenModel):
    company_id: str
    teu: int
    teu_basis: TeuBasis = "measured"
    fcl_count: int = 0
    lcl_count: int = 0
    trend: Trend = "flat"
    top_origin_ports: list[str] = []
    top_destination_ports: list[str] = []
    monthly_volume: list[MonthlyVolume] = []
    last_shipment_date: Optional[date] = None
    shipment_count: int = 0
    computed_at: datetime


class CacheEntry(FrozenModel):
    data: EnrichmentResult
    created_at: datetime
    ttl: timedelta

    def is_expired(self, now: datetime) -> bool:
        return now - self.created_at > self.ttl


# ── API request schemas ──────────────────────────────────────────

class BatchEnrichRequest(BaseModel):
    company_ids: list[str] = Field(..., min_length=1, max_length=200)
