"""Time-bucketed volume and port rankings for dashboard tiles."""

from collections.abc import Sequence
from datetime import date

from bol_enrichment.data.reference_tables import UNKNOWN
from bol_enrichment.schemas.enrichment import ContainerClass, MonthlyVolume, NormalizedShipment
from .classifiers import resolve_container_class

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _trailing_months(today: date, n: int) -> list[tuple[int, int]]:
    """(year, month) pairs for the n months ending at today's month, oldest first."""
    months = []
    for back in range(n - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - back
        months.append((index // 12, index % 12 + 1))
    return months


def build_monthly_volume(
    shipments: Sequence[NormalizedShipment],
    today: date | None = None,
    months: int = 12,
) -> list[MonthlyVolume]:
    """Bucket TEU by calendar month and load class.

    Always returns exactly `months` buckets ending at the current month.
    FCL shipments without TEU count as 1; shipments dated outside the
    window are dropped from this view only.
    """
    today = today or date.today()
    window = _trailing_months(today, months)
    buckets = {key: {"fcl": 0.0, "lcl": 0.0, "shipments": 0} for key in window}

    for s in shipments:
        if s.shipment_date is None:
            continue
        bucket = buckets.get((s.shipment_date.year, s.shipment_date.month))
        if bucket is None:
            continue

        bucket["shipments"] += 1
        cls = resolve_container_class(s)
        if cls is ContainerClass.FCL:
            bucket["fcl"] += s.teu if s.teu > 0 else 1
        elif cls is ContainerClass.LCL:
            bucket["lcl"] += s.teu

    return [
        MonthlyVolume(
            month=f"{year:04d}-{month:02d}",
            label=MONTH_LABELS[month - 1],
            fcl=round(b["fcl"], 2),
            lcl=round(b["lcl"], 2),
            total=round(b["fcl"] + b["lcl"], 2),
            shipments=b["shipments"],
        )
        for (year, month), b in ((key, buckets[key]) for key in window)
    ]


def top_ports(
    shipments: Sequence[NormalizedShipment],
    field: str = "origin_port",
    n: int = 3,
) -> list[str]:
    """Most frequent ports for `field`, ties broken by first appearance."""
    counts: dict[str, int] = {}
    for s in shipments:
        port = getattr(s, field)
        if not port or port == UNKNOWN:
            continue
        counts[port] = counts.get(port, 0) + 1

    # sorted() is stable, so equal counts keep insertion (first-seen) order
    ranked = sorted(counts.items(), key=lambda x: x[1], reverse=True)
    return [port for port, _ in ranked[:n]]


def last_shipment_date(shipments: Sequence[NormalizedShipment]) -> date | None:
    dates = [s.shipment_date for s in shipments if s.shipment_date is not None]
    return max(dates) if dates else None
