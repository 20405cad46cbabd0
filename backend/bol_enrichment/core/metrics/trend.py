"""Shipment trend: a two-window comparison, not a forecast.

The dated series is split into an older and a newer half and the mean
shipment count of each half is compared:

    change = (mean_newer - mean_older) / max(mean_older, 1)

change > 0.1 is "up", change < -0.1 is "down", anything else "flat".
"""

from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from typing import NamedTuple

from bol_enrichment.schemas.enrichment import NormalizedShipment, Trend

TREND_THRESHOLD = 0.1


class TrendPoint(NamedTuple):
    date: date
    shipments: float


def determine_shipment_trend(points: Sequence[TrendPoint]) -> Trend:
    """Classify a dated shipment series as up, down or flat.

    Fewer than two points is not enough data and reads as flat. With an
    odd number of points the extra one lands in the newer half.
    """
    if len(points) < 2:
        return "flat"

    ordered = sorted(points, key=lambda p: p.date)
    half = len(ordered) // 2
    older, newer = ordered[:half], ordered[half:]

    older_mean = sum(p.shipments for p in older) / len(older)
    newer_mean = sum(p.shipments for p in newer) / len(newer)

    change = (newer_mean - older_mean) / max(older_mean, 1)
    if change > TREND_THRESHOLD:
        return "up"
    if change < -TREND_THRESHOLD:
        return "down"
    return "flat"


def monthly_shipment_series(shipments: Sequence[NormalizedShipment]) -> list[TrendPoint]:
    """One point per calendar month, weighted by shipment_count.

    Months between the first and last dated shipment with no shipments
    become zero points, so gaps in activity pull the trend down. Undated
    records are left out.
    """
    by_month: dict[date, float] = defaultdict(float)
    for s in shipments:
        if s.shipment_date is None:
            continue
        by_month[s.shipment_date.replace(day=1)] += s.shipment_count
    if not by_month:
        return []

    first, last = min(by_month), max(by_month)
    points = []
    index = first.year * 12 + first.month - 1
    while index <= last.year * 12 + last.month - 1:
        month = date(index // 12, index % 12 + 1, 1)
        points.append(TrendPoint(month, by_month.get(month, 0.0)))
        index += 1
    return points
