"""TEU estimation.

Two estimators: an exact-ish one from container breakdowns, and a coarse
shipment-count heuristic for when no breakdown exists. Anything built on
the heuristic is reported with teu_basis="shipment_count_heuristic" so
the UI can label it as an estimate.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any

from bol_enrichment.data.reference_tables import lookup_teu_multiplier, lookup_teu_per_shipment
from bol_enrichment.schemas.enrichment import NormalizedShipment, TeuBasis


def round_half_up(value: float) -> int:
    """Round a non-negative number to the nearest integer, .5 going up.

    A total that overflowed to infinity carries no usable volume and rounds to 0.
    """
    if not math.isfinite(value):
        return 0
    return int(value + 0.5)


def estimate_teu_from_containers(containers: Any) -> int:
    """Sum TEU over a list of {type, count} container entries.

    20ft = 1 TEU, 40ft = 2 TEU, 45ft = 2.25 TEU, anything else counts as
    a 20ft box. Empty or non-list input yields 0.
    """
    if not isinstance(containers, (list, tuple)) or not containers:
        return 0

    total = 0.0
    for container in containers:
        if not isinstance(container, Mapping):
            continue
        try:
            count = float(container.get("count") or 0)
        except (TypeError, ValueError, OverflowError):
            count = 0.0
        if not math.isfinite(count) or count <= 0:
            continue
        total += count * lookup_teu_multiplier(str(container.get("type") or ""))

    return round_half_up(total)


def estimate_teu_from_shipments(shipment_count: int) -> int:
    """Rough TEU from a shipment count using tiered per-shipment averages.

    <=100 shipments: 5 TEU each, 101-1000: 8 TEU each, >1000: 10 TEU each.
    """
    if shipment_count <= 0:
        return 0
    return shipment_count * lookup_teu_per_shipment(shipment_count)


def total_shipment_count(shipments: Sequence[NormalizedShipment]) -> int:
    """Shipments represented by the records, honouring aggregated rows."""
    return sum(s.shipment_count for s in shipments)


def estimate_total_teu(shipments: Sequence[NormalizedShipment]) -> tuple[int, TeuBasis]:
    """Total TEU for a record set, falling back to the shipment heuristic."""
    if any(s.teu_reported for s in shipments):
        return round_half_up(sum(s.teu for s in shipments)), "measured"
    return estimate_teu_from_shipments(total_shipment_count(shipments)), "shipment_count_heuristic"
