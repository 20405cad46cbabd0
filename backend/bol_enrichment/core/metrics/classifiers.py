"""Container-load and transport-mode classification over shipment sets."""

from collections.abc import Sequence

from bol_enrichment.data.reference_tables import AIR_MODE_TERMS, OCEAN_MODE_TERMS
from bol_enrichment.schemas.enrichment import ContainerClass, NormalizedShipment, PrimaryMode


def resolve_container_class(shipment: NormalizedShipment) -> ContainerClass:
    """Container class with the TEU heuristic as fallback.

    The container-type text decides when it names FCL or LCL. Otherwise a
    record that reports TEU is FCL at >= 1 TEU and LCL below that; records
    with neither stay UNKNOWN and are counted in neither bucket.
    """
    if shipment.container_class is not ContainerClass.UNKNOWN:
        return shipment.container_class
    if shipment.teu_reported and shipment.teu > 0:
        return ContainerClass.FCL if shipment.teu >= 1 else ContainerClass.LCL
    return ContainerClass.UNKNOWN


def count_container_classes(shipments: Sequence[NormalizedShipment]) -> tuple[int, int]:
    """Return (fcl_count, lcl_count)."""
    fcl = lcl = 0
    for s in shipments:
        cls = resolve_container_class(s)
        if cls is ContainerClass.FCL:
            fcl += 1
        elif cls is ContainerClass.LCL:
            lcl += 1
    return fcl, lcl


def determine_primary_mode(shipments: Sequence[NormalizedShipment]) -> PrimaryMode:
    """Classify the dominant transport mode.

    Ocean ratio > 0.8 is Ocean, < 0.2 is Air, anything between is Mixed.
    With no recognizable mode on any record, Ocean is assumed.
    """
    ocean = air = 0
    for s in shipments:
        mode = (s.transport_mode or "").lower()
        if any(term in mode for term in OCEAN_MODE_TERMS):
            ocean += 1
        elif any(term in mode for term in AIR_MODE_TERMS):
            air += 1

    total = ocean + air
    if total == 0:
        return "Ocean"

    ocean_ratio = ocean / total
    if ocean_ratio > 0.8:
        return "Ocean"
    if ocean_ratio < 0.2:
        return "Air"
    return "Mixed"
