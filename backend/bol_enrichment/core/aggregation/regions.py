"""Regional breakdown: where in the US a company's freight lands.

Each shipment is bucketed by the region of its destination state. Anything
without a resolvable US state falls into International, so every shipment
lands in exactly one region and market shares sum to 100%.
"""

from collections.abc import Sequence
from typing import Any

from bol_enrichment.core.metrics.classifiers import resolve_container_class
from bol_enrichment.data.reference_tables import map_state_to_region
from bol_enrichment.schemas.enrichment import (
    ContainerClass,
    NormalizedShipment,
    Region,
    RegionalBreakdown,
)

TOP_SUPPLIERS_PER_REGION = 5


class RegionalAggregator:
    """Aggregate shipments by US destination region."""

    def region_for(self, shipment: NormalizedShipment) -> Region:
        return Region(map_state_to_region(shipment.destination_state))

    def aggregate(
        self, shipments: Sequence[NormalizedShipment]
    ) -> dict[Region, RegionalBreakdown]:
        """Compute per-region counts and market share.

        Market share is each region's share of the total shipment count of
        the whole input, as a percentage. Empty input gives an empty mapping.
        """
        if not shipments:
            return {}

        regions: dict[Region, dict[str, Any]] = {}
        for s in shipments:
            region = self.region_for(s)
            data = regions.get(region)
            if data is None:
                data = regions[region] = {
                    "shipment_count": 0,
                    "teu_volume": 0.0,
                    "fcl_count": 0,
                    "lcl_count": 0,
                    "suppliers": [],
                }

            data["shipment_count"] += 1
            data["teu_volume"] += s.teu

            cls = resolve_container_class(s)
            if cls is ContainerClass.FCL:
                data["fcl_count"] += 1
            elif cls is ContainerClass.LCL:
                data["lcl_count"] += 1

            suppliers = data["suppliers"]
            if (
                s.supplier
                and len(suppliers) < TOP_SUPPLIERS_PER_REGION
                and s.supplier not in suppliers
            ):
                suppliers.append(s.supplier)

        total = len(shipments)
        return {
            region: RegionalBreakdown(
                region=region,
                shipment_count=data["shipment_count"],
                teu_volume=round(data["teu_volume"], 2),
                fcl_count=data["fcl_count"],
                lcl_count=data["lcl_count"],
                market_share=data["shipment_count"] / total * 100,
                top_suppliers=data["suppliers"],
            )
            for region, data in regions.items()
        }
