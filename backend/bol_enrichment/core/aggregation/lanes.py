"""Trade lane aggregation — who ships what along which corridor.

A lane is keyed by (origin port, origin country, destination port,
destination country). Lanes only live for one aggregation pass; they are
persisted as part of the enclosing EnrichmentResult, never on their own.
"""

from collections.abc import Sequence
from datetime import date
from typing import Any

from bol_enrichment.core.metrics.classifiers import resolve_container_class
from bol_enrichment.schemas.enrichment import ContainerClass, NormalizedShipment, TradeLane


class TradeLaneAggregator:
    """Group normalized shipments into trade lanes."""

    @staticmethod
    def lane_id(key: tuple[str, str, str, str]) -> str:
        origin_port, origin_country, dest_port, dest_country = key
        return f"{origin_port},{origin_country}→{dest_port},{dest_country}"

    def aggregate(self, shipments: Sequence[NormalizedShipment]) -> list[TradeLane]:
        """Single pass over shipments; lanes sorted by descending shipment count.

        Shipments without a resolvable origin/destination pair are skipped.
        Ties keep the order in which lanes were first encountered.
        """
        lanes: dict[tuple[str, str, str, str], dict[str, Any]] = {}

        for s in shipments:
            if not s.has_lane:
                continue

            key = s.lane_key
            lane = lanes.get(key)
            if lane is None:
                lane = lanes[key] = {
                    "shipment_count": 0,
                    "teu_volume": 0.0,
                    "fcl_count": 0,
                    "lcl_count": 0,
                    "suppliers": [],
                    "last_shipment_date": None,
                }

            lane["shipment_count"] += 1
            lane["teu_volume"] += s.teu

            cls = resolve_container_class(s)
            if cls is ContainerClass.FCL:
                lane["fcl_count"] += 1
            elif cls is ContainerClass.LCL:
                lane["lcl_count"] += 1

            if s.supplier and s.supplier not in lane["suppliers"]:
                lane["suppliers"].append(s.supplier)

            lane["last_shipment_date"] = self._later(lane["last_shipment_date"], s.shipment_date)

        results = [
            TradeLane(
                id=self.lane_id(key),
                origin_port=key[0],
                origin_country=key[1],
                destination_port=key[2],
                destination_country=key[3],
                shipment_count=data["shipment_count"],
                teu_volume=round(data["teu_volume"], 2),
                fcl_count=data["fcl_count"],
                lcl_count=data["lcl_count"],
                suppliers=data["suppliers"],
                last_shipment_date=data["last_shipment_date"],
            )
            for key, data in lanes.items()
        ]
        return sorted(results, key=lambda lane: lane.shipment_count, reverse=True)

    @staticmethod
    def _later(current: date | None, candidate: date | None) -> date | None:
        if candidate is None:
            return current
        if current is None or candidate > current:
            return candidate
        return current
