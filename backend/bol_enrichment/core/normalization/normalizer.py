"""Shipment normalizer. Collapses heterogeneous BOL rows into one shape.

Every downstream calculator and aggregator reads NormalizedShipment only;
the field-name guessing lives here and nowhere else. Normalization is
total: a missing or unmappable field degrades to "Unknown", 0 or None.
"""

from collections.abc import Mapping
from typing import Any

from bol_enrichment.core.metrics.teu import estimate_teu_from_containers
from bol_enrichment.data.reference_tables import FIELD_SOURCES, UNKNOWN, is_foreign_country
from bol_enrichment.schemas.enrichment import NormalizedShipment
from .field_parsers import (
    extract_state_from_address,
    parse_container_class,
    parse_date,
    parse_number,
    parse_state_code,
)


class ShipmentNormalizer:
    """Map raw BOL records onto NormalizedShipment."""

    def __init__(self, field_sources: dict[str, tuple[str, ...]] | None = None):
        self.field_sources = field_sources or FIELD_SOURCES

    def normalize(self, raw: Any) -> NormalizedShipment:
        """Normalize a single raw record.

        Steps:
        1. Resolve route fields (ports, countries) through their fallback chains
        2. Classify container load (FCL / LCL / UNKNOWN)
        3. Resolve TEU: reported value, container breakdown, or container count
        4. Parse shipment date
        5. Resolve destination state from address, then explicit state field;
           the address is skipped for destinations in a known foreign country
        """
        if not isinstance(raw, Mapping):
            raw = {}

        container_type = self._text(raw, "container_type")
        teu, teu_reported = self._resolve_teu(raw, container_type)

        count = parse_number(self._first(raw, "shipment_count"))
        shipment_count = int(count) if count and count >= 1 else 1

        destination_country = self._text(raw, "destination_country") or UNKNOWN
        address_state = None
        if not is_foreign_country(destination_country):
            address_state = extract_state_from_address(self._text(raw, "destination_address"))

        return NormalizedShipment(
            origin_port=self._text(raw, "origin_port") or UNKNOWN,
            origin_country=self._text(raw, "origin_country") or UNKNOWN,
            destination_port=self._text(raw, "destination_port") or UNKNOWN,
            destination_country=destination_country,
            container_class=parse_container_class(container_type),
            teu=teu,
            teu_reported=teu_reported,
            shipment_date=parse_date(self._first(raw, "shipment_date")),
            supplier=self._text(raw, "supplier"),
            transport_mode=self._text(raw, "transport_mode"),
            destination_state=(
                address_state or parse_state_code(self._text(raw, "destination_state"))
            ),
            shipment_count=shipment_count,
            bol_number=self._text(raw, "bol_number"),
        )

    def normalize_all(self, rows: list[Any]) -> list[NormalizedShipment]:
        return [self.normalize(r) for r in rows]

    def _resolve_teu(self, raw: Mapping, container_type: str | None) -> tuple[float, bool]:
        """Return (teu, reported). Unreported TEU is 0, not an error."""
        teu = parse_number(self._first(raw, "teu"))
        if teu is not None:
            return teu, True

        containers = raw.get("containers")
        if isinstance(containers, list) and containers:
            return float(estimate_teu_from_containers(containers)), True

        count = parse_number(self._first(raw, "container_count"))
        if count:
            breakdown = [{"type": container_type or "", "count": count}]
            return float(estimate_teu_from_containers(breakdown)), True

        return 0.0, False

    def _first(self, raw: Mapping, field: str) -> Any:
        for key in self.field_sources.get(field, ()):
            value = raw.get(key)
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            return value
        return None

    def _text(self, raw: Mapping, field: str) -> str | None:
        value = self._first(raw, field)
        if value is None or isinstance(value, (dict, list)):
            return None
        return str(value).strip() or None
