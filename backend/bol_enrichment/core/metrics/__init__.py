from .teu import (
    estimate_teu_from_containers,
    estimate_teu_from_shipments,
    estimate_total_teu,
    total_shipment_count,
)
from .classifiers import count_container_classes, determine_primary_mode, resolve_container_class
from .trend import TrendPoint, determine_shipment_trend, monthly_shipment_series
from .volume import build_monthly_volume, last_shipment_date, top_ports

__all__ = [
    "estimate_teu_from_containers",
    "estimate_teu_from_shipments",
    "estimate_total_teu",
    "total_shipment_count",
    "count_container_classes",
    "determine_primary_mode",
    "resolve_container_class",
    "TrendPoint",
    "determine_shipment_trend",
    "monthly_shipment_series",
    "build_monthly_volume",
    "last_shipment_date",
    "top_ports",
]
