from .normalizer import ShipmentNormalizer
from .field_parsers import extract_state_from_address, parse_container_class, parse_date

__all__ = [
    "ShipmentNormalizer",
    "extract_state_from_address",
    "parse_container_class",
    "parse_date",
]
