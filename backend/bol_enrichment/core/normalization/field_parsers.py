"""Parsers for the free-text and loosely-typed fields on BOL records.

Container descriptions, destination addresses, dates and numbers arrive
in whatever shape the upstream source felt like that day. Each parser
returns None (or UNKNOWN) instead of raising.
"""

import math
import re
from datetime import date, datetime
from typing import Any

from bol_enrichment.data.reference_tables import STATE_TO_REGION
from bol_enrichment.schemas.enrichment import ContainerClass

# "123 Street, City, ST 12345" / "Los Angeles, CA, 90001, US"
_STATE_PATTERN = re.compile(r",\s*([A-Z]{2})\b\s*(?:\d{5})?")

_DATE_FORMATS = ("%m/%d/%Y", "%Y/%m/%d", "%d-%b-%Y", "%Y-%m")


def parse_container_class(container_type: str | None) -> ContainerClass:
    """Classify a container description as FCL, LCL or UNKNOWN."""
    text = (container_type or "").lower()
    if "fcl" in text:
        return ContainerClass.FCL
    if "lcl" in text:
        return ContainerClass.LCL
    return ContainerClass.UNKNOWN


def extract_state_from_address(address: str | None) -> str | None:
    """Return the first known US state code found in an address."""
    if not address:
        return None
    for match in _STATE_PATTERN.finditer(address):
        code = match.group(1)
        if code in STATE_TO_REGION:
            return code
    return None


def parse_state_code(value: str | None) -> str | None:
    if not value:
        return None
    code = value.upper().strip()
    return code if code in STATE_TO_REGION else None


def parse_date(value: Any) -> date | None:
    """Parse a shipment date; unparsable values are treated as absent.

    Accepts date/datetime objects, BigQuery-style {"value": "..."}
    wrappers, ISO strings and US-style MM/DD/YYYY strings.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        return parse_date(value.get("value"))
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_number(value: Any) -> float | None:
    """Coerce a numeric field, None for missing, negative, non-finite or garbage values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number
