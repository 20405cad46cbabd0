"""Reference data tables for enrichment: raw field fallback chains,
container TEU multipliers, transport-mode vocabularies, TEU-per-shipment
tiers, and the US state to region map.
"""

# ── Raw field fallback chains ────────────────────────────────────
# The first non-empty key wins. Every BOL source names things differently.
FIELD_SOURCES: dict[str, tuple[str, ...]] = {
    "origin_port": ("origin_port", "origin", "exit_port", "place_of_receipt", "origin_city"),
    "origin_country": (
        "origin_country_code", "origin_country", "supplier_country_code", "supplier_country",
    ),
    "destination_port": (
        "destination_port", "dest_port", "entry_port", "destination",
        "destination_city", "dest_city",
    ),
    "destination_country": ("dest_country_code", "destination_country", "dest_country"),
    "container_type": ("container_type", "container_types", "load_type"),
    "shipment_date": ("date", "shipment_date", "shipped_on", "arrival_date", "bill_date", "month"),
    "supplier": ("supplier", "shipper", "consignor", "supplier_name", "shipper_name"),
    "transport_mode": ("mode", "transport_mode"),
    "destination_address": ("destination_address", "dest_address", "destination", "company_address"),
    "destination_state": ("dest_state", "destination_state"),
    "teu": ("teu", "teu_volume", "teus"),
    "container_count": ("container_count", "containers_count"),
    "shipment_count": ("shipments", "count"),
    "bol_number": ("bol_number", "bill_of_lading"),
}

UNKNOWN = "Unknown"


# ── Container TEU multipliers ────────────────────────────────────
# Checked in order against the lower-cased container type.
CONTAINER_TEU_MULTIPLIERS: tuple[tuple[str, float], ...] = (
    ("20", 1.0),
    ("40", 2.0),
    ("45", 2.25),
)
DEFAULT_TEU_MULTIPLIER = 1.0  # unrecognized sizes count as a 20ft box


def lookup_teu_multiplier(container_type: str | None) -> float:
    """TEU per container for a free-text container type."""
    t = (container_type or "").lower()
    for token, multiplier in CONTAINER_TEU_MULTIPLIERS:
        if token in t:
            return multiplier
    return DEFAULT_TEU_MULTIPLIER


# ── TEU per shipment heuristic ───────────────────────────────────
# (max shipments, avg TEU per shipment). Rough industry averages, not
# measured data; results built from it are flagged as heuristic.
TEU_PER_SHIPMENT_TIERS: tuple[tuple[float, int], ...] = (
    (100, 5),
    (1000, 8),
    (float("inf"), 10),
)


def lookup_teu_per_shipment(shipment_count: int) -> int:
    for ceiling, avg_teu in TEU_PER_SHIPMENT_TIERS:
        if shipment_count <= ceiling:
            return avg_teu
    return TEU_PER_SHIPMENT_TIERS[-1][1]


# ── Transport mode vocabularies ──────────────────────────────────
OCEAN_MODE_TERMS: tuple[str, ...] = ("ocean", "sea", "vessel")
AIR_MODE_TERMS: tuple[str, ...] = ("air", "flight")


# ── US state → region ────────────────────────────────────────────
DEFAULT_REGION = "International"

STATE_TO_REGION: dict[str, str] = {
    # Southeast
    "FL": "Southeast", "GA": "Southeast", "SC": "Southeast", "NC": "Southeast",
    "VA": "Southeast", "AL": "Southeast", "MS": "Southeast", "LA": "Southeast",
    "AR": "Southeast", "TN": "Southeast", "KY": "Southeast",
    # Northeast
    "ME": "Northeast", "NH": "Northeast", "VT": "Northeast", "MA": "Northeast",
    "RI": "Northeast", "CT": "Northeast", "NY": "Northeast", "NJ": "Northeast",
    "PA": "Northeast", "DE": "Northeast", "MD": "Northeast", "DC": "Northeast",
    # Southwest
    "AZ": "Southwest", "NM": "Southwest", "TX": "Southwest", "OK": "Southwest",
    # Northwest
    "WA": "Northwest", "OR": "Northwest", "ID": "Northwest", "MT": "Northwest",
    "WY": "Northwest",
    # Midwest
    "ND": "Midwest", "SD": "Midwest", "NE": "Midwest", "KS": "Midwest",
    "MN": "Midwest", "IA": "Midwest", "MO": "Midwest", "WI": "Midwest",
    "IL": "Midwest", "IN": "Midwest", "MI": "Midwest", "OH": "Midwest",
    # West (Alaska and Hawaii included)
    "CA": "West", "NV": "West", "UT": "West", "CO": "West",
    "AK": "West", "HI": "West",
}


def map_state_to_region(state: str | None) -> str:
    """Map a US state code to its region, International when unknown."""
    if not state:
        return DEFAULT_REGION
    return STATE_TO_REGION.get(state.upper().strip(), DEFAULT_REGION)


# Destination country spellings that mean the US. Any other known country
# means a two-letter address token is not a US state ("Hamburg, DE").
US_COUNTRY_NAMES: frozenset[str] = frozenset({
    "US", "USA", "UNITED STATES", "UNITED STATES OF AMERICA",
})


def is_foreign_country(country: str | None) -> bool:
    """True for a known destination country other than the US."""
    if not country or country == UNKNOWN:
        return False
    return country.upper().strip() not in US_COUNTRY_NAMES
