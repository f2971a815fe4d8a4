"""Geo helpers — haversine distance, bounding boxes and bus operator lookup.

Invariants:
    - Distances are in meters, coordinates in decimal degrees
    - Pure functions only (no IO)
"""

import math

EARTH_RADIUS_METERS = 6_371_000
METERS_PER_DEGREE_LAT = 111_000.0

# Stride operator_ref -> Hebrew operator name
OPERATOR_NAMES: dict[int, str] = {
    3: "אגד",
    5: "דן",
    7: "קווים",
    10: "נתיב אקספרס",
    14: "מטרופולין",
    15: "קווים",
    16: "סופרבוס",
    18: "אפיקים",
    21: "סופרבוס",
    23: "גלים",
    25: "תנופה",
    31: "גולן",
    42: "אגד תעבורה",
    45: "רכבת ישראל",
    91: "מטרופולין דרום",
}

# Company key stored on incidents -> Stride operator_ref
COMPANY_TO_OPERATOR: dict[str, int] = {
    "egged": 3,
    "dan": 5,
    "kavim": 7,
    "nateev_express": 10,
    "metropoline": 14,
    "superbus": 16,
    "afikim": 18,
    "galim": 23,
    "tnufa": 25,
    "golan": 31,
    "egged_taavura": 42,
}


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in meters."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def bounding_box(
    lat: float, lon: float, radius_meters: float,
) -> tuple[float, float, float, float]:
    """(min_lat, max_lat, min_lon, max_lon) enclosing a circle around a point."""
    d_lat = radius_meters / METERS_PER_DEGREE_LAT
    d_lon = radius_meters / (METERS_PER_DEGREE_LAT * math.cos(math.radians(lat)))
    return lat - d_lat, lat + d_lat, lon - d_lon, lon + d_lon


def operator_for_company(company_key: str) -> int | None:
    return COMPANY_TO_OPERATOR.get(company_key.lower())


def operator_name(operator_ref: int) -> str:
    return OPERATOR_NAMES.get(operator_ref, "אחר")
