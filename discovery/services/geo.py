"""Distance utilities — storage-independent haversine implementation"""
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

EARTH_RADIUS_KM = 6371.0
KM_TO_MILES = 0.621371


@dataclass(frozen=True)
class Point:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


def haversine_km(a: Point, b: Point) -> float:
    """Return the great-circle distance between two points in km.

    Coordinates are not range-checked here; callers validate at the API
    boundary. Out-of-range input still yields a number, just a meaningless one.
    """
    dlat = math.radians(b.lat - a.lat)
    dlng = math.radians(b.lng - a.lng)
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(dlng / 2) ** 2
    )
    h = min(h, 1.0)  # float drift near antipodes
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def km_to_miles(km: float) -> float:
    return km * KM_TO_MILES


def round_distance(value: float, places: int = 1) -> float:
    """Round half up on the exact binary value of `value`.

    A distance sitting exactly on a .x5 boundary (e.g. 0.25) rounds up,
    not to even as the builtin round() would.
    """
    exact = Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return float(exact)
