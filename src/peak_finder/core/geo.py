"""Great-circle distance between coordinates."""

import math

from ..models import Coordinate

EARTH_RADIUS_KM = 6371.0


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in kilometres, rounded to 2 decimals."""
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat))
        * math.sin(d_lon / 2) ** 2
    )
    # rounding can push h just past 1 for antipodal points
    c = 2 * math.asin(math.sqrt(min(1.0, h)))
    return round(EARTH_RADIUS_KM * c, 2)
