"""Great-circle distance between coordinates."""

from math import atan2, cos, radians, sin, sqrt

from stock_locator.models import GeoCoordinate

# Mean radius of Earth in miles.
EARTH_RADIUS_MILES = 3959.0


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance in miles between two lat/lon points."""
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    return EARTH_RADIUS_MILES * 2 * atan2(sqrt(a), sqrt(1 - a))


def distance_miles(origin: GeoCoordinate, destination: GeoCoordinate) -> float:
    return haversine(
        origin.latitude,
        origin.longitude,
        destination.latitude,
        destination.longitude,
    )
