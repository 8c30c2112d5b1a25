"""Great-circle distance helpers for venue geofencing."""

import math

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Distance between two WGS84 points in kilometres (haversine formula).

    Args:
        lat1: Latitude of the first point in degrees
        lng1: Longitude of the first point in degrees
        lat2: Latitude of the second point in degrees
        lng2: Longitude of the second point in degrees

    Returns:
        Distance in kilometres
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def format_distance(distance_km: float) -> str:
    """Render ``350m`` below one kilometre, ``1.2km`` above."""
    if distance_km < 1:
        return f"{round(distance_km * 1000)}m"
    return f"{distance_km:.1f}km"
