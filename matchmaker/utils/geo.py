"""Great-circle distance helpers."""

import math

EARTH_RADIUS_KM = 6371


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def within_radius(
    lat: float | None,
    lon: float | None,
    center_lat: float,
    center_lon: float,
    radius_km: float,
) -> float | None:
    """Return the distance to the center when inside the radius, else None.

    Records without coordinates are never inside a radius.
    """
    if lat is None or lon is None:
        return None
    distance = haversine_km(center_lat, center_lon, lat, lon)
    if distance > radius_km:
        return None
    return distance
