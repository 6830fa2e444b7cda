"""Travel-time estimate between two coordinates."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0
DEFAULT_SPEED_KMH = 40.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def travel_minutes(
    from_lat: float | None,
    from_lng: float | None,
    to_lat: float | None,
    to_lng: float | None,
    speed_kmh: float = DEFAULT_SPEED_KMH,
) -> float:
    """Minutes to drive between two points at a constant average speed.

    Any missing or falsy coordinate (None, 0) makes the leg free: returns 0.0.
    """
    if not from_lat or not from_lng or not to_lat or not to_lng:
        return 0.0
    distance = haversine_km(from_lat, from_lng, to_lat, to_lng)
    return (distance / speed_kmh) * 60
