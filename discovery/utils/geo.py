"""
Geo helpers — great-circle distance between coordinates.
"""

import math
from typing import Optional

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres (haversine formula)."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_km(origin, target) -> Optional[float]:
    """
    Distance between two Coordinates-like objects, or None when either is missing
    or out of range.
    """
    if origin is None or target is None:
        return None
    try:
        lat1, lon1 = float(origin.latitude), float(origin.longitude)
        lat2, lon2 = float(target.latitude), float(target.longitude)
    except (AttributeError, TypeError, ValueError):
        return None
    # NaN fails both range checks.
    for lat, lon in ((lat1, lon1), (lat2, lon2)):
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            return None
    return haversine_km(lat1, lon1, lat2, lon2)
