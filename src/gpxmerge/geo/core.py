from __future__ import annotations

import math
from typing import Protocol, Sequence


EARTH_RADIUS_KM = 6371.0


class LatLon(Protocol):
    lat: float
    lon: float


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculates the great-circle distance in kilometers between two coordinates using the Haversine formula.
    Args:
        lat1: Latitude of the first point in degrees.
        lon1: Longitude of the first point in degrees.
        lat2: Latitude of the second point in degrees.
        lon2: Longitude of the second point in degrees.
    Returns:
        Distance in kilometers.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlon / 2) ** 2
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def cumulative_distance_km(points: Sequence[LatLon]) -> float:
    """
    Sums the haversine distance between consecutive points.
    Args:
        points: Sequence of objects with lat/lon attributes.
    Returns:
        Total distance in kilometers, 0.0 for fewer than two points.
    """
    total = 0.0
    for idx in range(1, len(points)):
        prev = points[idx - 1]
        curr = points[idx]
        total += haversine_km(prev.lat, prev.lon, curr.lat, curr.lon)
    return total


def planar_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    # Degree-space distance, only meaningful for ranking nearby candidates.
    return math.hypot(lat2 - lat1, lon2 - lon1)
