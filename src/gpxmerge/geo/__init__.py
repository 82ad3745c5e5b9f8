from .core import (
    EARTH_RADIUS_KM,
    cumulative_distance_km,
    haversine_km,
    planar_distance,
)

__all__ = [
    "EARTH_RADIUS_KM",
    "cumulative_distance_km",
    "haversine_km",
    "planar_distance",
]
