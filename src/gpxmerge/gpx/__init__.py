from .models import (
    GPXData,
    GPXMetadata,
    Track,
    TrackPoint,
    TrackPointKey,
    Waypoint,
    WaypointKey,
    track_point_key,
    waypoint_key,
)
from .parser import parse_gpx, strip_gpx_suffix
from .writer import GPX_NAMESPACE, to_xml, write_gpx

__all__ = [
    "GPX_NAMESPACE",
    "GPXData",
    "GPXMetadata",
    "Track",
    "TrackPoint",
    "TrackPointKey",
    "Waypoint",
    "WaypointKey",
    "parse_gpx",
    "strip_gpx_suffix",
    "to_xml",
    "track_point_key",
    "waypoint_key",
    "write_gpx",
]
