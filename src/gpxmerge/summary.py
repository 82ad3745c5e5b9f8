from __future__ import annotations

from dataclasses import dataclass

from gpxmerge.geo import cumulative_distance_km
from gpxmerge.gpx.models import GPXData


@dataclass(frozen=True)
class GPXSummary:
    name: str
    track_count: int
    waypoint_count: int
    point_count: int
    distance_km: float


def total_points(data: GPXData) -> int:
    return sum(len(track) for track in data.tracks)


def total_distance_km(data: GPXData) -> float:
    # Distance is measured within each track; gaps between tracks are not counted.
    return sum((cumulative_distance_km(track) for track in data.tracks), 0.0)


def summarize(data: GPXData) -> GPXSummary:
    return GPXSummary(
        name=data.name,
        track_count=len(data.tracks),
        waypoint_count=len(data.waypoints),
        point_count=total_points(data),
        distance_km=total_distance_km(data),
    )
