from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Sequence

from gpxmerge.gpx.models import (
    GPXData,
    GPXMetadata,
    TrackPoint,
    Waypoint,
    track_point_key,
    utc_timestamp,
    waypoint_key,
)

logger = logging.getLogger(__name__)

EMPTY_NAME = "empty"


def dedupe_points(points: Iterable[TrackPoint]) -> list[TrackPoint]:
    seen = set()
    unique = []
    for point in points:
        key = track_point_key(point)
        if key in seen:
            continue
        seen.add(key)
        unique.append(point)
    return unique


def dedupe_waypoints(waypoints: Iterable[Waypoint]) -> list[Waypoint]:
    seen = set()
    unique = []
    for waypoint in waypoints:
        key = waypoint_key(waypoint)
        if key in seen:
            continue
        seen.add(key)
        unique.append(waypoint)
    return unique


def merged_name(count: int) -> str:
    return f"merged_{count}_files"


def merge_gpx(files: Sequence[GPXData], *, now: datetime | None = None) -> GPXData:
    """
    Combines several GPXData values into one.
    With two or more inputs every track is flattened into a single track and
    duplicate points and waypoints are dropped, keeping the first occurrence.
    A single input is returned as-is and must not be mutated by the caller.
    Args:
        files: Inputs in the order they were supplied.
        now: Timestamp recorded in the merged metadata, defaults to the current time.
    Returns:
        The merged GPXData.
    """
    if not files:
        return GPXData(name=EMPTY_NAME)
    if len(files) == 1:
        return files[0]

    all_points = [point for data in files for point in data.iter_points()]
    points = dedupe_points(all_points)
    all_waypoints = [waypoint for data in files for waypoint in data.waypoints]
    waypoints = dedupe_waypoints(all_waypoints)

    count = len(files)
    logger.info(
        "Merged %s files: kept %s of %s points, %s of %s waypoints",
        count,
        len(points),
        len(all_points),
        len(waypoints),
        len(all_waypoints),
    )

    names = " + ".join(data.name for data in files)
    return GPXData(
        name=merged_name(count),
        tracks=(tuple(points),) if points else (),
        waypoints=tuple(waypoints),
        metadata=GPXMetadata(
            name=f"Merged: {names}",
            desc=f"Merged GPX file from {count} files",
            time=utc_timestamp(now),
        ),
    )
