from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from gpxmerge.geo import haversine_km, planar_distance
from gpxmerge.gpx.models import GPXData, track_point_key, waypoint_key

logger = logging.getLogger(__name__)

DEFAULT_MAX_SAMPLES = 500
Y_PADDING_RATIO = 0.15
Y_PADDING_FLAT = 50.0
EMPTY_Y_BOUNDS = (0.0, 100.0)


@dataclass(frozen=True)
class ProfileSample:
    distance_km: float
    elevation_m: float
    file_index: int


@dataclass(frozen=True)
class WaypointMarker:
    distance_km: float
    elevation_m: float
    name: str | None = None


@dataclass(frozen=True)
class ProfileStats:
    total_distance_km: float
    min_elevation_m: float
    max_elevation_m: float
    gain_m: float
    loss_m: float


@dataclass(frozen=True)
class ElevationProfile:
    samples: tuple[ProfileSample, ...]
    markers: tuple[WaypointMarker, ...]
    y_range: tuple[int, int]
    stats: ProfileStats | None

    @property
    def is_empty(self) -> bool:
        return not self.samples


@dataclass(frozen=True)
class _Anchor:
    lat: float
    lon: float
    distance_km: float
    elevation_m: float


def _collect_samples(
    files: Sequence[GPXData],
) -> tuple[list[ProfileSample], list[_Anchor]]:
    samples: list[ProfileSample] = []
    anchors: list[_Anchor] = []
    seen = set()
    distance = 0.0
    prev = None

    for file_index, data in enumerate(files):
        for track in data.tracks:
            for point in track:
                if point.ele is None:
                    continue
                key = track_point_key(point)
                if key in seen:
                    continue
                seen.add(key)

                if prev is not None:
                    distance += haversine_km(prev.lat, prev.lon, point.lat, point.lon)
                prev = point

                anchors.append(_Anchor(point.lat, point.lon, distance, point.ele))
                samples.append(ProfileSample(distance, point.ele, file_index))

    return samples, anchors


def _place_waypoints(
    files: Sequence[GPXData], anchors: list[_Anchor]
) -> list[WaypointMarker]:
    markers: list[WaypointMarker] = []
    seen = set()
    for data in files:
        for waypoint in data.waypoints:
            key = waypoint_key(waypoint)
            if key in seen:
                continue
            seen.add(key)

            if not anchors:
                ele = waypoint.ele if waypoint.ele is not None else 0.0
                markers.append(WaypointMarker(float(len(markers)), ele, waypoint.name))
                continue

            nearest = min(
                anchors,
                key=lambda a: planar_distance(waypoint.lat, waypoint.lon, a.lat, a.lon),
            )
            ele = waypoint.ele if waypoint.ele is not None else nearest.elevation_m
            markers.append(WaypointMarker(nearest.distance_km, ele, waypoint.name))
    return markers


def downsample(samples: Sequence, max_samples: int) -> list:
    """
    Keeps every n-th sample, starting at index 0, so that at most
    max_samples entries remain.
    """
    if max_samples < 1:
        raise ValueError("max_samples must be at least 1.")
    if len(samples) <= max_samples:
        return list(samples)
    step = math.ceil(len(samples) / max_samples)
    return list(samples[::step])


def compute_stats(samples: Sequence[ProfileSample]) -> ProfileStats | None:
    if not samples:
        return None
    elevations = [s.elevation_m for s in samples]
    gain = 0.0
    loss = 0.0
    for idx in range(1, len(elevations)):
        diff = elevations[idx] - elevations[idx - 1]
        if diff > 0:
            gain += diff
        else:
            loss += -diff
    return ProfileStats(
        total_distance_km=samples[-1].distance_km,
        min_elevation_m=min(elevations),
        max_elevation_m=max(elevations),
        gain_m=gain,
        loss_m=loss,
    )


def y_axis_range(elevations: Sequence[float]) -> tuple[int, int]:
    if elevations:
        low, high = min(elevations), max(elevations)
    else:
        low, high = EMPTY_Y_BOUNDS
    padding = (high - low) * Y_PADDING_RATIO or Y_PADDING_FLAT
    return math.floor(low - padding), math.ceil(high + padding)


def build_profile(
    files: Sequence[GPXData], *, max_samples: int = DEFAULT_MAX_SAMPLES
) -> ElevationProfile:
    """
    Builds a chartable elevation-vs-distance profile from one or more files.
    Points shared between files are counted once and distance keeps
    accumulating across track and file boundaries. Waypoints are pinned to the
    nearest elevation-bearing track point, or spread at 0, 1, 2, ... when the
    files carry no elevation at all.
    Statistics and the y-axis range come from the full sample list; only the
    returned samples are down-sampled.
    Args:
        files: Files in display order.
        max_samples: Upper bound on the number of returned samples.
    Returns:
        ElevationProfile with samples, waypoint markers, y-axis range and stats.
    """
    if max_samples < 1:
        raise ValueError("max_samples must be at least 1.")

    samples, anchors = _collect_samples(files)
    markers = _place_waypoints(files, anchors)

    if not samples and markers:
        samples = [ProfileSample(m.distance_km, m.elevation_m, 0) for m in markers]

    stats = compute_stats(samples)
    y_range = y_axis_range(
        [s.elevation_m for s in samples] + [m.elevation_m for m in markers]
    )
    shown = downsample(samples, max_samples)
    logger.debug(
        "Profile: %s samples (%s shown), %s waypoint markers",
        len(samples),
        len(shown),
        len(markers),
    )
    return ElevationProfile(
        samples=tuple(shown),
        markers=tuple(markers),
        y_range=y_range,
        stats=stats,
    )
