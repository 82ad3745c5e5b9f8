from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple


@dataclass(frozen=True)
class TrackPoint:
    lat: float
    lon: float
    ele: float | None = None
    time: str | None = None


@dataclass(frozen=True)
class Waypoint:
    lat: float
    lon: float
    ele: float | None = None
    name: str | None = None


Track = tuple[TrackPoint, ...]


@dataclass(frozen=True)
class GPXMetadata:
    name: str | None = None
    desc: str | None = None
    author: str | None = None
    time: str | None = None


@dataclass(frozen=True)
class GPXData:
    name: str
    tracks: tuple[Track, ...] = ()
    waypoints: tuple[Waypoint, ...] = ()
    metadata: GPXMetadata | None = None

    @property
    def is_empty(self) -> bool:
        return not self.tracks and not self.waypoints

    def iter_points(self):
        for track in self.tracks:
            yield from track


class TrackPointKey(NamedTuple):
    lat: str
    lon: str
    ele: str | None
    time: str | None


class WaypointKey(NamedTuple):
    lat: str
    lon: str


def _fixed(value: float, digits: int) -> str:
    # Exact binary ties round away from zero, so 100.25 keys as "100.3".
    # Adding 0.0 folds -0.0 into 0.0 so both format the same way.
    rounded = Decimal(value + 0.0).quantize(
        Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP
    )
    return f"{rounded:f}"


def track_point_key(point: TrackPoint) -> TrackPointKey:
    """
    Identity used to decide whether two track points are the same sample.
    Coordinates are compared at 6 decimals, elevation at 1 decimal and the
    timestamp as raw text.
    """
    ele = None if point.ele is None else _fixed(point.ele, 1)
    return TrackPointKey(_fixed(point.lat, 6), _fixed(point.lon, 6), ele, point.time)


def waypoint_key(waypoint: Waypoint) -> WaypointKey:
    """
    Identity for waypoints: coordinates at 5 decimals only. Name and elevation
    are ignored, so the first waypoint seen at a location wins.
    """
    return WaypointKey(_fixed(waypoint.lat, 5), _fixed(waypoint.lon, 5))


def utc_timestamp(now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
