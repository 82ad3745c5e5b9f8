"""
Tests for per-file summaries.
"""

import pytest

from gpxmerge.geo import haversine_km
from gpxmerge.gpx import GPXData, TrackPoint, Waypoint
from gpxmerge.summary import summarize, total_distance_km, total_points


def test_empty_tracks():
    data = GPXData(name="test")
    assert total_points(data) == 0
    assert total_distance_km(data) == 0


def test_counts_all_points():
    data = GPXData(
        name="test",
        tracks=(
            (TrackPoint(50.0, 14.0), TrackPoint(50.1, 14.1)),
            (TrackPoint(51.0, 15.0),),
        ),
    )
    assert total_points(data) == 3


def test_distance_does_not_bridge_tracks():
    data = GPXData(
        name="test",
        tracks=(
            (TrackPoint(50.0, 14.0), TrackPoint(50.1, 14.0)),
            (TrackPoint(51.0, 15.0), TrackPoint(51.1, 15.0)),
        ),
    )
    expected = haversine_km(50.0, 14.0, 50.1, 14.0) + haversine_km(51.0, 15.0, 51.1, 15.0)
    assert total_distance_km(data) == pytest.approx(expected)
    assert total_distance_km(data) > 20


def test_summarize():
    data = GPXData(
        name="loop",
        tracks=((TrackPoint(50.0, 14.0), TrackPoint(50.1, 14.0)),),
        waypoints=(Waypoint(50.0, 14.0),),
    )
    summary = summarize(data)
    assert summary.name == "loop"
    assert summary.track_count == 1
    assert summary.waypoint_count == 1
    assert summary.point_count == 2
    assert 10 < summary.distance_km < 12
