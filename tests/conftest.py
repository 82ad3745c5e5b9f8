import pytest

from gpxmerge.gpx import GPXData, TrackPoint, Waypoint


SIMPLE_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1">
  <metadata>
    <name>Test Track</name>
    <desc>A test description</desc>
  </metadata>
  <trk>
    <trkseg>
      <trkpt lat="50.0" lon="14.0">
        <ele>200</ele>
        <time>2024-01-01T10:00:00Z</time>
      </trkpt>
      <trkpt lat="50.1" lon="14.1">
        <ele>250</ele>
      </trkpt>
    </trkseg>
  </trk>
</gpx>
"""

NAMESPACED_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx xmlns="http://www.topografix.com/GPX/1/1" version="1.1" creator="test">
  <wpt lat="47.1" lon="8.2">
    <ele>1200</ele>
    <name>Hut</name>
  </wpt>
  <trk>
    <name>Morning</name>
    <trkseg>
      <trkpt lat="47.0" lon="8.0"><ele>1000</ele></trkpt>
      <trkpt lat="47.01" lon="8.01"><ele>1010</ele></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


@pytest.fixture
def simple_gpx_text():
    return SIMPLE_GPX


@pytest.fixture
def namespaced_gpx_text():
    return NAMESPACED_GPX


@pytest.fixture
def route_one():
    return GPXData(
        name="Route 1",
        tracks=((TrackPoint(50.0, 14.0, 200.0),),),
        waypoints=(Waypoint(50.0, 14.0, name="Start"),),
    )


@pytest.fixture
def route_two():
    return GPXData(
        name="Route 2",
        tracks=((TrackPoint(51.0, 15.0, 300.0),),),
        waypoints=(Waypoint(51.0, 15.0, name="End"),),
    )


@pytest.fixture
def write_gpx_file(tmp_path):
    def _write(name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
