"""
Tests for GPX serialization.
"""

from datetime import datetime, timezone

from lxml import etree

from gpxmerge.gpx import (
    GPX_NAMESPACE,
    GPXData,
    GPXMetadata,
    TrackPoint,
    Waypoint,
    parse_gpx,
    to_xml,
    write_gpx,
)

NS = {"g": GPX_NAMESPACE}


def _root(xml):
    return etree.fromstring(xml.encode("utf-8"))


class TestToXml:
    """Document structure."""

    def test_generates_gpx_document(self):
        data = GPXData(
            name="Test",
            tracks=((TrackPoint(50.0, 14.0, 200.0, "2024-01-01T10:00:00Z"),),),
            waypoints=(Waypoint(50.5, 14.5, 250.0),),
            metadata=GPXMetadata(name="Test Route", desc="A test route"),
        )
        xml = to_xml(data)

        assert xml.startswith("<?xml version='1.0' encoding='UTF-8'?>")
        root = _root(xml)
        assert root.tag == f"{{{GPX_NAMESPACE}}}gpx"
        assert root.get("version") == "1.1"
        assert root.findtext("g:metadata/g:name", namespaces=NS) == "Test Route"
        assert root.findtext("g:metadata/g:desc", namespaces=NS) == "A test route"

        wpt = root.find("g:wpt", NS)
        assert (wpt.get("lat"), wpt.get("lon")) == ("50.5", "14.5")
        assert wpt.findtext("g:ele", namespaces=NS) == "250.0"

        trkpt = root.find("g:trk/g:trkseg/g:trkpt", NS)
        assert (trkpt.get("lat"), trkpt.get("lon")) == ("50.0", "14.0")
        assert [etree.QName(child).localname for child in trkpt] == ["ele", "time"]
        assert trkpt.findtext("g:time", namespaces=NS) == "2024-01-01T10:00:00Z"

    def test_missing_optional_fields(self):
        now = datetime(2024, 3, 2, 8, 0, tzinfo=timezone.utc)
        data = GPXData(name="Minimal", tracks=((TrackPoint(50.0, 14.0),),))
        root = _root(to_xml(data, now=now))

        assert root.findtext("g:metadata/g:name", namespaces=NS) == "Minimal"
        assert root.findtext("g:metadata/g:desc", namespaces=NS) == ""
        assert root.findtext("g:metadata/g:time", namespaces=NS) == (
            "2024-03-02T08:00:00.000Z"
        )
        assert root.find("g:wpt", NS) is None
        assert len(root.find("g:trk/g:trkseg/g:trkpt", NS)) == 0

    def test_tracks_are_numbered(self):
        data = GPXData(
            name="x",
            tracks=((TrackPoint(1, 1),), (TrackPoint(2, 2),), (TrackPoint(3, 3),)),
        )
        root = _root(to_xml(data))
        names = [trk.findtext("g:name", namespaces=NS) for trk in root.findall("g:trk", NS)]
        assert names == ["Track 1", "Track 2", "Track 3"]

    def test_special_characters_are_escaped(self):
        data = GPXData(
            name="Fish & Chips <loop>",
            waypoints=(Waypoint(1.0, 2.0, name='"Rock" & Roll'),),
        )
        xml = to_xml(data)
        parsed = parse_gpx(xml, "x.gpx")
        assert parsed.name == "Fish & Chips <loop>"
        assert parsed.waypoints[0].name == '"Rock" & Roll'

    def test_empty_time_and_name_are_omitted(self):
        data = GPXData(
            name="blank",
            tracks=((TrackPoint(1.0, 2.0, None, ""),),),
            waypoints=(Waypoint(3.0, 4.0, name=""),),
        )
        root = _root(to_xml(data))
        assert root.find("g:wpt/g:name", NS) is None
        assert root.find("g:trk/g:trkseg/g:trkpt/g:time", NS) is None
        parsed = parse_gpx(to_xml(data), "blank.gpx")
        assert parsed.tracks == ((TrackPoint(1.0, 2.0),),)
        assert parsed.waypoints == (Waypoint(3.0, 4.0),)

    def test_author_and_creator(self):
        data = GPXData(name="x", metadata=GPXMetadata(author="Ana"))
        root = _root(to_xml(data, creator="unit-test"))
        assert root.get("creator") == "unit-test"
        assert root.findtext("g:metadata/g:author/g:name", namespaces=NS) == "Ana"


class TestRoundTrip:
    """Parsing serializer output."""

    def test_coordinates_only(self):
        data = GPXData(
            name="plain",
            tracks=(
                (TrackPoint(50.123456789, 14.987654321), TrackPoint(-33.5, 151.25)),
                (TrackPoint(0.1, -0.2),),
            ),
            waypoints=(Waypoint(10.0, 20.0),),
        )
        parsed = parse_gpx(to_xml(data), "any.gpx")
        assert parsed.tracks == data.tracks
        assert parsed.waypoints == data.waypoints

    def test_full_fields(self):
        data = GPXData(
            name="full",
            tracks=((TrackPoint(47.0, 8.0, 1234.5, "2024-01-01T10:00:00.250Z"),),),
            waypoints=(Waypoint(47.1, 8.1, 1500.25, "Summit"),),
            metadata=GPXMetadata(
                name="Full", desc="Everything", author="Ana", time="2024-01-01T09:00:00Z"
            ),
        )
        parsed = parse_gpx(to_xml(data), "full.gpx")
        assert parsed.tracks == data.tracks
        assert parsed.waypoints == data.waypoints
        assert parsed.metadata == data.metadata


def test_write_gpx(tmp_path):
    data = GPXData(name="saved", waypoints=(Waypoint(1.0, 2.0, name="Here"),))
    path = write_gpx(data, tmp_path / "out" / "saved.gpx")
    assert path.is_file()
    assert parse_gpx(path.read_bytes(), path.name).waypoints == data.waypoints
