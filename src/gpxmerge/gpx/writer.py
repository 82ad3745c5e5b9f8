from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from lxml import etree

from gpxmerge.gpx.models import GPXData, utc_timestamp

logger = logging.getLogger(__name__)

GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
DEFAULT_CREATOR = "gpxmerge"


def _tag(name: str) -> str:
    return f"{{{GPX_NAMESPACE}}}{name}"


def _add(parent, name: str, text: str | None = None, **attrs: str):
    element = etree.SubElement(parent, _tag(name), attrs)
    if text is not None:
        element.text = text
    return element


def _number(value: float) -> str:
    return repr(value)


def _build_metadata(root, data: GPXData, now: datetime | None) -> None:
    meta = data.metadata
    metadata = _add(root, "metadata")
    _add(metadata, "name", (meta.name if meta else None) or data.name)
    _add(metadata, "desc", (meta.desc if meta else None) or "")
    if meta and meta.author:
        author = _add(metadata, "author")
        _add(author, "name", meta.author)
    _add(metadata, "time", (meta.time if meta else None) or utc_timestamp(now))


def build_tree(
    data: GPXData, *, creator: str = DEFAULT_CREATOR, now: datetime | None = None
):
    root = etree.Element(
        _tag("gpx"),
        {"version": "1.1", "creator": creator},
        nsmap={None: GPX_NAMESPACE},
    )
    _build_metadata(root, data, now)

    for waypoint in data.waypoints:
        wpt = _add(
            root, "wpt", lat=_number(waypoint.lat), lon=_number(waypoint.lon)
        )
        if waypoint.ele is not None:
            _add(wpt, "ele", _number(waypoint.ele))
        if waypoint.name:
            _add(wpt, "name", waypoint.name)

    for index, track in enumerate(data.tracks):
        trk = _add(root, "trk")
        _add(trk, "name", f"Track {index + 1}")
        segment = _add(trk, "trkseg")
        for point in track:
            trkpt = _add(
                segment, "trkpt", lat=_number(point.lat), lon=_number(point.lon)
            )
            if point.ele is not None:
                _add(trkpt, "ele", _number(point.ele))
            if point.time:
                _add(trkpt, "time", point.time)

    return root


def to_xml(
    data: GPXData, *, creator: str = DEFAULT_CREATOR, now: datetime | None = None
) -> str:
    """
    Serializes GPXData into a GPX 1.1 document.
    Coordinates and elevations are written without rounding, so parsing the
    output reproduces the same tracks and waypoints.
    Args:
        data: The GPXData to serialize.
        creator: Value for the root creator attribute.
        now: Timestamp used when the metadata carries no time.
    Returns:
        The XML document as a string, including the XML declaration.
    """
    root = build_tree(data, creator=creator, now=now)
    payload = etree.tostring(
        root, xml_declaration=True, encoding="UTF-8", pretty_print=True
    )
    return payload.decode("utf-8")


def write_gpx(data: GPXData, path: Path, **kwargs) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_xml(data, **kwargs), encoding="utf-8")
    logger.info("Wrote %s", path)
    return path
