from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator

from lxml import etree

from gpxmerge.errors import ParseError
from gpxmerge.gpx.models import GPXData, GPXMetadata, TrackPoint, Waypoint

logger = logging.getLogger(__name__)

GPX_SUFFIX = ".gpx"


def _xml_parser(encoding: str | None = None) -> etree.XMLParser:
    return etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def _local_name(element) -> str | None:
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _children(element, name: str) -> Iterator:
    for child in element:
        if _local_name(child) == name:
            yield child


def _descendants(element, name: str) -> Iterator:
    for node in element.iter():
        if _local_name(node) == name:
            yield node


def _first(elements: Iterable):
    return next(iter(elements), None)


def _child_text(element, name: str) -> str | None:
    child = _first(_children(element, name))
    if child is None:
        return None
    return child.text or None


def _parse_coordinate(value: str | None) -> float:
    if value is None:
        return 0.0
    try:
        number = float(value)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _parse_elevation(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_root(xml_text: str | bytes, source: str):
    if isinstance(xml_text, str):
        data = xml_text.encode("utf-8")
        parser = _xml_parser("utf-8")
    else:
        data = xml_text
        parser = _xml_parser()
    try:
        return etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise ParseError(f"Failed to parse GPX file {source}: {exc}", source) from exc


def _parse_metadata(root) -> GPXMetadata | None:
    element = _first(_descendants(root, "metadata"))
    if element is None:
        return None
    author = _first(_children(element, "author"))
    return GPXMetadata(
        name=_child_text(element, "name"),
        desc=_child_text(element, "desc"),
        author=_child_text(author, "name") if author is not None else None,
        time=_child_text(element, "time"),
    )


def _parse_track_point(element) -> TrackPoint:
    return TrackPoint(
        lat=_parse_coordinate(element.get("lat")),
        lon=_parse_coordinate(element.get("lon")),
        ele=_parse_elevation(_child_text(element, "ele")),
        time=_child_text(element, "time"),
    )


def _parse_waypoint(element) -> Waypoint:
    return Waypoint(
        lat=_parse_coordinate(element.get("lat")),
        lon=_parse_coordinate(element.get("lon")),
        ele=_parse_elevation(_child_text(element, "ele")),
        name=_child_text(element, "name"),
    )


def strip_gpx_suffix(file_name: str) -> str:
    if file_name.lower().endswith(GPX_SUFFIX):
        return file_name[: -len(GPX_SUFFIX)]
    return file_name


def parse_gpx(xml_text: str | bytes, fallback_name: str) -> GPXData:
    """
    Parses GPX text into a GPXData value.
    Elements are matched by local name so documents with or without the GPX
    namespace parse the same way. Malformed numbers never fail the parse:
    coordinates fall back to 0.0 and elevations to None.
    Args:
        xml_text: GPX document as text or raw bytes.
        fallback_name: Name used when the document has no metadata name,
            usually the uploaded file name.
    Returns:
        Parsed GPXData.
    Raises:
        ParseError: If the input is not well-formed XML.
    """
    root = _parse_root(xml_text, fallback_name)
    metadata = _parse_metadata(root)

    tracks = []
    for trk in _descendants(root, "trk"):
        for segment in _children(trk, "trkseg"):
            points = tuple(
                _parse_track_point(trkpt) for trkpt in _children(segment, "trkpt")
            )
            if points:
                tracks.append(points)

    waypoints = tuple(_parse_waypoint(wpt) for wpt in _descendants(root, "wpt"))

    name = (metadata.name if metadata else None) or strip_gpx_suffix(fallback_name)
    logger.debug(
        "Parsed %s: %s tracks, %s waypoints", fallback_name, len(tracks), len(waypoints)
    )
    return GPXData(
        name=name,
        tracks=tuple(tracks),
        waypoints=waypoints,
        metadata=metadata,
    )
