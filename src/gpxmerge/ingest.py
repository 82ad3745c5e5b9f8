from __future__ import annotations

import logging
from pathlib import Path

from gpxmerge.errors import EmptyResultError, InvalidExtensionError
from gpxmerge.gpx.models import GPXData
from gpxmerge.gpx.parser import GPX_SUFFIX, parse_gpx

logger = logging.getLogger(__name__)


def check_extension(file_name: str) -> None:
    if not file_name.lower().endswith(GPX_SUFFIX):
        raise InvalidExtensionError(
            f"Please upload a GPX file: {file_name} does not end in {GPX_SUFFIX}",
            file_name,
        )


def ensure_not_empty(data: GPXData, source: str) -> GPXData:
    if data.is_empty:
        raise EmptyResultError(
            f"No tracks or waypoints found in GPX file {source}", source
        )
    return data


def parse_gpx_upload(content: str | bytes, file_name: str) -> GPXData:
    """
    Runs the full acceptance pipeline for one uploaded file: extension check,
    parse, and rejection of files that carry neither tracks nor waypoints.
    Raises InvalidExtensionError, ParseError or EmptyResultError.
    """
    check_extension(file_name)
    return ensure_not_empty(parse_gpx(content, file_name), file_name)


def load_gpx_file(path: Path) -> GPXData:
    data = parse_gpx_upload(path.read_bytes(), path.name)
    logger.debug("Loaded %s as %r", path, data.name)
    return data
