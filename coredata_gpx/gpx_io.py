"""GPX output utilities."""

from __future__ import annotations

import logging
from pathlib import Path

import gpxpy.gpx

from coredata_gpx.errors import OutputError
from coredata_gpx.models import GPX_VERSION

logger = logging.getLogger(__name__)


def gpx_to_xml(gpx: gpxpy.gpx.GPX) -> str:
    """Serialize the document as GPX 1.1 XML.

    Raises:
        OutputError: If the serializer fails.
    """

    try:
        return gpx.to_xml(version=GPX_VERSION)
    except (gpxpy.gpx.GPXException, ValueError, TypeError) as exc:
        raise OutputError(f"failed to serialize GPX: {exc}") from exc


def write_gpx(gpx: gpxpy.gpx.GPX, out_path: str | Path) -> None:
    """Write the document to out_path (created or truncated).

    The XML is produced before the file is opened, so a serializer failure
    leaves an existing file untouched.

    Raises:
        OutputError: If serialization or writing fails.
    """

    xml = gpx_to_xml(gpx)
    p = Path(out_path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8") as f:
            f.write(xml)
    except OSError as exc:
        raise OutputError(f"failed to write {str(p)!r}: {exc}") from exc
    logger.info("wrote %s tracks to %s", len(gpx.tracks), p)
