"""Build the GPX document model from loaded tracks and points."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

import gpxpy.gpx

from coredata_gpx.errors import EmptySelectionError, OrphanPointError, TimestampError
from coredata_gpx.models import DESCRIPTION_PREFIX, GPX_CREATOR, GPX_VERSION, TrackPointRecord, TrackRecord
from coredata_gpx.timeutils import dt_from_reference_seconds, format_iso

logger = logging.getLogger(__name__)


def convert_timestamp(seconds: float, where: str) -> datetime:
    """dt_from_reference_seconds, raising TimestampError with context.

    Args:
        seconds: Stored reference-epoch seconds.
        where: Column/row description used in the error message.
    """

    try:
        return dt_from_reference_seconds(seconds)
    except ValueError as exc:
        raise TimestampError(f"invalid {where}: {exc}") from exc


def to_gpx_point(point: TrackPointRecord) -> gpxpy.gpx.GPXTrackPoint:
    """Convert a stored sample into a GPX track point."""

    return gpxpy.gpx.GPXTrackPoint(
        latitude=point.latitude,
        longitude=point.longitude,
        elevation=point.elevation,
        time=convert_timestamp(point.sampled_at, f"ZCOURSEPOINT.ZDATE of a point in track {point.track_id}"),
    )


def track_description(track: TrackRecord) -> str:
    """Description text embedding the track's own timestamp."""

    recorded = convert_timestamp(track.recorded_at, f"ZTRACK.ZDATE of track {track.id} ({track.name!r})")
    return DESCRIPTION_PREFIX + format_iso(recorded)


def group_points(
    tracks: Sequence[TrackRecord],
    points: Sequence[TrackPointRecord],
) -> dict[int, list[gpxpy.gpx.GPXTrackPoint]]:
    """Group points under their owning track id.

    Points are appended in the order given, so time-ordered input yields
    time-ordered lists per track regardless of how tracks interleave.

    Args:
        tracks: Selected tracks.
        points: Points of the selected tracks, oldest first.

    Returns:
        Mapping track id -> GPX points. Every selected track has an entry.

    Raises:
        OrphanPointError: If a point's track id is not among the tracks.
    """

    if not tracks:
        return {}

    grouped: dict[int, list[gpxpy.gpx.GPXTrackPoint]] = {t.id: [] for t in tracks}
    for pt in points:
        bucket = grouped.get(pt.track_id)
        if bucket is None:
            raise OrphanPointError(pt.track_id)
        bucket.append(to_gpx_point(pt))
    return grouped


def build_gpx(
    tracks: Sequence[TrackRecord],
    points: Sequence[TrackPointRecord],
    require_tracks: bool = False,
) -> gpxpy.gpx.GPX:
    """Assemble the GPX document.

    Args:
        tracks: Selected tracks in load order.
        points: Their points, oldest first.
        require_tracks: Raise instead of returning an empty document when
            no track is selected.

    Returns:
        GPX 1.1 document with one single-segment track per selected track.

    Raises:
        EmptySelectionError: If tracks is empty and require_tracks is set.
        OrphanPointError: If a point belongs to no selected track.
    """

    gpx = gpxpy.gpx.GPX()
    gpx.version = GPX_VERSION
    gpx.creator = GPX_CREATOR

    if not tracks:
        if require_tracks:
            raise EmptySelectionError("no track matched the selection")
        logger.warning("no track matched the selection, writing an empty document")
        return gpx

    grouped = group_points(tracks, points)
    for db_track in tracks:
        segment = gpxpy.gpx.GPXTrackSegment(points=grouped[db_track.id])
        track = gpxpy.gpx.GPXTrack(name=db_track.name, description=track_description(db_track))
        track.segments.append(segment)
        gpx.tracks.append(track)
    return gpx
