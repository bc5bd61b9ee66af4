"""End-to-end pipeline: database -> GPX document -> file."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import gpxpy.gpx

from coredata_gpx.assemble import build_gpx
from coredata_gpx.gpx_io import write_gpx
from coredata_gpx.sqlite_io import load_selection, open_database


def extract(
    conn: sqlite3.Connection,
    track_name: str | None = None,
    require_tracks: bool = False,
) -> gpxpy.gpx.GPX:
    """Load the selected tracks and assemble them into a GPX document."""

    tracks, points, _ = load_selection(conn, track_name)
    return build_gpx(tracks, points, require_tracks=require_tracks)


def convert_file(
    sqlite_path: str | Path,
    output_path: str | Path,
    track_name: str | None = None,
    require_tracks: bool = False,
) -> gpxpy.gpx.GPX:
    """Convert a database file into a GPX file.

    Args:
        sqlite_path: Source database.
        output_path: Destination GPX file (created or truncated).
        track_name: Optional exact track name filter.
        require_tracks: Fail if the filter matches nothing.

    Returns:
        The document that was written.
    """

    with open_database(sqlite_path) as conn:
        gpx = extract(conn, track_name, require_tracks=require_tracks)
    write_gpx(gpx, output_path)
    return gpx
