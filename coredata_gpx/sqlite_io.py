"""SQLite input utilities for the Core Data track store."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Iterable, Iterator

from coredata_gpx.errors import DatabaseConnectionError, QueryError
from coredata_gpx.models import DEFAULT_SCHEMA, CoreDataSchema, TrackPointRecord, TrackRecord

logger = logging.getLogger(__name__)

# Track ids bound per point query.
MAX_QUERY_IDS: Final[int] = 500


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Quick summary of what was loaded."""

    tracks_total: int
    tracks_selected: int
    points_loaded: int


@contextmanager
def open_database(db_path: str | Path) -> Iterator[sqlite3.Connection]:
    """Open the database read-only and close it on exit.

    Args:
        db_path: Path to the SQLite file.

    Yields:
        An open connection.

    Raises:
        DatabaseConnectionError: If the file is missing or cannot be opened.
    """

    p = Path(db_path)
    if not p.is_file():
        raise DatabaseConnectionError(f"database file not found: {str(p)!r}")
    try:
        conn = sqlite3.connect(f"{p.resolve().as_uri()}?mode=ro", uri=True)
    except sqlite3.Error as exc:
        raise DatabaseConnectionError(f"failed to open database {str(p)!r}: {exc}") from exc
    try:
        # Reads the file header, so non-database files fail here.
        conn.execute("PRAGMA schema_version").fetchone()
    except sqlite3.Error as exc:
        conn.close()
        raise DatabaseConnectionError(f"failed to open database {str(p)!r}: {exc}") from exc
    try:
        yield conn
    finally:
        conn.close()


def _int(row: tuple[Any, ...], idx: int, column: str) -> int:
    value = row[idx]
    if isinstance(value, bool) or not isinstance(value, int):
        raise QueryError(f"column {column} expected integer, got {value!r}")
    return value


def _float(row: tuple[Any, ...], idx: int, column: str) -> float:
    value = row[idx]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise QueryError(f"column {column} expected real, got {value!r}")
    return float(value)


def _text(row: tuple[Any, ...], idx: int, column: str) -> str:
    value = row[idx]
    if not isinstance(value, str):
        raise QueryError(f"column {column} expected text, got {value!r}")
    return value


def _fetch_all(conn: sqlite3.Connection, sql: str, params: Iterable[Any], what: str) -> list[tuple[Any, ...]]:
    try:
        return conn.execute(sql, tuple(params)).fetchall()
    except sqlite3.Error as exc:
        raise QueryError(f"failed to query for {what}: {exc}") from exc


def count_tracks(conn: sqlite3.Connection, schema: CoreDataSchema = DEFAULT_SCHEMA) -> int:
    """Count all rows of the track table."""

    rows = _fetch_all(conn, f"SELECT COUNT(*) FROM {schema.track_table}", (), "tracks")
    return int(rows[0][0])


def load_tracks(
    conn: sqlite3.Connection,
    track_name: str | None = None,
    schema: CoreDataSchema = DEFAULT_SCHEMA,
) -> list[TrackRecord]:
    """Load tracks in storage order.

    Args:
        conn: Open connection.
        track_name: If given, keep only tracks with exactly this name (case-sensitive).
        schema: Table/column names.

    Returns:
        Selected tracks.

    Raises:
        QueryError: If the query fails or a row cannot be decoded.
    """

    s = schema
    sql = f"SELECT {s.track_id}, {s.track_name}, {s.track_date} FROM {s.track_table}"
    params: tuple[Any, ...] = ()
    if track_name is not None:
        sql += f" WHERE {s.track_name} = ?"
        params = (track_name,)

    return [
        TrackRecord(
            id=_int(row, 0, s.track_id),
            name=_text(row, 1, s.track_name),
            recorded_at=_float(row, 2, s.track_date),
        )
        for row in _fetch_all(conn, sql, params, "tracks")
    ]


def load_track_points(
    conn: sqlite3.Connection,
    track_ids: Iterable[int],
    schema: CoreDataSchema = DEFAULT_SCHEMA,
) -> list[TrackPointRecord]:
    """Load the points of the given tracks, ordered by time ascending.

    Args:
        conn: Open connection.
        track_ids: Ids of the selected tracks. Empty means no query at all.
        schema: Table/column names.

    Returns:
        Points of all selected tracks, oldest first.

    Raises:
        QueryError: If the query fails or a row cannot be decoded.
    """

    ids = list(dict.fromkeys(track_ids))
    if not ids:
        return []

    s = schema
    out: list[TrackPointRecord] = []
    # Stay below SQLite's bound-variable limit (999 on older builds).
    for start in range(0, len(ids), MAX_QUERY_IDS):
        chunk = ids[start : start + MAX_QUERY_IDS]
        placeholders = ", ".join("?" for _ in chunk)
        sql = (
            f"SELECT {s.point_track}, {s.point_latitude}, {s.point_longitude}, {s.point_altitude}, {s.point_date} "
            f"FROM {s.point_table} "
            f"WHERE {s.point_track} IN ({placeholders}) "
            f"ORDER BY {s.point_date}"
        )
        out.extend(
            TrackPointRecord(
                track_id=_int(row, 0, s.point_track),
                latitude=_float(row, 1, s.point_latitude),
                longitude=_float(row, 2, s.point_longitude),
                elevation=_float(row, 3, s.point_altitude),
                sampled_at=_float(row, 4, s.point_date),
            )
            for row in _fetch_all(conn, sql, chunk, "trackpoints")
        )

    if len(ids) > MAX_QUERY_IDS:
        # Each chunk is sorted; merge them (stable, so equal times keep chunk order).
        out.sort(key=lambda p: p.sampled_at)
    return out


def load_selection(
    conn: sqlite3.Connection,
    track_name: str | None = None,
    schema: CoreDataSchema = DEFAULT_SCHEMA,
) -> tuple[list[TrackRecord], list[TrackPointRecord], LoadSummary]:
    """Load the selected tracks and all of their points.

    Returns:
        (tracks, points, summary)
    """

    tracks = load_tracks(conn, track_name, schema)
    points = load_track_points(conn, (t.id for t in tracks), schema)
    summary = LoadSummary(
        tracks_total=count_tracks(conn, schema) if track_name is not None else len(tracks),
        tracks_selected=len(tracks),
        points_loaded=len(points),
    )
    logger.info(
        "loaded %s of %s tracks with %s points",
        summary.tracks_selected,
        summary.tracks_total,
        summary.points_loaded,
    )
    return tracks, points, summary
