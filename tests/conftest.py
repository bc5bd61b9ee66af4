from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Callable, Sequence

import pytest

SCHEMA_SQL = """
CREATE TABLE ZTRACK (Z_PK INTEGER PRIMARY KEY, ZNAME VARCHAR, ZDATE TIMESTAMP);
CREATE TABLE ZCOURSEPOINT (
    Z_PK INTEGER PRIMARY KEY,
    ZTRACK INTEGER,
    ZLATITUDE FLOAT,
    ZLONGITUDE FLOAT,
    ZALTITUDE FLOAT,
    ZDATE TIMESTAMP
);
"""

TrackRow = tuple[object, object, object]
PointRow = tuple[object, object, object, object, object]

# Two interleaved-in-id but contiguous-in-time tracks.
TRACKS: list[TrackRow] = [
    (1, "Morning Run", 0.0),
    (2, "Evening Walk", 86400.0),
]
POINTS: list[PointRow] = [
    (1, 47.0, 8.0, 400.0, 10.0),
    (1, 47.1, 8.1, 401.0, 20.0),
    (1, 47.2, 8.2, 402.5, 30.5),
    (2, 46.0, 7.0, 500.0, 86410.0),
    (2, 46.1, 7.1, 501.0, 86420.0),
]


def write_db(path: Path, tracks: Sequence[TrackRow], points: Sequence[PointRow]) -> Path:
    conn = sqlite3.connect(path)
    try:
        conn.executescript(SCHEMA_SQL)
        conn.executemany("INSERT INTO ZTRACK (Z_PK, ZNAME, ZDATE) VALUES (?, ?, ?)", tracks)
        conn.executemany(
            "INSERT INTO ZCOURSEPOINT (ZTRACK, ZLATITUDE, ZLONGITUDE, ZALTITUDE, ZDATE) VALUES (?, ?, ?, ?, ?)",
            points,
        )
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def make_db(tmp_path: Path) -> Callable[..., Path]:
    def _make(
        tracks: Sequence[TrackRow] = TRACKS,
        points: Sequence[PointRow] = POINTS,
        name: str = "Tracks.sqlite",
    ) -> Path:
        return write_db(tmp_path / name, tracks, points)

    return _make


@pytest.fixture
def db_path(make_db: Callable[..., Path]) -> Path:
    return make_db()


@pytest.fixture
def conn(db_path: Path):
    c = sqlite3.connect(db_path)
    yield c
    c.close()
