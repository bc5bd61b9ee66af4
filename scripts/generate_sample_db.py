from __future__ import annotations

import argparse
import random
import sqlite3
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

from coredata_gpx.timeutils import reference_seconds_from_dt


@dataclass(frozen=True, slots=True)
class Route:
    name: str
    lat: float
    lon: float
    ele: float


SCHEMA_SQL = """
CREATE TABLE ZTRACK (
    Z_PK INTEGER PRIMARY KEY,
    Z_ENT INTEGER,
    Z_OPT INTEGER,
    ZNAME VARCHAR,
    ZDATE TIMESTAMP
);
CREATE TABLE ZCOURSEPOINT (
    Z_PK INTEGER PRIMARY KEY,
    Z_ENT INTEGER,
    Z_OPT INTEGER,
    ZTRACK INTEGER,
    ZLATITUDE FLOAT,
    ZLONGITUDE FLOAT,
    ZALTITUDE FLOAT,
    ZDATE TIMESTAMP
);
CREATE INDEX ZCOURSEPOINT_ZTRACK_INDEX ON ZCOURSEPOINT (ZTRACK);
"""


def generate_tracks(
    *,
    routes: list[Route],
    points_per_track: int,
    seed: int,
    start: datetime,
) -> tuple[list[tuple[int, str, float]], list[tuple[int, float, float, float, float]]]:
    """Generate (track rows, point rows) as random walks, one track per route."""

    rng = random.Random(seed)
    track_rows: list[tuple[int, str, float]] = []
    point_rows: list[tuple[int, float, float, float, float]] = []
    cur = start

    for pk, route in enumerate(routes, start=1):
        track_rows.append((pk, route.name, reference_seconds_from_dt(cur)))
        lat, lon, ele = route.lat, route.lon, route.ele
        for _ in range(points_per_track):
            lat += rng.uniform(-0.0002, 0.0002)
            lon += rng.uniform(-0.0002, 0.0002)
            ele = max(0.0, ele + rng.uniform(-1.5, 1.5))
            cur = cur + timedelta(seconds=rng.uniform(1.0, 5.0))
            point_rows.append((pk, round(lat, 7), round(lon, 7), round(ele, 1), reference_seconds_from_dt(cur)))
        # Gap between activities
        cur = cur + timedelta(hours=rng.uniform(2, 20))

    return track_rows, point_rows


def main() -> int:
    p = argparse.ArgumentParser(description="Generate a fake Core Data track store for demo/testing.")
    p.add_argument("--out", type=str, default="sample_data/Tracks.sqlite", help="Output SQLite path")
    p.add_argument("--points", type=int, default=200, help="Points per track")
    p.add_argument("--seed", type=int, default=42, help="Random seed (reproducible)")
    p.add_argument("--start", type=str, default="2024-05-01 07:30:00", help="Start time (UTC)")
    args = p.parse_args()

    start = datetime.fromisoformat(args.start).replace(tzinfo=UTC)
    routes = [
        Route("Morning Run", 47.3769, 8.5417, 408.0),
        Route("Evening Walk", 47.3667, 8.5500, 415.0),
        Route("Morning Run", 47.3800, 8.5300, 430.0),
        Route("Hike", 46.5586, 7.9790, 1034.0),
    ]
    track_rows, point_rows = generate_tracks(
        routes=routes, points_per_track=args.points, seed=args.seed, start=start
    )

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.unlink(missing_ok=True)

    conn = sqlite3.connect(out_path)
    try:
        conn.executescript(SCHEMA_SQL)
        conn.executemany(
            "INSERT INTO ZTRACK (Z_PK, Z_ENT, Z_OPT, ZNAME, ZDATE) VALUES (?, 1, 1, ?, ?)", track_rows
        )
        conn.executemany(
            "INSERT INTO ZCOURSEPOINT (Z_ENT, Z_OPT, ZTRACK, ZLATITUDE, ZLONGITUDE, ZALTITUDE, ZDATE) "
            "VALUES (2, 1, ?, ?, ?, ?, ?)",
            point_rows,
        )
        conn.commit()
    finally:
        conn.close()

    print(f"Generated: {out_path} (tracks={len(track_rows)}, points={len(point_rows)}, seed={args.seed})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
