"""Data models for tracks and track points read from the Core Data store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True)
class TrackRecord:
    """A single recorded track (one row of ZTRACK).

    Attributes:
        id: Primary key (Z_PK).
        name: Display name. Not unique.
        recorded_at: Seconds since 2001-01-01T00:00:00 UTC.
    """

    id: int
    name: str
    recorded_at: float


@dataclass(frozen=True, slots=True)
class TrackPointRecord:
    """A single GPS sample (one row of ZCOURSEPOINT).

    Attributes:
        track_id: Owning track primary key.
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        elevation: Altitude in meters.
        sampled_at: Seconds since 2001-01-01T00:00:00 UTC.
    """

    track_id: int
    latitude: float
    longitude: float
    elevation: float
    sampled_at: float


@dataclass(frozen=True, slots=True)
class CoreDataSchema:
    """Table and column names of the source database."""

    track_table: str = "ZTRACK"
    track_id: str = "Z_PK"
    track_name: str = "ZNAME"
    track_date: str = "ZDATE"

    point_table: str = "ZCOURSEPOINT"
    point_track: str = "ZTRACK"
    point_latitude: str = "ZLATITUDE"
    point_longitude: str = "ZLONGITUDE"
    point_altitude: str = "ZALTITUDE"
    point_date: str = "ZDATE"


DEFAULT_SCHEMA: Final[CoreDataSchema] = CoreDataSchema()

GPX_VERSION: Final[str] = "1.1"
GPX_CREATOR: Final[str] = "coredata-gpx"
DESCRIPTION_PREFIX: Final[str] = "Track Timestamp: "
