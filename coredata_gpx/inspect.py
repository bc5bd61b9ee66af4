"""Summarize the tracks stored in a database."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from coredata_gpx.models import TrackPointRecord, TrackRecord
from coredata_gpx.assemble import convert_timestamp
from coredata_gpx.timeutils import format_iso


@dataclass(frozen=True, slots=True)
class TrackSummary:
    """Per-track overview."""

    id: int
    name: str
    recorded_at: datetime
    points: int
    first_point_at: datetime | None
    last_point_at: datetime | None

    def as_row(self) -> dict[str, object]:
        """Flat, display-friendly mapping (ISO strings for times)."""

        return {
            "id": self.id,
            "name": self.name,
            "recorded_at": format_iso(self.recorded_at),
            "points": self.points,
            "first_point_at": format_iso(self.first_point_at) if self.first_point_at else "",
            "last_point_at": format_iso(self.last_point_at) if self.last_point_at else "",
        }


def summarize_tracks(
    tracks: Sequence[TrackRecord],
    points: Sequence[TrackPointRecord],
) -> list[TrackSummary]:
    """Build one summary per track, in the order of tracks.

    Points of tracks not listed are ignored.
    """

    counts: dict[int, int] = {t.id: 0 for t in tracks}
    first: dict[int, float] = {}
    last: dict[int, float] = {}
    for pt in points:
        if pt.track_id not in counts:
            continue
        counts[pt.track_id] += 1
        first[pt.track_id] = min(first.get(pt.track_id, pt.sampled_at), pt.sampled_at)
        last[pt.track_id] = max(last.get(pt.track_id, pt.sampled_at), pt.sampled_at)

    out: list[TrackSummary] = []
    for t in tracks:
        first_at = last_at = None
        if t.id in first:
            where = f"ZCOURSEPOINT.ZDATE of a point in track {t.id}"
            first_at = convert_timestamp(first[t.id], where)
            last_at = convert_timestamp(last[t.id], where)
        out.append(
            TrackSummary(
                id=t.id,
                name=t.name,
                recorded_at=convert_timestamp(t.recorded_at, f"ZTRACK.ZDATE of track {t.id} ({t.name!r})"),
                points=counts[t.id],
                first_point_at=first_at,
                last_point_at=last_at,
            )
        )
    return out
