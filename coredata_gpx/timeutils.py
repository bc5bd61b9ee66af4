"""Time conversion and formatting utilities."""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta
from typing import Final

# Zero point of the Core Data timestamp encoding.
REFERENCE_EPOCH: Final[datetime] = datetime(2001, 1, 1, tzinfo=UTC)


def dt_from_reference_seconds(seconds: float) -> datetime:
    """Convert seconds since the reference epoch to a UTC datetime.

    Args:
        seconds: Seconds since 2001-01-01T00:00:00 UTC. May be negative
            or fractional.

    Returns:
        Timezone-aware UTC datetime (microsecond precision).

    Raises:
        ValueError: If seconds is NaN/infinite or falls outside the range
            a datetime can represent.
    """

    if not math.isfinite(seconds):
        raise ValueError(f"timestamp is not a finite number: {seconds!r}")
    try:
        return REFERENCE_EPOCH + timedelta(seconds=seconds)
    except OverflowError as exc:
        raise ValueError(f"timestamp out of range: {seconds!r}") from exc


def reference_seconds_from_dt(dt: datetime) -> float:
    """Convert a datetime to seconds since the reference epoch.

    Args:
        dt: Datetime. If naive, will be treated as UTC.

    Returns:
        Seconds since 2001-01-01T00:00:00 UTC.
    """

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return (dt - REFERENCE_EPOCH).total_seconds()


def format_iso(dt: datetime) -> str:
    """Render a datetime as ISO-8601, using "Z" for UTC.

    Examples:
        2001-01-01T00:00:00Z
        2001-01-01T00:00:00.250000Z
    """

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return dt.replace(tzinfo=None).isoformat() + "Z"
