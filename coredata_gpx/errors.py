"""Exceptions raised while extracting tracks."""

from __future__ import annotations


class ExtractError(Exception):
    """Base class for all extraction failures."""


class DatabaseConnectionError(ExtractError):
    """The source database could not be opened."""


class QueryError(ExtractError):
    """A query failed to run or a row could not be decoded."""


class OrphanPointError(ExtractError):
    """A track point references a track outside the selection."""

    def __init__(self, track_id: int) -> None:
        super().__init__(f"track point references unknown track id {track_id}")
        self.track_id = track_id


class EmptySelectionError(ExtractError):
    """No track matched the requested selection."""


class OutputError(ExtractError):
    """The GPX document could not be serialized or written."""


class TimestampError(ExtractError):
    """A stored timestamp cannot be converted to a date."""
