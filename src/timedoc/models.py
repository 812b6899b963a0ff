"""Typed models for file timestamp records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(slots=True, frozen=True)
class Record:
    """One file path plus its last-modification instant in whole seconds."""

    path: str
    epoch_seconds: int

    @classmethod
    def from_datetime(cls, path: str, instant: datetime) -> Record:
        """Build a record from an instant; naive values are read as UTC."""
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        return cls(path=path, epoch_seconds=int(instant.timestamp()))

    @property
    def timestamp(self) -> datetime:
        """Return the instant as an aware UTC datetime."""
        return datetime.fromtimestamp(self.epoch_seconds, tz=UTC)

    @property
    def iso_timestamp(self) -> str:
        """Return ISO-8601 UTC text with a Z suffix."""
        return self.timestamp.isoformat().replace("+00:00", "Z")

    @property
    def display_timestamp(self) -> str:
        """Return `YYYY-MM-DD HH:MM:SS` in UTC."""
        return self.timestamp.strftime(DISPLAY_FORMAT)


def sort_newest_first(records: list[Record]) -> list[Record]:
    """Sort descending by time; equal times keep their incoming order."""
    return sorted(records, key=lambda record: record.epoch_seconds, reverse=True)
