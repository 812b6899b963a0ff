"""Shared codec types and timestamp parsing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from timedoc.models import DISPLAY_FORMAT, Record

FIELDNAMES = ("path", "last_modified", "unix_time")

_ZERO_INSTANT = datetime(1, 1, 1, tzinfo=UTC)


@dataclass(slots=True, frozen=True)
class ReadResult:
    """Records loaded from a document plus per-entry warnings."""

    records: tuple[Record, ...]
    warnings: tuple[str, ...]


def parse_iso(value: object) -> datetime | None:
    """Parse ISO-8601 text; absent, zero or malformed values yield None."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        instant = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    if instant == _ZERO_INSTANT:
        return None
    return instant


def parse_display(value: str) -> datetime | None:
    """Parse `YYYY-MM-DD HH:MM:SS` as UTC."""
    try:
        return datetime.strptime(value.strip(), DISPLAY_FORMAT).replace(tzinfo=UTC)
    except ValueError:
        return None


def checked_record(path: str, epoch_seconds: int) -> Record | None:
    """Return a record when the epoch maps to a calendar instant, else None."""
    try:
        datetime.fromtimestamp(epoch_seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None
    return Record(path=path, epoch_seconds=epoch_seconds)
