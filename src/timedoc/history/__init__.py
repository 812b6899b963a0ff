"""History query layer."""

from .git import (
    NO_HISTORY,
    QUERY_FAILED,
    UNPARSEABLE,
    Found,
    GitHistorySource,
    HistoryQueryError,
    HistorySource,
    NotTracked,
    Resolution,
    TimestampResolver,
)

__all__ = [
    "Found",
    "GitHistorySource",
    "HistoryQueryError",
    "HistorySource",
    "NO_HISTORY",
    "NotTracked",
    "QUERY_FAILED",
    "Resolution",
    "TimestampResolver",
    "UNPARSEABLE",
]
