"""Structured logging utilities."""

from .runlog import JsonlRunLogger, RunEvent, utc_timestamp

__all__ = ["JsonlRunLogger", "RunEvent", "utc_timestamp"]
