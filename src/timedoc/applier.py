"""Apply recorded times to files on disk."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from timedoc.models import Record
from timedoc.security import PathBlockedError, resolve_record_path


@dataclass(slots=True, frozen=True)
class ApplySummary:
    """Per-batch outcome counts."""

    succeeded: int
    failed: int


def apply_times(
    root: Path,
    records: Iterable[Record],
    out: TextIO,
    err: TextIO,
) -> ApplySummary:
    """Set atime and mtime of every record's file; failures are counted, never raised."""
    succeeded = 0
    failed = 0
    for record in records:
        try:
            full_path = resolve_record_path(root, record.path)
            display = record.display_timestamp
            os.utime(full_path, (record.epoch_seconds, record.epoch_seconds))
        except PathBlockedError as exc:
            err.write(f"Error: cannot adjust time of {record.path}: {exc.reason}\n")
            failed += 1
            continue
        except (OSError, OverflowError, ValueError) as exc:
            err.write(f"Error: cannot adjust time of {record.path}: {exc}\n")
            failed += 1
            continue
        out.write(f"Adjusted: {record.path} -> {display}\n")
        succeeded += 1

    out.write(f"\nCompleted: adjusted {succeeded} files, failed {failed} files\n")
    return ApplySummary(succeeded=succeeded, failed=failed)
