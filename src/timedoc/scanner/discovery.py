"""Deterministic tree walk that resolves history per file."""

from __future__ import annotations

import os
import time
from collections.abc import Callable, Iterator
from dataclasses import asdict, dataclass
from pathlib import Path

from timedoc.config import ScanConfig
from timedoc.errors import ScanError
from timedoc.history import NO_HISTORY, Found, TimestampResolver
from timedoc.models import Record


@dataclass(slots=True, frozen=True)
class ScanProfile:
    """Deterministic diagnostics for one scan pass."""

    visited_files: int
    records: int
    untracked: int
    query_failures: int
    total_seconds: float


def scan_tree(
    root: Path,
    resolver: TimestampResolver,
    config: ScanConfig,
    warn: Callable[[str], None] | None = None,
    profile: dict[str, object] | None = None,
) -> list[Record]:
    """Walk `root` and return records for every file with known history."""
    started = time.perf_counter()
    resolved_root = root.resolve()
    excluded = {config.metadata_dir, *config.exclude_dirs}
    records: list[Record] = []
    visited = 0
    untracked = 0
    failures = 0
    for relative in iter_files(resolved_root, excluded):
        visited += 1
        result = resolver.resolve(resolved_root, relative)
        if isinstance(result, Found):
            records.append(Record.from_datetime(relative, result.instant))
            continue
        if result.reason == NO_HISTORY:
            untracked += 1
            continue
        failures += 1
        if warn is not None:
            warn(f"Warning: cannot get git modified time of {relative}: {result.detail}")

    if profile is not None:
        payload = ScanProfile(
            visited_files=visited,
            records=len(records),
            untracked=untracked,
            query_failures=failures,
            total_seconds=time.perf_counter() - started,
        )
        profile.update(asdict(payload))
    return records


def iter_files(root: Path, excluded_dir_names: set[str]) -> Iterator[str]:
    """Yield root-relative POSIX paths of regular files in lexical walk order."""
    yield from _walk(root, root, excluded_dir_names)


def _walk(root: Path, current: Path, excluded_dir_names: set[str]) -> Iterator[str]:
    try:
        with os.scandir(current) as entries:
            ordered_entries = sorted(entries, key=lambda item: item.name)
    except OSError as exc:
        raise ScanError(f"cannot read directory {current}: {exc}") from exc
    for entry in ordered_entries:
        full_path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            if entry.name in excluded_dir_names:
                continue
            yield from _walk(root, full_path, excluded_dir_names)
            continue
        if not entry.is_file(follow_symlinks=False):
            continue
        yield full_path.relative_to(root).as_posix()
