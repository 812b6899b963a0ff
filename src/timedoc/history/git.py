"""Per-path last-change lookups against git history."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from timedoc.config import HistoryConfig

NO_HISTORY = "no_history"
QUERY_FAILED = "query_failed"
UNPARSEABLE = "unparseable"


class HistoryQueryError(Exception):
    """Raised when the history query itself could not run or exited non-zero."""


class HistorySource(Protocol):
    """Anything that can report the raw last-change output for one path."""

    def last_change(self, repo_root: Path, relative_path: str) -> str: ...


@dataclass(slots=True, frozen=True)
class Found:
    """The path has history; `instant` is the most recent change in UTC."""

    instant: datetime


@dataclass(slots=True, frozen=True)
class NotTracked:
    """The path has no usable history; `detail` explains query failures."""

    reason: str
    detail: str = ""


Resolution = Found | NotTracked


class GitHistorySource:
    """Run `git log -1 --format=%ct` once per path, matching the path literally."""

    def __init__(self, git_executable: str = "git", timeout_seconds: int | None = None) -> None:
        self._git = git_executable
        self._timeout = timeout_seconds

    @classmethod
    def from_config(cls, config: HistoryConfig) -> GitHistorySource:
        return cls(git_executable=config.git_executable, timeout_seconds=config.timeout_seconds)

    def last_change(self, repo_root: Path, relative_path: str) -> str:
        try:
            completed = subprocess.run(
                [
                    self._git,
                    "--literal-pathspecs",
                    "log",
                    "-1",
                    "--format=%ct",
                    "--",
                    relative_path,
                ],
                cwd=repo_root,
                check=False,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise HistoryQueryError(f"git log timed out after {exc.timeout}s") from exc
        except OSError as exc:
            raise HistoryQueryError(str(exc)) from exc
        if completed.returncode != 0:
            raise HistoryQueryError(completed.stderr.strip() or "git command failed")
        return completed.stdout


class TimestampResolver:
    """Turn raw history output into a `Found | NotTracked` result."""

    def __init__(self, source: HistorySource) -> None:
        self._source = source

    def resolve(self, repo_root: Path, relative_path: str) -> Resolution:
        """Return the most recent change instant for `relative_path`, never raising."""
        try:
            output = self._source.last_change(repo_root, relative_path)
        except HistoryQueryError as exc:
            return NotTracked(reason=QUERY_FAILED, detail=str(exc))
        value = output.strip()
        if not value:
            return NotTracked(reason=NO_HISTORY)
        try:
            seconds = int(value.splitlines()[0].strip())
        except ValueError:
            return NotTracked(reason=UNPARSEABLE, detail=value[:80])
        return Found(instant=datetime.fromtimestamp(seconds, tz=UTC))
