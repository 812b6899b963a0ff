from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from timedoc.history import HistoryQueryError, TimestampResolver


class StubHistorySource:
    """Canned `git log -1 --format=%ct` output keyed by relative path."""

    def __init__(self, timestamps: dict[str, int], failing: set[str] | None = None) -> None:
        self.timestamps = timestamps
        self.failing = failing or set()
        self.calls: list[tuple[Path, str]] = []

    def last_change(self, repo_root: Path, relative_path: str) -> str:
        self.calls.append((repo_root, relative_path))
        if relative_path in self.failing:
            raise HistoryQueryError("fatal: simulated failure")
        value = self.timestamps.get(relative_path)
        if value is None:
            return ""
        return f"{value}\n"


@pytest.fixture
def stub_resolver() -> Callable[..., TimestampResolver]:
    def factory(timestamps: dict[str, int], failing: set[str] | None = None) -> TimestampResolver:
        return TimestampResolver(StubHistorySource(timestamps, failing))

    return factory


@pytest.fixture
def fake_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".git").mkdir()
    (repo / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    return repo
