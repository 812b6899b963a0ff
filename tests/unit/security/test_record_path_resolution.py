from __future__ import annotations

from pathlib import Path

import pytest

from timedoc.security import PathBlockedError, resolve_record_path


def test_relative_record_path_resolves_under_root(tmp_path: Path) -> None:
    resolved = resolve_record_path(tmp_path, "src/app.py")

    assert resolved == tmp_path.resolve() / "src" / "app.py"


def test_backslash_separators_are_normalized(tmp_path: Path) -> None:
    assert resolve_record_path(tmp_path, r"src\app.py") == resolve_record_path(
        tmp_path, "src/app.py"
    )


@pytest.mark.parametrize(
    ("candidate", "reason"),
    [
        ("", "empty"),
        ("/etc/passwd", "Absolute"),
        ("C:\\Windows\\win.ini", "Absolute"),
        ("../outside.txt", "traversal"),
        ("src/../../outside.txt", "traversal"),
    ],
)
def test_unsafe_record_paths_are_blocked(tmp_path: Path, candidate: str, reason: str) -> None:
    with pytest.raises(PathBlockedError) as excinfo:
        resolve_record_path(tmp_path, candidate)

    assert reason in excinfo.value.reason
    assert excinfo.value.hint
