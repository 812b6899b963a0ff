"""Resolve document-supplied paths under the target root."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

WINDOWS_ABSOLUTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:[\\/]")


class PathBlockedError(Exception):
    """Raised when a record path would touch a file outside the target root."""

    def __init__(self, reason: str, hint: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.hint = hint


def normalize_record_path(candidate: str) -> str:
    """Convert backslash separators to forward slashes."""
    return candidate.replace("\\", "/")


def resolve_record_path(root: Path, candidate: str) -> Path:
    """Resolve a root-relative record path, rejecting absolute and `..` inputs."""
    resolved_root = root.resolve()
    normalized = normalize_record_path(candidate)

    if not normalized.strip():
        raise PathBlockedError(
            reason="Path is empty.",
            hint="Records must name a file relative to the target directory.",
        )
    if normalized.startswith("/") or WINDOWS_ABSOLUTE_PATTERN.match(normalized):
        raise PathBlockedError(
            reason="Absolute paths are not allowed in records.",
            hint="Regenerate the document so paths are relative to the target directory.",
        )

    parts = [part for part in normalized.split("/") if part not in ("", ".")]
    if any(part == ".." for part in parts):
        raise PathBlockedError(
            reason="Path traversal is blocked.",
            hint="Remove '..' segments from the record path.",
        )

    resolved = (resolved_root / Path(*parts)).resolve(strict=False)
    if not resolved.is_relative_to(resolved_root):
        raise PathBlockedError(
            reason="Resolved path escapes the target directory.",
            hint="Symlinked directories pointing outside the target are not followed.",
        )
    return resolved
