"""Fatal error types with stable codes."""

from __future__ import annotations


class TimedocError(Exception):
    """Raised when a run cannot proceed; carries a stable error code."""

    def __init__(self, code: str, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.hint = hint


class ScanError(TimedocError):
    """Raised when directory traversal itself fails."""

    def __init__(self, message: str) -> None:
        super().__init__("scan_failed", message)


class CodecError(TimedocError):
    """Raised when a document cannot be written or parsed."""

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__("codec_error", message, hint)
