"""Path safety primitives."""

from .paths import PathBlockedError, normalize_record_path, resolve_record_path

__all__ = ["PathBlockedError", "normalize_record_path", "resolve_record_path"]
