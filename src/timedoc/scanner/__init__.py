"""Tree scanning package."""

from .discovery import ScanProfile, iter_files, scan_tree

__all__ = ["ScanProfile", "iter_files", "scan_tree"]
