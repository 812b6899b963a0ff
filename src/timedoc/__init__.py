"""Document, adjust and restore file modification times from git history."""

__version__ = "1.0.0"
