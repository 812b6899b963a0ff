"""Document encodings for timestamp records."""

from .csv_format import parse_csv, render_csv
from .json_format import parse_json, render_json
from .markdown_format import render_markdown
from .models import ReadResult
from .registry import (
    FORMAT_CSV,
    FORMAT_JSON,
    FORMAT_MARKDOWN,
    detect_format,
    read_document,
    write_document,
)

__all__ = [
    "FORMAT_CSV",
    "FORMAT_JSON",
    "FORMAT_MARKDOWN",
    "ReadResult",
    "detect_format",
    "parse_csv",
    "parse_json",
    "read_document",
    "render_csv",
    "render_json",
    "render_markdown",
    "write_document",
]
