"""Extension-based format selection and document file I/O."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from timedoc.codec.csv_format import parse_csv, render_csv
from timedoc.codec.json_format import parse_json, render_json
from timedoc.codec.markdown_format import render_markdown
from timedoc.codec.models import ReadResult
from timedoc.errors import CodecError
from timedoc.models import Record

FORMAT_JSON = "json"
FORMAT_CSV = "csv"
FORMAT_MARKDOWN = "markdown"

_EXTENSION_FORMATS = {
    ".json": FORMAT_JSON,
    ".csv": FORMAT_CSV,
    ".md": FORMAT_MARKDOWN,
    ".markdown": FORMAT_MARKDOWN,
}


def detect_format(path: Path) -> str:
    """Select a format by extension; unknown extensions fall back to JSON."""
    return _EXTENSION_FORMATS.get(path.suffix.lower(), FORMAT_JSON)


def write_document(
    path: Path,
    records: list[Record],
    target_dir: Path,
    generated_utc: datetime | None = None,
) -> str:
    """Serialize records to `path`, replacing any existing file, and return the format."""
    fmt = detect_format(path)
    if fmt == FORMAT_CSV:
        text = render_csv(records)
    elif fmt == FORMAT_MARKDOWN:
        text = render_markdown(records, target_dir, generated_utc or datetime.now(tz=UTC))
    else:
        text = render_json(records)
    try:
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise CodecError(f"cannot write file {path}: {exc}") from exc
    return fmt


def read_document(path: Path) -> ReadResult:
    """Load records from a JSON or CSV document."""
    fmt = detect_format(path)
    if fmt == FORMAT_MARKDOWN:
        raise CodecError(
            f"unsupported input format: {path.suffix}",
            hint="Markdown documents are write-only; restore from .json or .csv.",
        )
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CodecError(f"cannot read file {path}: {exc}") from exc
    if fmt == FORMAT_CSV:
        return parse_csv(text)
    return parse_json(text)
