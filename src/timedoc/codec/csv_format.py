"""CSV document encoding."""

from __future__ import annotations

import csv
import io

from timedoc.codec.models import FIELDNAMES, ReadResult, checked_record, parse_display, parse_iso
from timedoc.errors import CodecError
from timedoc.models import Record


def render_csv(records: list[Record]) -> str:
    """Render records as CSV with a `path,last_modified,unix_time` header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(FIELDNAMES)
    for record in records:
        writer.writerow([record.path, record.display_timestamp, record.epoch_seconds])
    return buffer.getvalue()


def parse_csv(text: str) -> ReadResult:
    """Parse a CSV document; `unix_time` wins and `last_modified` is the fallback."""
    reader = csv.reader(io.StringIO(text))
    rows: list[tuple[int, list[str]]] = []
    try:
        for row in reader:
            if row:
                rows.append((reader.line_num, row))
    except csv.Error as exc:
        raise CodecError(f"cannot read CSV: {exc}") from exc
    if len(rows) < 2:
        raise CodecError("CSV file is empty or missing header")

    records: list[Record] = []
    warnings: list[str] = []
    for line_number, row in rows[1:]:
        if len(row) < 3:
            warnings.append(f"Warning: skipping line {line_number}: expected 3 columns")
            continue
        path, last_modified, unix_text = row[0], row[1], row[2]
        record: Record | None = None
        try:
            record = checked_record(path, int(unix_text.strip()))
        except ValueError:
            instant = parse_display(last_modified) or parse_iso(last_modified)
            if instant is not None:
                record = checked_record(path, Record.from_datetime(path, instant).epoch_seconds)
        if record is None:
            warnings.append(
                f"Warning: cannot parse time for {path} (line {line_number}): {last_modified!r}"
            )
            continue
        records.append(record)
    return ReadResult(records=tuple(records), warnings=tuple(warnings))
