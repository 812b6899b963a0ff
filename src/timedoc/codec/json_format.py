"""JSON document encoding."""

from __future__ import annotations

import json

from timedoc.codec.models import ReadResult, checked_record, parse_iso
from timedoc.errors import CodecError
from timedoc.models import Record


def render_json(records: list[Record]) -> str:
    """Render records as a 2-space indented JSON array."""
    payload = [
        {
            "path": record.path,
            "last_modified": record.iso_timestamp,
            "unix_time": record.epoch_seconds,
        }
        for record in records
    ]
    return json.dumps(payload, indent=2) + "\n"


def parse_json(text: str) -> ReadResult:
    """Parse a JSON document; `last_modified` wins and `unix_time` fills gaps."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CodecError(f"cannot parse JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise CodecError(
            "cannot parse JSON: top-level value must be an array",
            hint="Use a document produced by the document mode.",
        )

    records: list[Record] = []
    warnings: list[str] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict) or not isinstance(entry.get("path"), str):
            warnings.append(f"Warning: skipping entry {index}: missing path")
            continue
        path = entry["path"]
        record: Record | None = None
        instant = parse_iso(entry.get("last_modified"))
        unix_time = entry.get("unix_time")
        if instant is not None:
            record = checked_record(path, Record.from_datetime(path, instant).epoch_seconds)
        elif isinstance(unix_time, int) and not isinstance(unix_time, bool) and unix_time != 0:
            record = checked_record(path, unix_time)
        if record is None:
            warnings.append(f"Warning: cannot parse time for {path}")
            continue
        records.append(record)
    return ReadResult(records=tuple(records), warnings=tuple(warnings))
