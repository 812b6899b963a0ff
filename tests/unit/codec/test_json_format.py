from __future__ import annotations

import json

import pytest

from timedoc.codec import parse_json, render_json
from timedoc.errors import CodecError
from timedoc.models import Record


def test_render_json_schema_and_indent() -> None:
    text = render_json([Record(path="src/app.py", epoch_seconds=1705315800)])

    assert json.loads(text) == [
        {
            "path": "src/app.py",
            "last_modified": "2024-01-15T10:30:00Z",
            "unix_time": 1705315800,
        }
    ]
    assert '\n  {\n    "path": "src/app.py",' in text
    assert text.endswith("]\n")


def test_json_round_trip_preserves_records_and_order() -> None:
    records = [
        Record(path="b.txt", epoch_seconds=1705315800),
        Record(path="dir/a b.txt", epoch_seconds=86400),
    ]

    result = parse_json(render_json(records))

    assert list(result.records) == records
    assert result.warnings == ()


@pytest.mark.parametrize("unix_time", [0, None])
def test_missing_or_zero_unix_time_is_recomputed(unix_time: int | None) -> None:
    entry: dict[str, object] = {"path": "a.txt", "last_modified": "2024-01-15T10:30:00Z"}
    if unix_time is not None:
        entry["unix_time"] = unix_time

    result = parse_json(json.dumps([entry]))

    assert result.records == (Record(path="a.txt", epoch_seconds=1705315800),)


def test_last_modified_with_offset_is_honored() -> None:
    text = json.dumps([{"path": "a.txt", "last_modified": "2024-01-15T12:30:00+02:00"}])

    assert parse_json(text).records[0].epoch_seconds == 1705315800


def test_zero_last_modified_falls_back_to_unix_time() -> None:
    text = json.dumps(
        [{"path": "a.txt", "last_modified": "0001-01-01T00:00:00Z", "unix_time": 1705315800}]
    )

    assert parse_json(text).records == (Record(path="a.txt", epoch_seconds=1705315800),)


def test_entry_without_any_time_is_skipped_with_warning() -> None:
    text = json.dumps(
        [
            {"path": "bad.txt", "last_modified": "0001-01-01T00:00:00Z", "unix_time": 0},
            {"path": "good.txt", "unix_time": 42},
            {"unix_time": 42},
        ]
    )

    result = parse_json(text)

    assert result.records == (Record(path="good.txt", epoch_seconds=42),)
    assert len(result.warnings) == 2
    assert "bad.txt" in result.warnings[0]


def test_invalid_json_raises_codec_error() -> None:
    with pytest.raises(CodecError, match="cannot parse JSON"):
        parse_json("{not json")


def test_non_array_top_level_raises_codec_error() -> None:
    with pytest.raises(CodecError, match="array"):
        parse_json('{"path": "a.txt"}')


def test_out_of_range_unix_time_is_skipped_with_warning() -> None:
    text = json.dumps(
        [
            {"path": "huge.txt", "unix_time": 99999999999999999999},
            {"path": "good.txt", "unix_time": 1705315800},
        ]
    )

    result = parse_json(text)

    assert result.records == (Record(path="good.txt", epoch_seconds=1705315800),)
    assert result.warnings == ("Warning: cannot parse time for huge.txt",)
