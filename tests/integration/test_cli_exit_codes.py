from __future__ import annotations

import io
import os
from pathlib import Path

import pytest

from timedoc.cli import main


def test_document_on_non_repository_exits_nonzero(tmp_path: Path) -> None:
    (tmp_path / "file.txt").write_text("x", encoding="utf-8")
    output = tmp_path / "times.json"
    err = io.StringIO()

    code = main([str(tmp_path), "document", str(output)], out=io.StringIO(), err=err)

    assert code == 1
    assert "not a git repository" in err.getvalue()
    assert not output.exists()


def test_restore_csv_with_malformed_row_exits_zero(tmp_path: Path) -> None:
    (tmp_path / "good.txt").write_text("x", encoding="utf-8")
    document = tmp_path / "times.csv"
    document.write_text(
        "path,last_modified,unix_time\n"
        "good.txt,2024-01-15 10:30:00,1705315800\n"
        "bad.txt,31/12/2023,\n",
        encoding="utf-8",
    )
    err = io.StringIO()

    code = main([str(tmp_path), "restore", str(document)], out=io.StringIO(), err=err)

    assert code == 0
    assert "Warning: cannot parse time for bad.txt" in err.getvalue()
    assert int(os.stat(tmp_path / "good.txt").st_mtime) == 1705315800


def test_restore_without_input_exits_nonzero(tmp_path: Path) -> None:
    err = io.StringIO()

    code = main([str(tmp_path), "restore"], out=io.StringIO(), err=err)

    assert code == 1
    assert "requires an input file path" in err.getvalue()


def test_invalid_config_exits_nonzero(tmp_path: Path) -> None:
    (tmp_path / "timedoc.toml").write_text("[history]\ntimeout_seconds = 0\n", encoding="utf-8")
    err = io.StringIO()

    code = main([str(tmp_path), "adjust"], out=io.StringIO(), err=err)

    assert code == 1
    assert "invalid configuration" in err.getvalue()


@pytest.mark.parametrize("argv", [[], ["."], [".", "explode"]])
def test_usage_errors_exit_with_one(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)

    assert excinfo.value.code == 1


def test_unwritable_run_log_location_exits_nonzero(tmp_path: Path) -> None:
    (tmp_path / "good.txt").write_text("x", encoding="utf-8")
    document = tmp_path / "times.csv"
    document.write_text(
        "path,last_modified,unix_time\ngood.txt,2024-01-15 10:30:00,1705315800\n",
        encoding="utf-8",
    )
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    err = io.StringIO()

    code = main(
        [str(tmp_path), "restore", str(document), "--run-log", str(blocker / "runs.jsonl")],
        out=io.StringIO(),
        err=err,
    )

    assert code == 1
    assert "Error: cannot create run log" in err.getvalue()


def test_restore_skips_out_of_range_times_and_exits_zero(tmp_path: Path) -> None:
    (tmp_path / "good.txt").write_text("x", encoding="utf-8")
    (tmp_path / "huge.txt").write_text("x", encoding="utf-8")
    document = tmp_path / "times.csv"
    document.write_text(
        "path,last_modified,unix_time\n"
        "huge.txt,x,253402300800\n"
        "good.txt,2024-01-15 10:30:00,1705315800\n",
        encoding="utf-8",
    )
    err = io.StringIO()

    code = main([str(tmp_path), "restore", str(document)], out=io.StringIO(), err=err)

    assert code == 0
    assert "Warning: cannot parse time for huge.txt" in err.getvalue()
    assert int(os.stat(tmp_path / "good.txt").st_mtime) == 1705315800
