"""Command-line entrypoint."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn, TextIO

from timedoc.config import CliOverrides
from timedoc.errors import TimedocError
from timedoc.runner import MODES, create_runner

EPILOG = """
Modes:
  adjust    set file system times from git last modified times
  document  write a JSON, CSV or Markdown document of those times
  restore   restore file times from a JSON or CSV document

Examples:
  timedoc . document file_times.json
  timedoc . document file_times.csv
  timedoc . adjust
  timedoc . restore file_times.json
"""


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_arg_parser() -> argparse.ArgumentParser:
    """Build CLI parser for the timedoc tool."""
    parser = _ArgumentParser(
        prog="timedoc",
        description="Document, adjust or restore file times from git history.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("directory", help="Target directory.")
    parser.add_argument("mode", choices=MODES, help="Run mode.")
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Output document for 'document', input document for 'restore'.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config file. Defaults to <directory>/timedoc.toml when present.",
    )
    parser.add_argument("--git", default=None, help="git executable to run.")
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Per-file git query timeout in seconds.",
    )
    parser.add_argument(
        "--run-log",
        default=None,
        help="Append one JSONL event per run to this file.",
    )
    return parser


def main(
    argv: list[str] | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Entrypoint for the timedoc command."""
    out = out or sys.stdout
    err = err or sys.stderr
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    target_dir = Path(args.directory).resolve()
    document_path = Path(args.path).resolve() if args.path is not None else None
    overrides = CliOverrides(
        config_path=Path(args.config).resolve() if args.config is not None else None,
        git_executable=args.git,
        timeout_seconds=args.timeout,
        run_log=Path(args.run_log).resolve() if args.run_log is not None else None,
    )
    try:
        runner = create_runner(target_dir, out=out, err=err, cli_overrides=overrides)
    except ValueError as exc:
        err.write(f"Error: invalid configuration: {exc}\n")
        return 1
    except TimedocError as exc:
        return _report_error(err, exc)
    try:
        runner.run(args.mode, target_dir, document_path)
    except TimedocError as exc:
        return _report_error(err, exc)
    return 0


def _report_error(err: TextIO, exc: TimedocError) -> int:
    err.write(f"Error: {exc.message}\n")
    if exc.hint:
        err.write(f"Hint: {exc.hint}\n")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
