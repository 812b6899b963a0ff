"""Mode orchestration for document, adjust and restore runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from timedoc.applier import ApplySummary, apply_times
from timedoc.codec import read_document, write_document
from timedoc.config import CliOverrides, ToolConfig, load_effective_config
from timedoc.errors import TimedocError
from timedoc.history import GitHistorySource, TimestampResolver
from timedoc.logging import JsonlRunLogger, RunEvent, utc_timestamp
from timedoc.models import Record, sort_newest_first
from timedoc.scanner import scan_tree

MODE_ADJUST = "adjust"
MODE_DOCUMENT = "document"
MODE_RESTORE = "restore"
MODES = (MODE_ADJUST, MODE_DOCUMENT, MODE_RESTORE)


@dataclass(slots=True, frozen=True)
class RunResult:
    """What a completed run did."""

    mode: str
    record_count: int
    output_path: Path | None = None
    applied: ApplySummary | None = None
    warnings: tuple[str, ...] = ()


class Runner:
    """Wire scanning, codecs and time application per requested mode."""

    def __init__(
        self,
        config: ToolConfig,
        resolver: TimestampResolver,
        out: TextIO,
        err: TextIO,
        run_logger: JsonlRunLogger | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver
        self.out = out
        self.err = err
        self.run_logger = run_logger

    def run(self, mode: str, target_dir: Path, document_path: Path | None = None) -> RunResult:
        """Execute one mode; fatal problems raise `TimedocError`."""
        metadata: dict[str, object] = {"config": self.config.to_public_dict()}
        try:
            if mode == MODE_RESTORE:
                result = self._restore(target_dir, document_path, metadata)
            elif mode in (MODE_ADJUST, MODE_DOCUMENT):
                result = self._scan_mode(mode, target_dir, document_path, metadata)
            else:
                raise TimedocError(
                    "unknown_mode",
                    f"unknown mode: {mode} (supported modes: {', '.join(MODES)})",
                )
        except TimedocError as exc:
            try:
                self._log_run(mode, target_dir, ok=False, error_code=exc.code, metadata=metadata)
            except TimedocError as log_exc:
                self._warn(f"Warning: {log_exc.message}")
            raise
        self._log_run(mode, target_dir, ok=True, error_code=None, metadata=metadata)
        return result

    def _scan_mode(
        self,
        mode: str,
        target_dir: Path,
        document_path: Path | None,
        metadata: dict[str, object],
    ) -> RunResult:
        self._require_directory(target_dir)
        metadata_dir = target_dir / self.config.scan.metadata_dir
        if not metadata_dir.exists():
            raise TimedocError(
                "not_a_repository",
                f"target directory is not a git repository: {target_dir}",
                hint=f"Expected a '{self.config.scan.metadata_dir}' entry in the target.",
            )

        self.out.write(f"Scanning directory: {target_dir}\n")
        self.out.write("Getting file last modified time from git...\n")
        profile: dict[str, object] = {}
        records = scan_tree(
            target_dir,
            self.resolver,
            self.config.scan,
            warn=self._warn,
            profile=profile,
        )
        metadata["scan"] = profile
        if not records:
            self._warn("Warning: no files found in git")
            return RunResult(mode=mode, record_count=0)

        self.out.write(f"Found {len(records)} files\n\n")
        if mode == MODE_ADJUST:
            summary = apply_times(target_dir, records, self.out, self.err)
            metadata["applied"] = {"succeeded": summary.succeeded, "failed": summary.failed}
            return RunResult(mode=mode, record_count=len(records), applied=summary)
        return self._document(target_dir, records, document_path, metadata)

    def _document(
        self,
        target_dir: Path,
        records: list[Record],
        document_path: Path | None,
        metadata: dict[str, object],
    ) -> RunResult:
        ordered = sort_newest_first(records)
        output_path = document_path or target_dir / self.config.default_output
        for record in ordered:
            self.out.write(f"Documented: {record.path} -> {record.display_timestamp}\n")
        self.out.write("\n")
        fmt = write_document(output_path, ordered, target_dir)
        metadata["format"] = fmt
        metadata["records"] = len(ordered)
        self.out.write(
            f"Generated {fmt.upper()} document: {output_path} (total {len(ordered)} files)\n"
        )
        return RunResult(
            mode=MODE_DOCUMENT,
            record_count=len(ordered),
            output_path=output_path,
        )

    def _restore(
        self,
        target_dir: Path,
        document_path: Path | None,
        metadata: dict[str, object],
    ) -> RunResult:
        if document_path is None:
            raise TimedocError(
                "missing_input",
                "restore mode requires an input file path",
                hint="Pass the .json or .csv document produced by the document mode.",
            )
        if not document_path.is_file():
            raise TimedocError("input_missing", f"input file does not exist: {document_path}")
        self._require_directory(target_dir)

        self.out.write(f"Reading from file: {document_path}\n")
        loaded = read_document(document_path)
        for warning in loaded.warnings:
            self._warn(warning)
        metadata["loaded"] = len(loaded.records)
        metadata["skipped"] = len(loaded.warnings)
        if not loaded.records:
            raise TimedocError("no_records", "no file data found in input file")

        self.out.write(f"Loaded {len(loaded.records)} files from {document_path}\n\n")
        summary = apply_times(target_dir, loaded.records, self.out, self.err)
        metadata["applied"] = {"succeeded": summary.succeeded, "failed": summary.failed}
        return RunResult(
            mode=MODE_RESTORE,
            record_count=len(loaded.records),
            applied=summary,
            warnings=loaded.warnings,
        )

    def _require_directory(self, target_dir: Path) -> None:
        if not target_dir.is_dir():
            raise TimedocError("target_missing", f"target directory does not exist: {target_dir}")

    def _warn(self, message: str) -> None:
        self.err.write(message + "\n")

    def _log_run(
        self,
        mode: str,
        target_dir: Path,
        ok: bool,
        error_code: str | None,
        metadata: dict[str, object],
    ) -> None:
        if self.run_logger is None:
            return
        event = RunEvent(
            timestamp=utc_timestamp(),
            mode=mode,
            target=str(target_dir),
            ok=ok,
            error_code=error_code,
            metadata=metadata,
        )
        try:
            self.run_logger.append(event)
        except OSError as exc:
            raise TimedocError(
                "run_log_failed",
                f"cannot write run log {self.run_logger.path}: {exc}",
            ) from exc


def create_runner(
    target_dir: Path,
    out: TextIO,
    err: TextIO,
    cli_overrides: CliOverrides | None = None,
) -> Runner:
    """Create a runner with git-backed history and effective config."""
    config = load_effective_config(target_dir, cli_overrides)
    resolver = TimestampResolver(GitHistorySource.from_config(config.history))
    run_logger: JsonlRunLogger | None = None
    if config.run_log is not None:
        try:
            run_logger = JsonlRunLogger(config.run_log)
        except OSError as exc:
            raise TimedocError(
                "run_log_failed",
                f"cannot create run log {config.run_log}: {exc}",
                hint="Point --run-log or logging.run_log at a writable location.",
            ) from exc
    return Runner(config=config, resolver=resolver, out=out, err=err, run_logger=run_logger)
