"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILENAME = "timedoc.toml"
DEFAULT_METADATA_DIR = ".git"
DEFAULT_GIT_EXECUTABLE = "git"
DEFAULT_TIMEOUT_SECONDS = 30
TIMEOUT_SECONDS_CAP = 3600
DEFAULT_OUTPUT_NAME = "file_modification_times.json"


@dataclass(slots=True, frozen=True)
class ScanConfig:
    """Directory traversal settings."""

    metadata_dir: str
    exclude_dirs: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class HistoryConfig:
    """History query settings."""

    git_executable: str
    timeout_seconds: int


@dataclass(slots=True, frozen=True)
class ToolConfig:
    """Fully merged tool configuration."""

    scan: ScanConfig
    history: HistoryConfig
    default_output: str
    run_log: Path | None

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for run log metadata."""
        return {
            "scan": {
                "metadata_dir": self.scan.metadata_dir,
                "exclude_dirs": list(self.scan.exclude_dirs),
            },
            "history": {
                "git_executable": self.history.git_executable,
                "timeout_seconds": self.history.timeout_seconds,
            },
            "default_output": self.default_output,
            "run_log": str(self.run_log) if self.run_log is not None else None,
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    config_path: Path | None = None
    git_executable: str | None = None
    timeout_seconds: int | None = None
    run_log: Path | None = None


def default_config() -> ToolConfig:
    """Build the built-in default config."""
    return ToolConfig(
        scan=ScanConfig(metadata_dir=DEFAULT_METADATA_DIR, exclude_dirs=()),
        history=HistoryConfig(
            git_executable=DEFAULT_GIT_EXECUTABLE,
            timeout_seconds=DEFAULT_TIMEOUT_SECONDS,
        ),
        default_output=DEFAULT_OUTPUT_NAME,
        run_log=None,
    )


def load_config_file(path: Path) -> dict[str, object]:
    """Load an optional TOML config file; missing files yield an empty payload."""
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            payload = tomllib.load(handle)
    except OSError as exc:
        raise ValueError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"{path.name} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{section}.{field}' must contain only strings.")
        output.append(item)
    return tuple(output)


def _non_empty_string(value: object, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    return value


def merge_config(
    base: ToolConfig,
    payload: dict[str, object],
    overrides: CliOverrides,
    target_dir: Path,
) -> ToolConfig:
    """Merge defaults, config file, then CLI overrides."""
    scan_payload = _get_table(payload, "scan")
    history_payload = _get_table(payload, "history")
    document_payload = _get_table(payload, "document")
    logging_payload = _get_table(payload, "logging")

    metadata_dir = base.scan.metadata_dir
    if "metadata_dir" in scan_payload:
        metadata_dir = _non_empty_string(scan_payload["metadata_dir"], "scan.metadata_dir")
    exclude_dirs = base.scan.exclude_dirs
    if "exclude_dirs" in scan_payload:
        exclude_dirs = _tuple_of_strings(scan_payload["exclude_dirs"], "scan", "exclude_dirs")

    git_executable = base.history.git_executable
    if "git_executable" in history_payload:
        git_executable = _non_empty_string(
            history_payload["git_executable"], "history.git_executable"
        )
    timeout_seconds = _optional_positive_int_with_cap(
        history_payload.get("timeout_seconds"),
        "history.timeout_seconds",
        base.history.timeout_seconds,
        TIMEOUT_SECONDS_CAP,
    )

    default_output = base.default_output
    if "default_output" in document_payload:
        default_output = _non_empty_string(
            document_payload["default_output"], "document.default_output"
        )

    run_log = base.run_log
    if "run_log" in logging_payload:
        run_log = target_dir / _non_empty_string(logging_payload["run_log"], "logging.run_log")

    merged = ToolConfig(
        scan=ScanConfig(metadata_dir=metadata_dir, exclude_dirs=exclude_dirs),
        history=HistoryConfig(git_executable=git_executable, timeout_seconds=timeout_seconds),
        default_output=default_output,
        run_log=run_log,
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: ToolConfig, overrides: CliOverrides) -> ToolConfig:
    """Apply startup overrides at highest precedence."""
    timeout_seconds = _optional_positive_int_with_cap(
        overrides.timeout_seconds,
        "overrides.timeout_seconds",
        config.history.timeout_seconds,
        TIMEOUT_SECONDS_CAP,
    )
    git_executable = config.history.git_executable
    if overrides.git_executable is not None:
        git_executable = _non_empty_string(overrides.git_executable, "overrides.git_executable")
    run_log = overrides.run_log or config.run_log
    return ToolConfig(
        scan=config.scan,
        history=HistoryConfig(git_executable=git_executable, timeout_seconds=timeout_seconds),
        default_output=config.default_output,
        run_log=run_log.resolve() if run_log is not None else None,
    )


def load_effective_config(target_dir: Path, overrides: CliOverrides | None = None) -> ToolConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    resolved = target_dir.resolve()
    active = overrides or CliOverrides()
    config_path = active.config_path or resolved / CONFIG_FILENAME
    if active.config_path is not None and not config_path.is_file():
        raise ValueError(f"Config file does not exist: {config_path}")
    payload = load_config_file(config_path)
    return merge_config(default_config(), payload, active, resolved)


def _optional_positive_int_with_cap(
    value: object,
    name: str,
    default: int,
    cap: int | None,
) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if cap is not None and value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value
