"""Write-only Markdown report."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from timedoc.models import DISPLAY_FORMAT, Record


def render_markdown(records: list[Record], target_dir: Path, generated_utc: datetime) -> str:
    """Render a human-readable report table; there is no reader for this format."""
    lines = ["# File modification times", ""]
    lines.append(f"- generated: `{generated_utc.strftime(DISPLAY_FORMAT)} UTC`")
    lines.append(f"- target_directory: `{target_dir}`")
    lines.append(f"- total_files: `{len(records)}`")
    lines.append("")
    lines.append("## Files")
    lines.append("")
    lines.append("| Path | Last modified (UTC) | Unix time |")
    lines.append("|------|---------------------|-----------|")
    for record in records:
        path = record.path.replace("|", "\\|")
        lines.append(f"| {path} | {record.display_timestamp} | {record.epoch_seconds} |")
    return "\n".join(lines) + "\n"
