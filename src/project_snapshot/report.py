"""Rendering and saving snapshots (console index, JSON, text)."""

from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .constants import DEFAULT_MAX_TEXT_BYTES, OUTPUT_DIR, OUTPUT_PREFIX, OUTPUT_TIMESTAMP_FORMAT
from .core import Snapshot, VcsStatus


FILE_SEPARATOR = "═" * 62
CONTENT_HEADER = "──────────────── FILE CONTENT ────────────────"
TRUNCATED_MARKER = "…(truncated in TXT)"

_STATUS_STYLE = {
    VcsStatus.CLEAN: "[dim]clean[/dim]",
    VcsStatus.MODIFIED: "[yellow]Modified[/yellow]",
    VcsStatus.ADDED: "[green]Added[/green]",
    VcsStatus.DELETED: "[red]Deleted[/red]",
    VcsStatus.RENAMED: "[blue]Renamed[/blue]",
    VcsStatus.UNTRACKED: "[magenta]Untracked[/magenta]",
    VcsStatus.CHANGED: "[yellow]Changed[/yellow]",
}


def render_index(snapshot: Snapshot, console: Console) -> None:
    """Print a concise per-file index of the snapshot.

    Args:
        snapshot: Snapshot to display
        console: Rich console for output
    """
    console.print(f"\n[bold]Project Snapshot at:[/bold] {escape(snapshot.root_path)}")

    if not snapshot.files:
        console.print("[yellow]No files collected.[/yellow]")
        return

    table = Table(title=f"Files ({len(snapshot.files)}, mode: {snapshot.mode.value})")
    table.add_column("Path", style="cyan")
    table.add_column("Language")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    table.add_column("Git")
    table.add_column("Content", justify="center")

    for record in snapshot.files:
        table.add_row(
            escape(record.relative_path),
            record.language,
            record.size,
            record.modified,
            _STATUS_STYLE[record.vcs_status],
            "[green]✓[/green]" if record.has_content else "[dim]-[/dim]",
        )

    console.print(table)

    changed = snapshot.changed_files
    if changed:
        console.print(f"[yellow]{len(changed)} files with pending changes[/yellow]")


def _truncate(content: str, max_bytes: int) -> Tuple[str, bool]:
    if len(content.encode("utf-8")) <= max_bytes:
        return content, False
    return content[:max_bytes], True


def format_text(
    snapshot: Snapshot,
    include_contents: bool = False,
    max_text_bytes: int = DEFAULT_MAX_TEXT_BYTES,
) -> str:
    """Human-readable report; file bodies only when ``include_contents``."""
    lines = [f"📂 Project Snapshot at: {snapshot.root_path}", ""]
    for record in snapshot.files:
        lines.append(FILE_SEPARATOR)
        lines.append(
            f"📄 {record.relative_path} ({record.language}, {record.size}, "
            f"modified {record.modified}, git: {record.vcs_status.value})"
        )
        if include_contents and record.content is not None:
            lines.append(CONTENT_HEADER)
            body, truncated = _truncate(record.content, max_text_bytes)
            lines.append(body)
            if truncated:
                lines.append(TRUNCATED_MARKER)
        lines.append("")
    return "\n".join(lines) + "\n"


def save_text(
    snapshot: Snapshot,
    output: Path,
    include_contents: bool = False,
    max_text_bytes: int = DEFAULT_MAX_TEXT_BYTES,
) -> None:
    output.write_text(format_text(snapshot, include_contents, max_text_bytes), encoding="utf-8")


def save_json(snapshot: Snapshot, output: Path) -> None:
    output.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")


def output_paths(root: Path, output_dir: str = OUTPUT_DIR, now: Optional[datetime] = None) -> Tuple[Path, Path]:
    """Timestamped JSON and text output paths under ``root/output_dir``."""
    timestamp = (now or datetime.now()).strftime(OUTPUT_TIMESTAMP_FORMAT)
    base = root / output_dir
    return (
        base / f"{OUTPUT_PREFIX}{timestamp}.json",
        base / f"{OUTPUT_PREFIX}{timestamp}.txt",
    )


def write_outputs(
    snapshot: Snapshot,
    root: Path,
    output_dir: str = OUTPUT_DIR,
    include_contents: bool = False,
    max_text_bytes: int = DEFAULT_MAX_TEXT_BYTES,
    now: Optional[datetime] = None,
) -> Tuple[Path, Path]:
    """Save the snapshot as JSON and text; returns both paths."""
    json_out, txt_out = output_paths(root, output_dir, now)
    json_out.parent.mkdir(parents=True, exist_ok=True)
    save_json(snapshot, json_out)
    save_text(snapshot, txt_out, include_contents, max_text_bytes)
    return json_out, txt_out
