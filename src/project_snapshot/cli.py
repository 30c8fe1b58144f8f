"""CLI for project-snapshot."""

from pathlib import Path
from typing import Optional
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .assembler import SnapshotAssembler
from .config import load_collector_config
from .core import SnapshotMode
from .errors import ConfigError, SnapshotError
from .report import render_index, write_outputs


app = typer.Typer(help="""\
Snapshot a project's source tree: file paths, sizes, modification times,
languages, git status and (depending on mode) file contents. Writes JSON
and text reports under the project's snapshots/ directory.""")

console = Console()
err_console = Console(stderr=True)

MENU_CHOICES = {
    "1": SnapshotMode.FULL,
    "2": SnapshotMode.DIFF,
    "3": SnapshotMode.MINIMAL,
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def prompt_mode() -> SnapshotMode:
    """Show the mode menu and read a choice; invalid input means minimal."""
    console.print("\n[bold]Project Snapshot Menu[/bold]")
    console.print("1. All (full project contents: folders, files, code)")
    console.print("2. Git diff (only changes, with full contents)")
    console.print("3. Minimal (structure + metadata only)")
    choice = typer.prompt("Choose mode [1/2/3]", default="", show_default=False).strip()

    mode = MENU_CHOICES.get(choice)
    if mode is None:
        console.print("[yellow]Invalid choice, defaulting to minimal.[/yellow]")
        return SnapshotMode.MINIMAL
    return mode


@app.command()
def snapshot(
    root: Optional[Path] = typer.Argument(None, help="Project root (defaults to current directory)"),
    mode: Optional[SnapshotMode] = typer.Option(
        None, "--mode", "-m", case_sensitive=False,
        help="full, diff or minimal (prompts when omitted)",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (default: <root>/.project-snapshot.yaml)",
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Output directory relative to the root",
    ),
    save: bool = typer.Option(True, "--save/--no-save", help="Write JSON and text reports"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Collect a snapshot of a project tree.

    Examples:
        project-snapshot                       # Interactive mode menu
        project-snapshot --mode full           # Everything, with contents
        project-snapshot ../app -m diff        # Contents of changed files only
        project-snapshot -m minimal --no-save  # Print the index only
    """
    _configure_logging(verbose)
    target = (root or Path.cwd()).resolve()

    try:
        config = load_collector_config(target, config_path)
    except ConfigError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if output_dir:
        config = config.model_copy(update={"output_dir": output_dir})

    if mode is None:
        mode = prompt_mode()

    try:
        result = SnapshotAssembler(target, config=config).collect(mode)
    except SnapshotError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)

    render_index(result, console)

    if not save:
        return

    json_out, txt_out = write_outputs(
        result,
        target,
        output_dir=config.output_dir,
        # Text bodies only for full snapshots; diff/minimal text is an index
        include_contents=mode == SnapshotMode.FULL,
        max_text_bytes=config.max_text_bytes,
    )
    console.print(f"[green]✓[/green] Snapshot saved to {escape(str(json_out))}")
    console.print(f"[green]✓[/green] Snapshot saved to {escape(str(txt_out))}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
