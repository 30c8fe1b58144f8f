"""Stable API for collecting project snapshots.

Keeps a small surface for tools that want a Snapshot value without going
through the CLI or depending on the assembler's internals.
"""

from pathlib import Path
from typing import Optional, Union

from .assembler import SnapshotAssembler
from .config import CollectorConfig, load_collector_config
from .core import Snapshot, SnapshotMode


def collect(
    root: Union[str, Path] = ".",
    mode: Union[SnapshotMode, str] = SnapshotMode.MINIMAL,
    config: Optional[CollectorConfig] = None,
) -> Snapshot:
    """Collect a snapshot of ``root``.

    Args:
        root: Project root directory (defaults to current dir)
        mode: "full", "diff" or "minimal"
        config: Collector configuration; read from the root's
            ``.project-snapshot.yaml`` when omitted

    Returns:
        The assembled Snapshot

    Raises:
        RootError: If the root is missing, not a directory, or unreadable
        ConfigError: If the project configuration file is invalid

    Example:
        >>> from project_snapshot.api import collect
        >>> snapshot = collect(".", mode="diff")
        >>> [f.relative_path for f in snapshot.changed_files]
        ['src/app.py']
    """
    root = Path(root)
    if config is None:
        config = load_collector_config(root)
    return SnapshotAssembler(root, config=config).collect(mode)
