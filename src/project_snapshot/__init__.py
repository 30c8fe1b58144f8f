"""Structured snapshots of a project's source tree."""

from .constants import SNAPSHOT_VERSION
from .core import FileRecord, Snapshot, SnapshotMode, VcsStatus, with_content, with_status

__version__ = SNAPSHOT_VERSION

__all__ = [
    "FileRecord",
    "Snapshot",
    "SnapshotMode",
    "VcsStatus",
    "with_content",
    "with_status",
]
