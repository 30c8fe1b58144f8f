"""Core data models for project-snapshot.

Records are immutable. Annotating a record (attaching VCS status or file
content) produces a new record that shares every other field, so one
metadata walk can feed all three snapshot modes without any of them
seeing another's annotations.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, PrivateAttr


# ============= Enumerations =============

class VcsStatus(str, Enum):
    """Change kind reported by version control for a single file."""

    CLEAN = "clean"
    MODIFIED = "Modified"
    ADDED = "Added"
    DELETED = "Deleted"
    RENAMED = "Renamed"
    UNTRACKED = "Untracked"
    CHANGED = "Changed"


class SnapshotMode(str, Enum):
    """Content-attachment policy for a snapshot."""

    FULL = "full"        # content for every eligible file
    DIFF = "diff"        # content only for files with pending changes
    MINIMAL = "minimal"  # metadata only


# ============= File Records =============

class FileRecord(BaseModel):
    """Metadata (and optionally content) for a single file."""

    model_config = {"frozen": True}

    relative_path: str  # POSIX, relative to the snapshot root
    size: str           # human-readable, "?" when unreadable
    modified: str       # local time, "?" when unreadable
    language: str
    content: Optional[str] = None
    vcs_status: VcsStatus = VcsStatus.CLEAN

    @property
    def has_content(self) -> bool:
        return self.content is not None

    @property
    def is_changed(self) -> bool:
        """True when version control reports a change other than a deletion."""
        return self.vcs_status not in (VcsStatus.CLEAN, VcsStatus.DELETED)


def with_content(record: FileRecord, content: Optional[str]) -> FileRecord:
    """Return a copy of ``record`` with its content replaced."""
    return record.model_copy(update={"content": content})


def with_status(record: FileRecord, status: VcsStatus) -> FileRecord:
    """Return a copy of ``record`` with its VCS status replaced."""
    return record.model_copy(update={"vcs_status": status})


# ============= Snapshot =============

class Snapshot(BaseModel):
    """Result of one collection run: a root path plus records sorted by path."""

    model_config = {"frozen": True}

    root_path: str
    mode: SnapshotMode = SnapshotMode.MINIMAL
    files: Tuple[FileRecord, ...] = Field(default_factory=tuple)

    _by_path: Dict[str, FileRecord] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._by_path = {f.relative_path: f for f in self.files}

    @property
    def paths(self) -> List[str]:
        return [f.relative_path for f in self.files]

    @property
    def changed_files(self) -> List[FileRecord]:
        """Records with a pending (non-deletion) change."""
        return [f for f in self.files if f.is_changed]

    @property
    def files_with_content(self) -> List[FileRecord]:
        return [f for f in self.files if f.has_content]

    def get(self, relative_path: str) -> Optional[FileRecord]:
        """Look up a record by its relative path."""
        return self._by_path.get(relative_path)
