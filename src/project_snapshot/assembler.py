"""Snapshot assembly for the full, diff and minimal modes.

Every mode runs the same pipeline: validate the root, resolve VCS status
once, walk the tree once, then apply the mode's content policy to the
walked records. Modes differ only in which records get content.
"""

from pathlib import Path
from typing import List, Optional, Union
import logging
import os

from .classifier import PathClassifier, SelfLocator, default_self_path
from .config import CollectorConfig
from .core import FileRecord, Snapshot, SnapshotMode, with_content
from .errors import RootNotDirectoryError, RootNotFoundError, RootPermissionError
from .ignore import IgnoreSpec
from .loader import ContentPolicy, load_content
from .vcs import GitStatusRunner, VcsRunner, resolve_vcs_status
from .walker import walk_metadata

logger = logging.getLogger(__name__)


def validate_root(root: Path) -> None:
    """Raise a RootError unless ``root`` is a listable directory."""
    if not root.exists():
        raise RootNotFoundError(root)
    if not root.is_dir():
        raise RootNotDirectoryError(root)
    try:
        with os.scandir(root) as entries:
            next(entries, None)
    except PermissionError as e:
        raise RootPermissionError(root, e.strerror or "") from e
    except OSError as e:
        raise RootPermissionError(root, str(e)) from e


class SnapshotAssembler:
    """Builds snapshots of one project root."""

    def __init__(
        self,
        root: Union[str, Path],
        config: Optional[CollectorConfig] = None,
        runner: Optional[VcsRunner] = None,
        self_locator: Optional[SelfLocator] = default_self_path,
        ignore_spec: Optional[IgnoreSpec] = None,
    ):
        """Initialize the assembler.

        Args:
            root: Project root directory
            config: Collector configuration (defaults when omitted)
            runner: VCS status source (``git status`` when omitted)
            self_locator: Returns the running collector's location, or None
            ignore_spec: Project ignore patterns (read from the root when omitted)
        """
        self.root = Path(root).resolve()
        self.config = config or CollectorConfig()
        self.runner = runner or GitStatusRunner(timeout=self.config.vcs_timeout)
        self.self_locator = self_locator
        self._ignore_spec = ignore_spec

    def _classifier(self) -> PathClassifier:
        ignore_spec = self._ignore_spec
        if ignore_spec is None:
            ignore_spec = IgnoreSpec(self.root)
        return PathClassifier(self.config, self_locator=self.self_locator, ignore_spec=ignore_spec)

    def _attach_content(
        self,
        records: List[FileRecord],
        mode: SnapshotMode,
        classifier: PathClassifier,
    ) -> List[FileRecord]:
        cap = self.config.content_cap(mode)
        if mode == SnapshotMode.MINIMAL or cap is None:
            return records

        policy = ContentPolicy(max_bytes=cap, classifier=classifier)
        attached = []
        for record in records:
            # Diff mode only reads files with a pending, non-deletion change
            if mode == SnapshotMode.DIFF and not record.is_changed:
                attached.append(record)
                continue
            attached.append(with_content(record, load_content(self.root, record, policy)))
        return attached

    def collect(self, mode: Union[SnapshotMode, str] = SnapshotMode.MINIMAL) -> Snapshot:
        """Collect one snapshot of the root in the given mode.

        Raises:
            RootError: If the root is missing, not a directory, or unreadable
        """
        mode = SnapshotMode(mode)
        validate_root(self.root)

        classifier = self._classifier()
        statuses = resolve_vcs_status(self.root, self.runner)
        records = walk_metadata(self.root, classifier, statuses)
        files = self._attach_content(records, mode, classifier)

        logger.info(
            "Collected %s snapshot of %s: %d files, %d with content",
            mode.value, self.root, len(files), sum(1 for f in files if f.has_content),
        )
        return Snapshot(root_path=str(self.root), mode=mode, files=files)

    def collect_all(self) -> Snapshot:
        """All files, with content for every eligible file."""
        return self.collect(SnapshotMode.FULL)

    def collect_diff(self) -> Snapshot:
        """All files, with content only for files that have pending changes."""
        return self.collect(SnapshotMode.DIFF)

    def collect_minimal(self) -> Snapshot:
        """All files, metadata only."""
        return self.collect(SnapshotMode.MINIMAL)
