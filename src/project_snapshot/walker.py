"""Single-pass metadata walk of the snapshot root."""

from pathlib import Path
from typing import Dict, List, Mapping, Optional
import logging
import os
import stat

from .classifier import PathClassifier
from .constants import UNKNOWN_ATTR, UNKNOWN_LANGUAGE
from .core import FileRecord, VcsStatus, with_status
from .utils import format_modified, guess_language, humanize_bytes

logger = logging.getLogger(__name__)


def _unreadable_record(relative_path: str) -> FileRecord:
    return FileRecord(
        relative_path=relative_path,
        size=UNKNOWN_ATTR,
        modified=UNKNOWN_ATTR,
        language=UNKNOWN_LANGUAGE,
    )


def to_record(path: Path, relative_path: str) -> Optional[FileRecord]:
    """Build a content-less record from filesystem metadata.

    Returns None for entries that are not regular files. Entries whose
    attributes cannot be read still produce a record, with sentinel values.
    """
    try:
        st = path.stat()
    except OSError as e:
        logger.warning("Could not read attributes of %s: %s", relative_path, e)
        return _unreadable_record(relative_path)

    if not stat.S_ISREG(st.st_mode):
        return None

    return FileRecord(
        relative_path=relative_path,
        size=humanize_bytes(st.st_size),
        modified=format_modified(st.st_mtime),
        language=guess_language(path.name),
    )


def walk_metadata(
    root: Path,
    classifier: PathClassifier,
    statuses: Optional[Mapping[str, VcsStatus]] = None,
) -> List[FileRecord]:
    """Enumerate visible regular files under ``root`` as sorted records.

    Ignored directories are pruned before descending. Each record carries
    the VCS status from ``statuses`` (clean when absent).
    """
    statuses = statuses or {}
    records: Dict[str, FileRecord] = {}

    def _on_error(err: OSError) -> None:
        logger.warning("Skipping unreadable directory %s: %s", err.filename, err.strerror)

    for dirpath, dirnames, filenames in os.walk(root, topdown=True, onerror=_on_error):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix()
        if rel_dir == ".":
            rel_dir = ""

        # Prune in place so os.walk never enters ignored subtrees
        dirnames[:] = sorted(d for d in dirnames if classifier.should_descend(rel_dir, d))

        for name in filenames:
            rel = f"{rel_dir}/{name}" if rel_dir else name
            path = current / name
            if classifier.excludes(path, rel):
                continue
            record = to_record(path, rel)
            if record is None:
                continue
            records[rel] = with_status(record, statuses.get(rel, VcsStatus.CLEAN))

    logger.debug("Collected metadata for %d files under %s", len(records), root)
    return [records[rel] for rel in sorted(records)]
