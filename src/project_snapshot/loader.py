"""Selective content loading for file records."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from .classifier import PathClassifier
from .core import FileRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentPolicy:
    """What may be read for a record: a size cap plus the classifier's rules."""

    max_bytes: int  # exclusive upper bound
    classifier: PathClassifier


def read_text(path: Path, max_bytes: int) -> Optional[str]:
    """Read a UTF-8 text file smaller than ``max_bytes``.

    Returns None when the file is at or over the cap (even if it grew after
    its size was checked) or cannot be decoded.
    """
    with path.open("rb") as f:
        data = f.read(max_bytes)
        if len(data) >= max_bytes:
            return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def load_content(root: Path, record: FileRecord, policy: ContentPolicy) -> Optional[str]:
    """Return the text of ``record``'s file, or None if it is not loadable."""
    path = root / record.relative_path
    name = path.name
    classifier = policy.classifier

    if classifier.is_binary(name) or classifier.is_secret(name):
        return None
    if not classifier.is_eligible_for_content(name):
        return None

    try:
        if not path.is_file():
            return None
        if path.stat().st_size >= policy.max_bytes:
            return None
        return read_text(path, policy.max_bytes)
    except OSError as e:
        logger.debug("Could not read %s: %s", record.relative_path, e)
        return None
