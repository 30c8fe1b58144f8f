"""Path classification: what the walker skips and what may carry content.

All checks are pure functions of the configured lists, except the
self-artifact check which needs the collector's own location. That
location comes from an injectable ``self_locator`` so tests can point it
anywhere.
"""

from pathlib import Path
from typing import Callable, Optional
import logging

from .config import CollectorConfig
from .constants import OUTPUT_PREFIX, OUTPUT_SUFFIXES
from .ignore import IgnoreSpec
from .utils import canonical, extension_of

logger = logging.getLogger(__name__)

SelfLocator = Callable[[], Optional[Path]]


def default_self_path() -> Optional[Path]:
    """Canonical location of the running collector (its package directory)."""
    return canonical(Path(__file__).parent)


class PathClassifier:
    """Decides which filesystem entries are visible and which are textual."""

    def __init__(
        self,
        config: Optional[CollectorConfig] = None,
        self_locator: Optional[SelfLocator] = default_self_path,
        ignore_spec: Optional[IgnoreSpec] = None,
    ):
        self.config = config or CollectorConfig()
        self.ignore_spec = ignore_spec
        self._ignored_dirs = frozenset(self.config.ignored_dirs)
        self._ignored_files = frozenset(self.config.ignored_files)
        self._secret_patterns = tuple(self.config.secret_patterns)
        self._binary_exts = tuple(self.config.binary_extensions)
        self._text_exts = frozenset(self.config.text_extensions)
        self.self_path = self._locate_self(self_locator)

    @staticmethod
    def _locate_self(locator: Optional[SelfLocator]) -> Optional[Path]:
        if locator is None:
            return None
        try:
            located = locator()
        except OSError as e:
            logger.debug("Could not resolve collector location: %s", e)
            return None
        return canonical(located) if located is not None else None

    # ---------- directory checks ----------

    def is_ignored_directory(self, segment: str) -> bool:
        """True if a single path segment names an ignored directory."""
        return segment in self._ignored_dirs

    def should_descend(self, relative_dir: str, name: str) -> bool:
        """Whether the walker should enter directory ``name`` inside ``relative_dir``."""
        if self.is_ignored_directory(name):
            return False
        if self.ignore_spec:
            dirpath = f"{relative_dir}/{name}" if relative_dir else name
            return self.ignore_spec.should_traverse(dirpath)
        return True

    # ---------- file checks ----------

    def is_binary(self, filename: str) -> bool:
        return filename.lower().endswith(self._binary_exts)

    def is_secret(self, filename: str) -> bool:
        name = filename.lower()
        return any(pattern in name for pattern in self._secret_patterns)

    def is_ignored_file(self, filename: str, relative_path: str) -> bool:
        """True for denylisted names, secret-looking names and binary extensions.

        ``relative_path`` is consulted for project ignore patterns only.
        """
        if filename.lower() in self._ignored_files:
            return True
        if self.is_binary(filename) or self.is_secret(filename):
            return True
        if self.ignore_spec and self.ignore_spec.is_ignored(relative_path):
            return True
        return False

    @staticmethod
    def is_snapshot_artifact(filename: str) -> bool:
        """True for prior outputs such as ``snapshot-20250101-120000.json``."""
        name = filename.lower()
        return name.startswith(OUTPUT_PREFIX) and name.endswith(OUTPUT_SUFFIXES)

    def is_self(self, path: Path) -> bool:
        """True if ``path`` is (or lies inside) the running collector's artifact."""
        if self.self_path is None:
            return False
        resolved = canonical(path)
        return resolved.is_relative_to(self.self_path)

    def excludes(self, path: Path, relative_path: str) -> bool:
        """Combined file exclusion used during traversal.

        Ignored directories are pruned by ``should_descend`` before their files
        are ever seen, so only the file itself is checked here.
        """
        name = path.name
        return (
            self.is_ignored_file(name, relative_path)
            or self.is_snapshot_artifact(name)
            or self.is_self(path)
        )

    # ---------- content eligibility ----------

    def is_eligible_for_content(self, filename: str) -> bool:
        """True only for extensions on the textual allow-list.

        Stricter than "not ignored": a visible file with an unknown extension
        is listed with metadata but never gets content.
        """
        return extension_of(filename) in self._text_exts
