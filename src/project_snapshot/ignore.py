"""Gitignore-style project exclusions read from ``.snapshotignore``."""

from pathlib import Path
from typing import Iterable

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern

from .constants import IGNORE_FILE


class IgnoreSpec:
    """Project-specific gitignore-style patterns for file exclusion."""

    def __init__(self, root: Path, extra: Iterable[str] = ()):
        """Initialize ignore spec with patterns from the project and caller.

        Args:
            root: Project root directory
            extra: Additional patterns to include
        """
        self.root = root
        patterns = []

        ignore_file = root / IGNORE_FILE
        if ignore_file.is_file():
            content = ignore_file.read_text(encoding="utf-8", errors="replace")
            for line in content.splitlines():
                line = line.strip()
                if line and not line.startswith("#"):
                    patterns.append(line)

        patterns.extend(extra)
        self.patterns = patterns

        # Compile patterns once
        self.spec = PathSpec.from_lines(GitWildMatchPattern, patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def is_ignored(self, relpath: str) -> bool:
        """Check if a root-relative POSIX path should be ignored."""
        return self.spec.match_file(relpath)

    def should_traverse(self, dirpath: str) -> bool:
        """Check if a directory should be descended into during the walk.

        Args:
            dirpath: Root-relative directory path in POSIX format
        """
        # Trailing slash so directory-only patterns ("build/") match
        if not dirpath.endswith("/"):
            dirpath = dirpath + "/"
        return not self.spec.match_file(dirpath)
