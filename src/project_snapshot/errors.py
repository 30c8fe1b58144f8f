"""Custom exceptions for project-snapshot.

Structural problems (a bad root, a malformed config file) are fatal and
surface to the caller. Transient problems (git missing, a file vanishing
mid-walk) are recovered where they happen and never use these classes
beyond that point.
"""

from pathlib import Path


class SnapshotError(RuntimeError):
    """Base class for all snapshot-related errors."""
    pass


# Root Errors
class RootError(SnapshotError):
    """Base class for problems with the snapshot root itself."""

    def __init__(self, root: Path, message: str):
        self.root = root
        super().__init__(message)


class RootNotFoundError(RootError):
    """Root path does not exist."""

    def __init__(self, root: Path):
        super().__init__(root, f"Root path does not exist: {root}")


class RootNotDirectoryError(RootError):
    """Root path exists but is not a directory."""

    def __init__(self, root: Path):
        super().__init__(root, f"Root path is not a directory: {root}")


class RootPermissionError(RootError):
    """Root directory cannot be listed."""

    def __init__(self, root: Path, reason: str = ""):
        detail = f" ({reason})" if reason else ""
        super().__init__(root, f"Cannot read root directory: {root}{detail}")


# Configuration Errors
class ConfigError(SnapshotError):
    """Invalid or unreadable configuration."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid snapshot configuration in {source}: {reason}")


# VCS Errors
class VcsUnavailableError(SnapshotError):
    """Version control status could not be obtained.

    Raised by VCS runners only; the resolver turns it into an empty
    status mapping.
    """
    pass
