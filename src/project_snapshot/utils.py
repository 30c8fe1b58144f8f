"""Utility functions for project-snapshot."""

from datetime import datetime
from pathlib import Path, PurePath
from typing import Union
import os

from .constants import MODIFIED_TIME_FORMAT


_BYTE_PREFIXES = "KMGTPE"

# Extension -> language tag. Anything else is "Other".
LANGUAGES = {
    ".java": "Java",
    ".kt": "Kotlin",
    ".kts": "Kotlin",
    ".scala": "Scala",
    ".groovy": "Groovy",
    ".py": "Python",
    ".rb": "Ruby",
    ".go": "Go",
    ".rs": "Rust",
    ".ts": "TypeScript",
    ".tsx": "TSX",
    ".js": "JavaScript",
    ".jsx": "JSX",
    ".md": "Markdown",
    ".json": "JSON",
    ".yml": "YAML",
    ".yaml": "YAML",
    ".xml": "XML",
    ".html": "HTML",
    ".htm": "HTML",
    ".css": "CSS",
    ".properties": "Properties",
    ".toml": "TOML",
    ".ini": "INI",
    ".sh": "Shell",
    ".sql": "SQL",
}


def to_posix(path: Union[str, PurePath]) -> str:
    """Normalize a relative path to forward slashes."""
    if isinstance(path, PurePath):
        return path.as_posix()
    return path.replace("\\", "/")


def extension_of(filename: str) -> str:
    """Lowercased extension including the dot, or "" when there is none.

    Dotfiles such as ``.gitignore`` count as their own extension, which keeps
    them out of the textual allow-list unless it names them explicitly.
    """
    name = filename.lower()
    if "." not in name:
        return ""
    return name[name.rindex("."):]


def humanize_bytes(size: int) -> str:
    """Convert a byte count to a human-readable string with binary prefixes.

    Examples:
        512 -> "512 B"
        1536 -> "1.5 KB"
        2048 -> "2 KB"
    """
    if size < 1024:
        return f"{size} B"

    exp = 1
    while exp < len(_BYTE_PREFIXES) and size >= 1024 ** (exp + 1):
        exp += 1

    value = f"{size / 1024 ** exp:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_BYTE_PREFIXES[exp - 1]}B"


def format_modified(mtime: float) -> str:
    """Format an mtime (Unix epoch seconds) in local time."""
    return datetime.fromtimestamp(mtime).strftime(MODIFIED_TIME_FORMAT)


def guess_language(filename: str) -> str:
    """Infer a language tag from a filename's extension."""
    return LANGUAGES.get(extension_of(filename), "Other")


def canonical(path: Union[str, Path]) -> Path:
    """Resolve symlinks and relative segments; never raises for missing paths."""
    return Path(os.path.realpath(path))
