"""Version control status for the snapshot root.

``git status`` runs once per snapshot. Its porcelain output is parsed into a
``relative path -> VcsStatus`` mapping; files missing from the mapping are
clean. Any failure to obtain status degrades to an empty mapping.

Git reports paths relative to the top of the repository. The runner strips
the snapshot root's prefix below that top level, so a root that is a
subdirectory of a repository still keys statuses by root-relative path.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol
import logging
import subprocess

from .constants import DEFAULT_VCS_TIMEOUT
from .core import VcsStatus
from .errors import VcsUnavailableError
from .utils import canonical, to_posix

logger = logging.getLogger(__name__)

# -z prints paths verbatim (no C-style quoting) and NUL-terminates entries;
# "-- ." limits the output to the working directory
GIT_STATUS_ARGS = ["git", "status", "--porcelain", "-z", "--untracked-files=all", "--", "."]

_CODES = {
    "M": VcsStatus.MODIFIED,
    "A": VcsStatus.ADDED,
    "D": VcsStatus.DELETED,
    "R": VcsStatus.RENAMED,
    "??": VcsStatus.UNTRACKED,
}


class VcsRunner(Protocol):
    """Source of porcelain status entries (``XY path``) relative to the root."""

    def status_lines(self, root: Path) -> List[str]:
        """Return status entries, or raise VcsUnavailableError."""
        ...


def repository_prefix(root: Path) -> str:
    """Path of ``root`` below its repository top level, with a trailing slash.

    Empty when ``root`` is the top level itself or no enclosing ``.git``
    (directory, or file for worktrees and submodules) is found.
    """
    root = canonical(root)
    for parent in (root, *root.parents):
        if (parent / ".git").exists():
            if parent == root:
                return ""
            return root.relative_to(parent).as_posix() + "/"
    return ""


def split_entries(output: str) -> List[str]:
    """Split ``-z`` porcelain output into ``XY path`` entries.

    Rename and copy entries are followed by an extra field holding the
    source path; the file on disk is the destination, so the source is dropped.
    """
    entries = []
    fields = iter(output.split("\0"))
    for field in fields:
        if not field:
            continue
        entries.append(field)
        if "R" in field[:2] or "C" in field[:2]:
            next(fields, None)
    return entries


def strip_prefix(entries: Iterable[str], prefix: str) -> List[str]:
    """Rewrite repository-relative entries as relative to a subdirectory."""
    if not prefix:
        return list(entries)
    stripped = []
    for entry in entries:
        code, path = entry[:3], entry[3:]
        if path.startswith(prefix):
            stripped.append(code + path[len(prefix):])
    return stripped


class GitStatusRunner:
    """Runs ``git status --porcelain -z`` in a subprocess."""

    def __init__(self, timeout: float = DEFAULT_VCS_TIMEOUT, args: Iterable[str] = GIT_STATUS_ARGS):
        self.timeout = timeout
        self.args = list(args)

    def status_lines(self, root: Path) -> List[str]:
        try:
            result = subprocess.run(
                self.args,
                cwd=root,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,  # Handle errors manually for better diagnostics
            )
        except FileNotFoundError as e:
            raise VcsUnavailableError(f"{self.args[0]} executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise VcsUnavailableError(f"{self.args[0]} status timed out after {self.timeout}s") from e
        except OSError as e:
            raise VcsUnavailableError(f"could not run {self.args[0]}: {e}") from e

        if result.returncode != 0:
            error_msg = result.stderr.strip() or result.stdout.strip()
            raise VcsUnavailableError(
                f"{self.args[0]} status exited with {result.returncode}: {error_msg}"
            )

        prefix = repository_prefix(root)
        if prefix:
            logger.debug("Snapshot root is %s below the repository top level", prefix)
        return strip_prefix(split_entries(result.stdout), prefix)


def decode_status(code: str) -> VcsStatus:
    """Map a porcelain status code to a VcsStatus (unknown codes are Changed)."""
    return _CODES.get(code.strip(), VcsStatus.CHANGED)


def _entry_path(entry: str) -> Optional[str]:
    # Paths are verbatim, so only separators are normalized
    path = to_posix(entry[3:])
    return path or None


def parse_porcelain(lines: Iterable[str]) -> Dict[str, VcsStatus]:
    """Parse porcelain v1 entries (``XY path``) into a status mapping."""
    changes: Dict[str, VcsStatus] = {}
    for line in lines:
        line = line.rstrip("\r\n")
        if len(line) <= 3:
            continue
        code = line[:2].strip()
        if not code:
            continue
        path = _entry_path(line)
        if path:
            changes[path] = decode_status(code)
    return changes


def resolve_vcs_status(root: Path, runner: VcsRunner) -> Dict[str, VcsStatus]:
    """Collect status for ``root``; never raises for VCS problems."""
    try:
        lines = runner.status_lines(root)
    except VcsUnavailableError as e:
        logger.warning("Git not available or not a repository; all files reported clean (%s)", e)
        return {}
    changes = parse_porcelain(lines)
    logger.debug("VCS reported %d changed paths", len(changes))
    return changes
