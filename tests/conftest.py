"""Shared test fixtures and utilities."""

from pathlib import Path
from typing import List, Optional

import pytest

from project_snapshot.assembler import SnapshotAssembler
from project_snapshot.errors import VcsUnavailableError


class FakeVcsRunner:
    """VCS runner returning canned porcelain output instead of spawning git."""

    def __init__(self, lines: Optional[List[str]] = None, unavailable: bool = False):
        self.lines = list(lines or [])
        self.unavailable = unavailable
        self.calls: List[Path] = []

    def status_lines(self, root: Path) -> List[str]:
        self.calls.append(root)
        if self.unavailable:
            raise VcsUnavailableError("fake runner: not a repository")
        return list(self.lines)


@pytest.fixture
def fake_vcs():
    """Factory fixture creating fake VCS runners."""
    def _make(*lines: str, unavailable: bool = False) -> FakeVcsRunner:
        return FakeVcsRunner(list(lines), unavailable=unavailable)
    return _make


@pytest.fixture
def write_file(tmp_path):
    """Factory fixture to write files relative to tmp_path."""
    def _write(path: str, content: str = "test content"):
        file_path = tmp_path / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)
        return file_path
    return _write


@pytest.fixture
def write_bytes(tmp_path):
    """Factory fixture to write raw bytes relative to tmp_path."""
    def _write(path: str, content: bytes):
        file_path = tmp_path / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)
        return file_path
    return _write


@pytest.fixture
def sample_project(write_file, write_bytes):
    """A small project with visible, ignored, secret and binary files."""
    write_file("src/Main.txt", "x" * 50)
    write_file("src/app.py", "print('hello')\n")
    write_file("README.md", "# Sample\n")
    write_file("notes.unknownext", "plain text, unknown extension")
    write_bytes("build/output.bin", b"\x00\x01\x02")
    write_file("node_modules/pkg/index.js", "module.exports = {}\n")
    write_file(".env", "TOKEN=abc\n")
    write_bytes("assets/logo.png", b"\x89PNG\r\n")
    write_file("snapshots/snapshot-20250101-120000.json", "{}")
    write_file("snapshot-20250101-120000.txt", "old report")
    return write_file


@pytest.fixture
def make_assembler(tmp_path):
    """Factory fixture for assemblers over tmp_path with a fake VCS runner.

    The self locator is disabled so the collector's own location never
    affects what tests see. The runner is available as ``assembler.runner``.
    """
    def _make(*lines: str, unavailable: bool = False, config=None, root=None) -> SnapshotAssembler:
        return SnapshotAssembler(
            root or tmp_path,
            config=config,
            runner=FakeVcsRunner(list(lines), unavailable=unavailable),
            self_locator=None,
        )
    return _make
