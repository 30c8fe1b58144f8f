"""Tests for the metadata walk."""

import os

import pytest

from project_snapshot.classifier import PathClassifier
from project_snapshot.core import VcsStatus
from project_snapshot.ignore import IgnoreSpec
from project_snapshot.utils import format_modified
from project_snapshot.walker import to_record, walk_metadata


@pytest.fixture
def classifier(tmp_path):
    return PathClassifier(self_locator=None, ignore_spec=IgnoreSpec(tmp_path))


class TestWalk:
    """Test traversal, filtering and ordering."""

    def test_visible_files_sorted(self, tmp_path, sample_project, classifier):
        records = walk_metadata(tmp_path, classifier)
        assert [r.relative_path for r in records] == [
            "README.md",
            "notes.unknownext",
            "src/Main.txt",
            "src/app.py",
        ]

    def test_records_have_no_content(self, tmp_path, sample_project, classifier):
        assert all(r.content is None for r in walk_metadata(tmp_path, classifier))

    def test_metadata(self, tmp_path, sample_project, classifier):
        main = next(r for r in walk_metadata(tmp_path, classifier) if r.relative_path == "src/Main.txt")
        assert main.size == "50 B"
        assert main.modified == format_modified((tmp_path / "src" / "Main.txt").stat().st_mtime)
        assert main.language == "Other"

        readme = next(r for r in walk_metadata(tmp_path, classifier) if r.relative_path == "README.md")
        assert readme.language == "Markdown"

    def test_status_merged_with_clean_default(self, tmp_path, sample_project, classifier):
        statuses = {"src/app.py": VcsStatus.MODIFIED, "gone.py": VcsStatus.DELETED}
        records = {r.relative_path: r for r in walk_metadata(tmp_path, classifier, statuses)}

        assert records["src/app.py"].vcs_status == VcsStatus.MODIFIED
        assert records["README.md"].vcs_status == VcsStatus.CLEAN
        # Deleted files are not on disk, so they never produce records
        assert "gone.py" not in records

    def test_ignored_directories_are_pruned(self, tmp_path, sample_project, classifier, monkeypatch):
        """Files under ignored directories are never even classified."""
        seen = []
        original = PathClassifier.excludes

        def spy(self, path, relative_path):
            seen.append(relative_path)
            return original(self, path, relative_path)

        monkeypatch.setattr(PathClassifier, "excludes", spy)
        walk_metadata(tmp_path, classifier)

        assert seen
        assert not [p for p in seen if p.startswith(("build/", "node_modules/", "snapshots/"))]

    def test_nested_ignored_directory(self, tmp_path, write_file, classifier):
        write_file("frontend/node_modules/lib/index.js", "x")
        write_file("frontend/src/index.js", "x")
        records = walk_metadata(tmp_path, classifier)
        assert [r.relative_path for r in records] == ["frontend/src/index.js"]

    def test_snapshotignore_patterns(self, tmp_path, write_file):
        write_file(".snapshotignore", "generated/\n*.log\n")
        write_file("generated/api.py", "x")
        write_file("app.log", "x")
        write_file("app.py", "x")

        classifier = PathClassifier(self_locator=None, ignore_spec=IgnoreSpec(tmp_path))
        assert [r.relative_path for r in walk_metadata(tmp_path, classifier)] == [".snapshotignore", "app.py"]

    def test_self_artifact_excluded(self, tmp_path, write_file):
        write_file("tools/collector/cli.py", "x")
        write_file("tools/other.py", "x")

        classifier = PathClassifier(self_locator=lambda: tmp_path / "tools" / "collector")
        assert [r.relative_path for r in walk_metadata(tmp_path, classifier)] == ["tools/other.py"]

    def test_idempotent(self, tmp_path, sample_project, classifier):
        assert walk_metadata(tmp_path, classifier) == walk_metadata(tmp_path, classifier)

    def test_empty_root(self, tmp_path, classifier):
        assert walk_metadata(tmp_path, classifier) == []


class TestUnreadable:
    """Test degraded records for entries whose attributes cannot be read."""

    def test_dangling_symlink_gets_sentinels(self, tmp_path, classifier):
        try:
            os.symlink(tmp_path / "missing.py", tmp_path / "dangling.py")
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        records = walk_metadata(tmp_path, classifier)
        assert len(records) == 1
        record = records[0]
        assert record.relative_path == "dangling.py"
        assert record.size == "?"
        assert record.modified == "?"
        assert record.language == "unknown"
        assert record.vcs_status == VcsStatus.CLEAN

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires mkfifo")
    def test_non_regular_files_skipped(self, tmp_path):
        os.mkfifo(tmp_path / "pipe.txt")
        assert to_record(tmp_path / "pipe.txt", "pipe.txt") is None
