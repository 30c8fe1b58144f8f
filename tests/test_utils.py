"""Tests for formatting helpers."""

import time
from datetime import datetime
from pathlib import PureWindowsPath

import pytest

from project_snapshot.utils import (
    extension_of,
    format_modified,
    guess_language,
    humanize_bytes,
    to_posix,
)


@pytest.mark.parametrize("size,expected", [
    (0, "0 B"),
    (1023, "1023 B"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (1500, "1.46 KB"),
    (1024 * 1024, "1 MB"),
    (5 * 1024 ** 3, "5 GB"),
    (1024 ** 4, "1 TB"),
])
def test_humanize_bytes(size, expected):
    assert humanize_bytes(size) == expected


def test_format_modified_uses_local_time():
    """Modified times are formatted in local time with second precision."""
    now = time.time()
    expected = datetime.fromtimestamp(now).strftime("%Y-%m-%d %H:%M:%S")
    assert format_modified(now) == expected


class TestLanguage:
    """Test extension-based language inference."""

    def test_known_extensions(self):
        assert guess_language("Main.java") == "Java"
        assert guess_language("build.gradle.kts") == "Kotlin"
        assert guess_language("app.py") == "Python"
        assert guess_language("view.tsx") == "TSX"
        assert guess_language("index.ts") == "TypeScript"
        assert guess_language("config.yml") == "YAML"
        assert guess_language("page.htm") == "HTML"

    def test_case_insensitive(self):
        assert guess_language("README.MD") == "Markdown"

    def test_unknown_is_other(self):
        assert guess_language("Makefile") == "Other"
        assert guess_language("data.csv") == "Other"


def test_extension_of():
    assert extension_of("archive.tar.gz") == ".gz"
    assert extension_of("Main.JAVA") == ".java"
    assert extension_of(".gitignore") == ".gitignore"
    assert extension_of("Makefile") == ""


def test_to_posix():
    assert to_posix("src\\main.py") == "src/main.py"
    assert to_posix(PureWindowsPath("src\\pkg\\main.py")) == "src/pkg/main.py"
