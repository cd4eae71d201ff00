"""Tests for input resolution — directory walking and glob filters."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from checksumforge.core.file_collection import matches, resolve_inputs


@pytest.fixture
def tree(tmp_dir: Path) -> Path:
    root = tmp_dir / "input"
    (root / "subdir").mkdir(parents=True)
    (root / "foo.txt").write_text("foo")
    (root / "bar.txt").write_text("bar")
    (root / "notes.md").write_text("notes")
    (root / "subdir" / "sub-foo.txt").write_text("sub-foo")
    return root


class TestMatches:
    @pytest.mark.parametrize(
        "relative, pattern, expected",
        [
            ("foo.txt", "**/*.txt", True),
            ("subdir/sub-foo.txt", "**/*.txt", True),
            ("notes.md", "**/*.txt", False),
            ("subdir/sub-foo.txt", "subdir/*", True),
            ("foo.txt", "subdir/*", False),
            ("FOO.TXT", "*.txt", False),
        ],
    )
    def test_patterns(self, relative: str, pattern: str, expected: bool):
        assert matches(relative, pattern) is expected


class TestResolveInputs:
    def test_walks_directories(self, tree: Path):
        names = [p.name for p in resolve_inputs([tree])]
        assert set(names) == {"foo.txt", "bar.txt", "notes.md", "sub-foo.txt"}

    def test_include(self, tree: Path):
        names = {p.name for p in resolve_inputs([tree], include=["**/*.txt"])}
        assert names == {"foo.txt", "bar.txt", "sub-foo.txt"}

    def test_exclude(self, tree: Path):
        names = {p.name for p in resolve_inputs([tree], include=["**/*.txt"], exclude=["subdir/**"])}
        assert names == {"foo.txt", "bar.txt"}

    def test_explicit_files_bypass_filters(self, tree: Path):
        resolved = resolve_inputs([tree / "notes.md"], include=["**/*.txt"])
        assert resolved == [(tree / "notes.md").absolute()]

    def test_sorted_absolute_and_deduplicated(self, tree: Path):
        resolved = resolve_inputs([tree, tree / "foo.txt"])
        assert resolved == sorted(resolved)
        assert all(p.is_absolute() for p in resolved)
        assert len(resolved) == len(set(resolved)) == 4

    def test_missing_source_skipped(self, tree: Path, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="checksumforge.core.file_collection"):
            resolved = resolve_inputs([tree / "gone.txt", tree / "foo.txt"])
        assert [p.name for p in resolved] == ["foo.txt"]
        assert "does not exist" in caplog.text

    def test_directories_never_returned(self, tree: Path):
        assert all(p.is_file() for p in resolve_inputs([tree]))
