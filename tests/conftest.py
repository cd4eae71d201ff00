"""Shared test fixtures for Checksumforge."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from checksumforge.config import ChecksumSettings
from checksumforge.core.filesystem import LocalFileSystem
from checksumforge.core.reconciler import Reconciler
from checksumforge.core.snapshot import InputSnapshotStore
from checksumforge.models.config import ChecksumConfig

HELLO = b"Hello, Checksum!"


class RecordingFileSystem(LocalFileSystem):
    """LocalFileSystem that records mutations and can fail on demand."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.writes: list[Path] = []
        self.deletes: list[Path] = []
        self.fail_on = fail_on or set()

    def write_bytes(self, path: Path, data: bytes) -> None:
        if Path(path).name in self.fail_on:
            raise PermissionError(13, "Permission denied", str(path))
        self.writes.append(Path(path))
        super().write_bytes(path, data)

    def delete(self, path: Path) -> bool:
        self.deletes.append(Path(path))
        return super().delete(path)


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def input_dir(tmp_dir: Path) -> Path:
    """Input tree with ``foo.txt`` and ``bar.txt``."""
    root = tmp_dir / "input"
    root.mkdir()
    (root / "foo.txt").write_bytes(b"foo")
    (root / "bar.txt").write_bytes(b"bar")
    return root


@pytest.fixture
def output_dir(tmp_dir: Path) -> Path:
    """Not created up front: the reconciler must create it."""
    return tmp_dir / "build" / "checksums"


@pytest.fixture
def hello_file(tmp_dir: Path) -> Path:
    """``aFile.txt`` containing ``Hello, Checksum!``."""
    path = tmp_dir / "aFile.txt"
    path.write_bytes(HELLO)
    return path


@pytest.fixture
def make_recording_fs() -> Callable[..., RecordingFileSystem]:
    """Factory fixture: a recording file system, optionally failing on names."""

    def _factory(*fail_on: str) -> RecordingFileSystem:
        return RecordingFileSystem(set(fail_on))

    return _factory


@pytest.fixture
def recording_fs(make_recording_fs: Callable[..., RecordingFileSystem]) -> RecordingFileSystem:
    return make_recording_fs()


@pytest.fixture
def reconciler(recording_fs: RecordingFileSystem) -> Reconciler:
    """Provide a sequential Reconciler over a recording file system."""
    return Reconciler(recording_fs)


@pytest.fixture
def store(tmp_dir: Path) -> InputSnapshotStore:
    """Provide a fresh InputSnapshotStore backed by a temp SQLite database."""
    return InputSnapshotStore(tmp_dir / "state" / "state.db")


@pytest.fixture
def settings(tmp_dir: Path) -> ChecksumSettings:
    return ChecksumSettings(state_path=tmp_dir / "state" / "state.db")


@pytest.fixture
def make_config(output_dir: Path) -> Callable[..., ChecksumConfig]:
    """Factory fixture: build a ChecksumConfig with sensible defaults."""

    def _factory(files: list[Path] | None = None, **overrides: Any) -> ChecksumConfig:
        defaults: dict[str, Any] = {
            "output_dir": output_dir,
            "files": sorted(files or []),
        }
        defaults.update(overrides)
        return ChecksumConfig(**defaults)

    return _factory
