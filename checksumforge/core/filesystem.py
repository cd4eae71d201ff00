"""File system backends used by the reconciler.

The reconciler never touches ``pathlib`` directly for mutations; it goes
through an ``ArtifactFileSystem``. ``LocalFileSystem`` is the default.
Tests substitute recording implementations to count writes and deletes.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class ArtifactFileSystem(Protocol):
    """Protocol for the file operations the reconciler needs."""

    def ensure_directory(self, path: Path) -> None:
        """Create ``path`` (and parents) if absent. Raise ``OSError`` on failure."""
        ...

    def is_dir(self, path: Path) -> bool:
        ...

    def list_files(self, directory: Path) -> list[Path]:
        """Regular files directly inside ``directory`` (non-recursive)."""
        ...

    def open_binary(self, path: Path) -> BinaryIO:
        ...

    def write_bytes(self, path: Path, data: bytes) -> None:
        ...

    def delete(self, path: Path) -> bool:
        """Delete ``path`` if present. Return ``False`` if it did not exist."""
        ...


class LocalFileSystem:
    """Direct ``pathlib`` implementation of ``ArtifactFileSystem``."""

    def ensure_directory(self, path: Path) -> None:
        path = Path(path)
        if path.exists() and not path.is_dir():
            raise NotADirectoryError(f"Not a directory: {path}")
        path.mkdir(parents=True, exist_ok=True)

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def list_files(self, directory: Path) -> list[Path]:
        return sorted(p for p in Path(directory).iterdir() if p.is_file())

    def open_binary(self, path: Path) -> BinaryIO:
        return Path(path).open("rb")

    def write_bytes(self, path: Path, data: bytes) -> None:
        Path(path).write_bytes(data)

    def delete(self, path: Path) -> bool:
        try:
            Path(path).unlink()
        except FileNotFoundError:
            return False
        return True
