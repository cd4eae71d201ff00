"""Exception hierarchy shared by the checksum engine and its callers.

Every fatal condition of a run surfaces as exactly one ``ChecksumError``
subclass. Nothing is retried.
"""

from __future__ import annotations

from pathlib import Path


class ChecksumError(RuntimeError):
    """Base class for every failure that aborts a checksum run."""


class ChecksumConfigError(ChecksumError):
    """Raised for caller-level misuse, before any file is processed."""


class OutputDirectoryError(ChecksumError):
    """Raised when the output directory cannot be created or is not a directory."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Could not create directory: {self.path} ({reason})")


class HashingError(ChecksumError):
    """Raised when an input cannot be read to the end."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Could not hash {self.path}: {reason}")


class ChecksumGenerationError(ChecksumError):
    """Raised by the reconciler on the first per-file failure of a run.

    Artifacts written earlier in the same run stay on disk.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Trouble creating checksum for {self.path}: {reason}")
