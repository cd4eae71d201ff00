"""Per-file change classification handed to the reconciler."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class ChangeKind(str, Enum):
    """How an input file differs from the previous successful run."""

    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    UNCHANGED = "unchanged"

    @property
    def needs_checksum(self) -> bool:
        return self in (ChangeKind.ADDED, ChangeKind.MODIFIED)


class InputFileChange(BaseModel):
    """One ``(file, kind)`` pair of a change set."""

    model_config = ConfigDict(frozen=True)

    path: Path
    kind: ChangeKind

    @classmethod
    def added(cls, path: Path | str) -> InputFileChange:
        return cls(path=Path(path), kind=ChangeKind.ADDED)

    @classmethod
    def modified(cls, path: Path | str) -> InputFileChange:
        return cls(path=Path(path), kind=ChangeKind.MODIFIED)

    @classmethod
    def removed(cls, path: Path | str) -> InputFileChange:
        return cls(path=Path(path), kind=ChangeKind.REMOVED)

    @classmethod
    def unchanged(cls, path: Path | str) -> InputFileChange:
        return cls(path=Path(path), kind=ChangeKind.UNCHANGED)


class ChangeDetection(BaseModel):
    """Verdict of the change-detection oracle for one run.

    ``changes`` is only meaningful when ``is_incremental`` is True. For a
    full run the reconciler ignores it and treats every input as added.
    """

    model_config = ConfigDict(frozen=True)

    is_incremental: bool
    changes: list[InputFileChange] = []
    reason: str = ""

    @property
    def pending(self) -> list[InputFileChange]:
        """Changes that require the reconciler to write or delete something."""
        return [c for c in self.changes if c.kind != ChangeKind.UNCHANGED]
