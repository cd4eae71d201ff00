"""Per-file outcomes and the run report returned by the reconciler."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from checksumforge.models.algorithm import Algorithm


class FileAction(str, Enum):
    """What the reconciler did for a single change-set entry."""

    WRITTEN = "written"
    DELETED = "deleted"
    ABSENT = "absent"  # removal requested, artifact already gone
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"  # directory in the input set
    FAILED = "failed"


class FileOutcome(BaseModel):
    """Result of processing one input file.

    A failed outcome carries the error message instead of raising, so the
    driving loop decides where to stop.
    """

    model_config = ConfigDict(frozen=True)

    input_path: Path
    action: FileAction
    artifact_path: Path | None = None
    digest: str = ""
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.action != FileAction.FAILED


class ReconcileReport(BaseModel):
    """Summary of one reconciler run."""

    model_config = ConfigDict(frozen=True)

    output_dir: Path
    algorithm: Algorithm
    incremental: bool
    purged: list[Path] = []
    outcomes: list[FileOutcome] = []
    up_to_date: bool = False

    def _paths(self, action: FileAction) -> list[Path]:
        return [o.artifact_path for o in self.outcomes if o.action == action and o.artifact_path]

    @property
    def written(self) -> list[Path]:
        return self._paths(FileAction.WRITTEN)

    @property
    def deleted(self) -> list[Path]:
        return self._paths(FileAction.DELETED)

    @property
    def skipped(self) -> list[Path]:
        return [o.input_path for o in self.outcomes if o.action == FileAction.SKIPPED]

    @property
    def unchanged(self) -> list[Path]:
        return [o.input_path for o in self.outcomes if o.action == FileAction.UNCHANGED]
