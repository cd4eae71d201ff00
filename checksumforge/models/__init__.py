"""Checksumforge data models — all Pydantic v2, all frozen (immutable)."""

from checksumforge.models.algorithm import DEFAULT_ALGORITHM, MANAGED_SUFFIXES, Algorithm
from checksumforge.models.changes import ChangeDetection, ChangeKind, InputFileChange
from checksumforge.models.config import ChecksumConfig
from checksumforge.models.results import FileAction, FileOutcome, ReconcileReport
from checksumforge.models.snapshot import InputRecord, TaskSnapshot

__all__ = [
    # algorithm
    "Algorithm",
    "DEFAULT_ALGORITHM",
    "MANAGED_SUFFIXES",
    # changes
    "ChangeKind",
    "InputFileChange",
    "ChangeDetection",
    # config
    "ChecksumConfig",
    # results
    "FileAction",
    "FileOutcome",
    "ReconcileReport",
    # snapshot
    "InputRecord",
    "TaskSnapshot",
]
