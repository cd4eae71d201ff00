"""Recorded state of the last successful run for an output directory."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class InputRecord(BaseModel):
    """Fingerprint of one input file as seen by the last successful run."""

    model_config = ConfigDict(frozen=True)

    path: str
    size: int
    mtime_ns: int
    content_hash: str  # sha256 hex, independent of the task algorithm


class TaskSnapshot(BaseModel):
    """Everything the change detector remembers about one output directory."""

    model_config = ConfigDict(frozen=True)

    output_dir: str
    config_hash: str
    algorithm: str
    append_name: bool = False
    artifacts: list[str] = []
    inputs: list[InputRecord] = []
    recorded_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
