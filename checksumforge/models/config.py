"""Per-run configuration of a checksum task."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from checksumforge.errors import ChecksumConfigError
from checksumforge.models.algorithm import DEFAULT_ALGORITHM, Algorithm


class ChecksumConfig(BaseModel):
    """Immutable description of one checksum task invocation.

    Built once per run and passed to the reconciler and the change
    detector. ``files`` is the resolved, flattened input set.
    """

    model_config = ConfigDict(frozen=True)

    output_dir: Path = Path("build/checksums")
    algorithm: Algorithm = DEFAULT_ALGORITHM
    append_name: bool = False
    files: list[Path] = []

    @field_validator("algorithm", mode="before")
    @classmethod
    def _parse_algorithm(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, Algorithm):
            try:
                return Algorithm.parse(value)
            except ValueError as exc:
                raise ChecksumConfigError(str(exc)) from None
        return value

    @model_validator(mode="after")
    def _check_output_dir(self) -> ChecksumConfig:
        if self.output_dir.exists() and not self.output_dir.is_dir():
            raise ChecksumConfigError(
                f"Output directory must be a directory: {self.output_dir}"
            )
        return self

    def fingerprint_payload(self) -> dict[str, object]:
        """Non-file inputs whose change invalidates every artifact."""
        return {
            "output_dir": str(self.output_dir.resolve()),
            "algorithm": self.algorithm.value,
            "append_name": self.append_name,
        }
