"""Artifact naming and content formatting.

An input ``<dir>/foo.txt`` hashed with SHA-256 produces
``<output_dir>/foo.txt.sha256``. Only the base name of the input is used,
so two inputs with the same name in different directories map to the same
artifact and the later write wins.
"""

from __future__ import annotations

from pathlib import Path

from checksumforge.models.algorithm import MANAGED_SUFFIXES, Algorithm


def artifact_name(input_file: Path | str, algorithm: Algorithm) -> str:
    return f"{Path(input_file).name}.{algorithm.extension}"


def artifact_path(output_dir: Path | str, input_file: Path | str, algorithm: Algorithm) -> Path:
    """Location of the checksum artifact for ``input_file``."""
    return Path(output_dir) / artifact_name(input_file, algorithm)


def artifact_content(digest: str, input_file: Path | str, append_name: bool = False) -> bytes:
    """Bytes written into an artifact.

    Either the bare digest, or ``"<digest>  <name>"`` in the two-space layout
    ``sha256sum -c`` and friends understand. No trailing newline.
    """
    if append_name:
        return f"{digest}  {Path(input_file).name}".encode("utf-8")
    return digest.encode("utf-8")


def is_managed_artifact(path: Path | str) -> bool:
    """True if ``path`` carries one of the four managed checksum suffixes."""
    return Path(path).suffix in MANAGED_SUFFIXES
