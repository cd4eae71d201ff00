"""``checksumforge clean`` — remove managed checksum files from a directory.

Only ``.md5``, ``.sha256``, ``.sha384`` and ``.sha512`` files are deleted.
The recorded snapshot is dropped too, so the next ``generate`` is a full run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from checksumforge.config import ChecksumSettings
from checksumforge.core.orchestrator import ChecksumTask
from checksumforge.errors import ChecksumError
from checksumforge.models.config import ChecksumConfig

console = Console()


def clean_cmd(
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory holding the checksum files.",
    ),
    state: Optional[Path] = typer.Option(
        None,
        "--state",
        "-s",
        help="Path to the change-detection database.",
    ),
) -> None:
    """Delete every managed checksum file and forget the recorded state."""
    settings = ChecksumSettings()
    if state is not None:
        settings = settings.model_copy(update={"state_path": state})

    try:
        config = ChecksumConfig(output_dir=output_dir or settings.output_dir)
        purged = ChecksumTask(config, settings=settings).clean()
    except ChecksumError as exc:
        console.print(f"[bold red]Clean failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print(f"Removed {len(purged)} checksum file(s) from {config.output_dir}")
