"""``checksumforge generate SOURCES...`` — create or update checksum files.

Resolves the sources into input files, asks the snapshot store what
changed since the last run, and reconciles the output directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from checksumforge.config import ChecksumSettings
from checksumforge.core.file_collection import resolve_inputs
from checksumforge.core.orchestrator import ChecksumTask
from checksumforge.errors import ChecksumError
from checksumforge.models.algorithm import Algorithm
from checksumforge.models.config import ChecksumConfig
from checksumforge.models.results import ReconcileReport

console = Console()


def generate_cmd(
    sources: List[Path] = typer.Argument(
        ...,
        help="Input files and/or directories to checksum.",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory receiving the checksum files.",
    ),
    algorithm: Optional[Algorithm] = typer.Option(
        None,
        "--algorithm",
        "-a",
        case_sensitive=False,
        help="Digest algorithm.",
    ),
    append_name: Optional[bool] = typer.Option(
        None,
        "--append-name/--no-append-name",
        help="Write '<digest>  <name>' instead of the bare digest.",
    ),
    include: Optional[List[str]] = typer.Option(
        None,
        "--include",
        "-i",
        help="Glob pattern for files under directory sources (repeatable).",
    ),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        "-x",
        help="Glob pattern to drop files under directory sources (repeatable).",
    ),
    state: Optional[Path] = typer.Option(
        None,
        "--state",
        "-s",
        help="Path to the change-detection database.",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Threads used for hashing.",
    ),
) -> None:
    """Create or update one checksum file per input file."""
    settings = ChecksumSettings()
    overrides: dict[str, object] = {}
    if state is not None:
        overrides["state_path"] = state
    if workers is not None:
        overrides["max_workers"] = workers
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        config = ChecksumConfig(
            output_dir=output_dir or settings.output_dir,
            algorithm=algorithm or settings.default_algorithm,
            append_name=settings.append_name if append_name is None else append_name,
            files=resolve_inputs(sources, include, exclude),
        )
        report = ChecksumTask(config, settings=settings).run()
    except ChecksumError as exc:
        console.print(f"[bold red]Checksum generation failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    _print_report(report)


def _print_report(report: ReconcileReport) -> None:
    if report.up_to_date:
        console.print(f"[green]UP-TO-DATE[/green] {report.output_dir}")
        return

    mode = "incremental" if report.incremental else "full"
    lines = [
        f"[bold]Output:[/bold]     {report.output_dir}",
        f"[bold]Algorithm:[/bold]  {report.algorithm.name}",
        f"[bold]Mode:[/bold]       {mode}",
        f"[bold]Written:[/bold]    {len(report.written)}",
        f"[bold]Deleted:[/bold]    {len(report.deleted)}",
        f"[bold]Unchanged:[/bold]  {len(report.unchanged)}",
    ]
    if report.purged:
        lines.append(f"[bold]Purged:[/bold]     {len(report.purged)}")
    if report.skipped:
        lines.append(f"[dim]Skipped {len(report.skipped)} director(y/ies)[/dim]")

    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]Checksums[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
