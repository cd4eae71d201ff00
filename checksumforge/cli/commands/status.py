"""``checksumforge status`` — show what the last successful run recorded."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from checksumforge.config import ChecksumSettings
from checksumforge.core.naming import artifact_path
from checksumforge.core.snapshot import InputSnapshotStore
from checksumforge.models.algorithm import Algorithm

console = Console()


def status_cmd(
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
    """Show the recorded inputs for an output directory."""
    settings = ChecksumSettings()
    db_path = state or settings.state_path
    if not db_path.exists():
        console.print(f"[bold red]State database not found:[/bold red] {db_path}")
        console.print("[dim]Run checksumforge generate first.[/dim]")
        raise typer.Exit(code=1)

    store = InputSnapshotStore(db_path)
    target = output_dir or settings.output_dir
    snapshot = store.load(target)
    if snapshot is None:
        console.print(f"[bold red]No recorded run for:[/bold red] {target}")
        known = store.list_output_dirs()
        if known:
            console.print("\n[bold]Recorded output directories:[/bold]")
            for name in known[:10]:
                console.print(f"  [cyan]{name}[/cyan]")
            if len(known) > 10:
                console.print(f"  [dim]... and {len(known) - 10} more[/dim]")
        raise typer.Exit(code=1)

    algorithm = Algorithm(snapshot.algorithm)
    table = Table(title=f"{snapshot.output_dir} ({snapshot.algorithm})")
    table.add_column("Input", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Content SHA-256", style="dim")
    table.add_column("Artifact", justify="center")

    for record in snapshot.inputs:
        artifact = artifact_path(snapshot.output_dir, record.path, algorithm)
        present = "[green]Yes[/green]" if artifact.is_file() else "[red]No[/red]"
        table.add_row(record.path, str(record.size), record.content_hash[:16], present)

    console.print(table)
    console.print(f"[dim]Recorded at {snapshot.recorded_at.isoformat(timespec='seconds')}[/dim]")
