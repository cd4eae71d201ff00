"""Main Typer application — imports and registers all CLI commands.

Entry point: ``checksumforge`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from checksumforge.cli.commands.clean import clean_cmd
from checksumforge.cli.commands.generate import generate_cmd
from checksumforge.cli.commands.status import status_cmd
from checksumforge.config import settings
from checksumforge.models.algorithm import DEFAULT_ALGORITHM, Algorithm

app = typer.Typer(
    name="checksumforge",
    help="Checksumforge: incremental per-file checksum artifacts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="generate", help="Create or update checksum files.")(generate_cmd)
app.command(name="clean", help="Remove managed checksum files.")(clean_cmd)
app.command(name="status", help="Show the recorded state of an output directory.")(status_cmd)


def configure_logging(level: str) -> None:
    """Route ``logging`` output through Rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to CHECKSUMFORGE_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Checksumforge: incremental per-file checksum artifacts."""
    configure_logging(log_level or settings.log_level)


@app.command(name="algorithms", help="List supported algorithms.")
def algorithms_cmd() -> None:
    """List supported algorithms and the extension each one produces."""
    table = Table(title="Algorithms")
    table.add_column("Name", style="cyan")
    table.add_column("Extension", style="green")
    table.add_column("Default", justify="center")
    for algorithm in Algorithm:
        default = "[green]Yes[/green]" if algorithm is DEFAULT_ALGORITHM else ""
        table.add_row(algorithm.name, algorithm.suffix, default)
    Console().print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
