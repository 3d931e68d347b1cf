"""Main Typer application — imports and registers all CLI commands.

Entry point: ``teestream`` (configured via pyproject.toml [project.scripts]).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from teestream import __version__
from teestream.cli.commands.tee import tee_cmd
from teestream.config import TeeStreamConfig

app = typer.Typer(
    name="teestream",
    help="teestream: fan a byte stream out to many sinks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="tee", help="Copy stdin to stdout and every FILE.")(tee_cmd)


@app.callback()
def configure(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to TEESTREAM_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Configure logging before any subcommand runs."""
    level = (log_level or TeeStreamConfig().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.command(name="version", help="Show the installed teestream version.")
def version_cmd() -> None:
    """Print the package version."""
    typer.echo(__version__)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
