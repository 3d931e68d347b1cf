"""``teestream tee`` — copy stdin to stdout and every FILE.

Files are registered as owned sinks and closed when the copy ends.
stdout is registered as a survivable sink: it receives every byte but
is never closed by the distributor.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from teestream.config import TeeStreamConfig
from teestream.core.distributor import Distributor
from teestream.errors import InvalidStateError, SinkFanoutError
from teestream.sinks.local_file import LocalFileSink

console = Console(stderr=True)


def tee_cmd(
    files: list[Path] = typer.Argument(
        None,
        help="Files to write a copy of stdin to.",
        dir_okay=False,
    ),
    append: bool = typer.Option(
        False,
        "--append",
        "-a",
        help="Append to FILEs instead of overwriting them.",
    ),
    chunk_size: int = typer.Option(
        None,
        "--chunk-size",
        min=1,
        help="Read buffer size in bytes (defaults to TEESTREAM_CHUNK_SIZE).",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Do not copy to stdout and do not print a summary.",
    ),
) -> None:
    """Copy stdin to stdout and every FILE."""
    config = TeeStreamConfig()
    chunk_size = chunk_size or config.chunk_size
    files = files or []

    sinks: list[LocalFileSink] = []
    try:
        for path in files:
            sinks.append(LocalFileSink(path, append=append))
    except OSError as e:
        for sink in sinks:
            sink.close()
        console.print(f"[red]Cannot open output:[/red] {e}")
        raise typer.Exit(code=1)

    distributor = Distributor(config=config)
    for sink in sinks:
        distributor.register(sink)
    if not quiet:
        distributor.register(
            typer.get_binary_stream("stdout"), close_with_distributor=False
        )

    stdin = typer.get_binary_stream("stdin")
    copied = 0
    try:
        with distributor:
            while True:
                chunk = stdin.read(chunk_size)
                if not chunk:
                    break
                copied += distributor.write(chunk)
                distributor.flush()
    except (InvalidStateError, SinkFanoutError, OSError) as e:
        console.print(f"[red]tee failed after {copied} bytes:[/red] {e}")
        raise typer.Exit(code=1)
    finally:
        # Under fail-fast a failed close leaves owned files open.
        for sink in sinks:
            sink.close()

    if quiet:
        return

    table = Table(title="teestream", show_header=True)
    table.add_column("Sink", style="cyan")
    table.add_column("Closed with distributor", justify="center")
    for registration in distributor.registrations:
        owned = "[green]Yes[/green]" if registration.close_with_distributor else "[yellow]No[/yellow]"
        table.add_row(registration.sink_name, owned)
    console.print(table)
    console.print(f"[bold]{copied}[/bold] bytes copied to {len(distributor)} sink(s)")
