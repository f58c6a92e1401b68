#!/usr/bin/env python3
"""
mxwrap CLI entrypoint.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from mxwrap.cli.commands import replay, rooms
from mxwrap.logging_config import setup_logging

app = typer.Typer(
    name="mxwrap",
    help="Inspect and replay mxwrap action logs",
    add_completion=False,
)

console = Console()

app.command("replay")(replay.replay_command)
app.command("rooms")(rooms.rooms_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override MXWRAP_LOG_LEVEL"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json or text"),
):
    """Inspect and replay mxwrap action logs."""
    setup_logging(level=log_level, log_format=log_format)


@app.command()
def version():
    """Show version information."""
    from mxwrap import __version__
    from mxwrap.core.actions import NAMESPACE

    table = Table(show_header=False, box=None)
    table.add_row("[bold]mxwrap[/bold]", f"v{__version__}")
    table.add_row("Action namespace", NAMESPACE)

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
