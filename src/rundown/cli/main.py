"""
Main CLI application using Typer with router-based command dispatch.

This module provides the command-line interface for rundown, loading
rundown snapshots from JSON files and printing computed timestamps as
tables or JSON.
"""

from __future__ import annotations

import typer

from ..infra.logging import configure_logging
from .commands import timestamps
from .router import get_router

app = typer.Typer(help="Rundown timing CLI")

router = get_router(app)

router.register(
    "timestamps",
    timestamps.app,
    help_text="Compute original and actual timelines of a rundown",
)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Log level (default: LOG_LEVEL or INFO)"),
):
    """Rundown timing CLI."""
    configure_logging(log_level)


def cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
