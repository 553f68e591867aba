# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

from typing import Annotated

import typer

from mhskills import __version__
from mhskills.cli.commands.add import add_command
from mhskills.cli.commands.find import find_command
from mhskills.cli.commands.source import providers_command, source_command
from mhskills.core.config import get_settings
from mhskills.core.exceptions import ConfigurationError
from mhskills.core.logging import setup_logging

app = typer.Typer(
    name="mhskills",
    help="Discover and install agent skills (SKILL.md)",
    no_args_is_help=True,
)

app.command(name="add")(add_command)
app.command(name="find")(find_command)
app.command(name="source")(source_command)
app.command(name="providers")(providers_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"mhskills {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Discover and install agent skills (SKILL.md)."""
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from None
    setup_logging(level="DEBUG" if verbose else settings.log_level, fmt=settings.log_format)


if __name__ == "__main__":
    app()
