# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""CLI commands for inspecting source classification and providers."""

from __future__ import annotations

import sys
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mhskills.core.config import get_settings
from mhskills.core.exceptions import MhSkillsError
from mhskills.providers import build_default_registry
from mhskills.sources.classifier import parse_source, source_identifier

console = Console()


def source_command(
    source: Annotated[str, typer.Argument(help="Source string to classify")],
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON instead of a table")] = False,
) -> None:
    """Show how a source string is classified."""
    try:
        parsed = parse_source(source)
    except MhSkillsError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from None

    if as_json:
        sys.stdout.write(parsed.model_dump_json(indent=2) + "\n")
        return

    table = Table(title=f"Source: {escape(source)}", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("Kind", parsed.kind.value)
    table.add_row("URL", parsed.url)
    for label, value in (
        ("Local path", parsed.local_path),
        ("Ref", parsed.ref),
        ("Subpath", parsed.subpath),
        ("Skill", parsed.skill_filter),
    ):
        if value:
            table.add_row(label, value)
    table.add_row("Identifier", source_identifier(parsed))
    console.print(table)


def providers_command() -> None:
    """List registered host providers in priority order."""
    settings = get_settings()
    registry = build_default_registry(
        timeout=settings.http_timeout, user_agent=settings.user_agent
    )

    table = Table(title="Host providers")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    for position, provider in enumerate(registry.providers(), start=1):
        table.add_row(str(position), provider.id, provider.display_name)
    console.print(table)
