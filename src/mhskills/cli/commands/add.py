# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""CLI command for installing a skill from any supported source."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from mhskills.core.config import get_settings
from mhskills.core.exceptions import MhSkillsError
from mhskills.models.source import InstallResult
from mhskills.resolver import SkillResolver

console = Console()


def add_command(
    source: Annotated[
        str,
        typer.Argument(
            help="Local path, owner/repo[@skill], GitHub/GitLab URL, SKILL.md URL or docs site"
        ),
    ],
    target_dir: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Skills root to install into (default: .agents/skills)"),
    ] = None,
    skill: Annotated[
        str | None,
        typer.Option("--skill", "-s", help="Skill name to pick from a multi-skill source"),
    ] = None,
) -> None:
    """Install a skill into the project's skills directory."""
    exit_code = asyncio.run(_async_add(source, target_dir, skill))
    raise typer.Exit(exit_code)


async def _async_add(source: str, target_dir: Path | None, skill: str | None) -> int:
    settings = get_settings()
    try:
        async with SkillResolver(settings) as resolver:
            result: InstallResult = await resolver.add(source, target_dir, skill_filter=skill)
    except MhSkillsError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1

    console.print(
        f"[green]Installed[/green] {escape(source)} to {result.target_dir}",
        highlight=False,
        soft_wrap=True,
    )
    console.print(
        f"  source: {result.source_identifier}", style="dim", highlight=False, soft_wrap=True
    )
    return 0
