# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""CLI command for searching skills.sh."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from mhskills.core.config import get_settings
from mhskills.core.exceptions import MhSkillsError
from mhskills.search import DEFAULT_LIMIT, SkillsShClient

console = Console()


def find_command(
    query: Annotated[list[str], typer.Argument(help="Search keywords")],
    limit: Annotated[
        int, typer.Option("--limit", "-n", min=1, help="Maximum number of results")
    ] = DEFAULT_LIMIT,
) -> None:
    """Search for skills by keyword."""
    asyncio.run(_async_find(" ".join(query).strip(), limit))


async def _async_find(query: str, limit: int) -> None:
    settings = get_settings()
    client = SkillsShClient(
        base_url=settings.search_api_url,
        timeout=settings.http_timeout,
        user_agent=settings.user_agent,
    )

    try:
        response = await client.search_response(query, limit=limit)
    except MhSkillsError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from None

    if not response.skills:
        console.print(f"No skills found for [bold]{escape(query)}[/bold]")
        console.print("\nTip: Try different keywords or browse https://skills.sh/", style="dim")
        return

    console.print(f"Found {response.count or len(response.skills)} skills:\n")
    console.print("Install with: [bold]mhskills add <owner/repo@skill>[/bold]\n")
    for result in response.skills:
        console.print(f"[cyan]{result.package}[/cyan]", highlight=False, soft_wrap=True)
        console.print(
            f"  {result.name} ({result.installs} installs)", highlight=False, soft_wrap=True
        )
        console.print(f"  {result.page_url}\n", style="dim", highlight=False, soft_wrap=True)
