# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared HTTP fetch discipline for providers and the well-known path."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import httpx

from mhskills.core.constants import FETCH_TIMEOUT, USER_AGENT
from mhskills.core.exceptions import (
    FetchError,
    FetchTimeoutError,
    FrontmatterError,
    SkillValidationError,
)
from mhskills.models.skill import Frontmatter
from mhskills.parsers.frontmatter import parse_frontmatter

logger = logging.getLogger("mhskills.providers.http")


class HTTPClient(Protocol):
    """Anything that can send an ``httpx.Request``; ``httpx.AsyncClient`` qualifies."""

    async def send(self, request: httpx.Request) -> httpx.Response: ...


def default_http_client(user_agent: str = USER_AGENT) -> httpx.AsyncClient:
    """Build the client used when the caller does not inject one."""
    return httpx.AsyncClient(
        headers={"User-Agent": user_agent},
        follow_redirects=True,
    )


async def fetch_response(
    url: str,
    client: HTTPClient,
    *,
    timeout: float = FETCH_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> httpx.Response:
    """GET *url* within *timeout* seconds, returning the response whatever its status.

    Raises
    ------
    FetchTimeoutError
        If the request does not complete in time.
    FetchError
        If the request cannot be built or the transport fails.
    """
    try:
        request = httpx.Request("GET", url, headers={"User-Agent": user_agent})
    except (httpx.InvalidURL, ValueError) as exc:
        raise FetchError(f"failed to create request for {url}: {exc}", url=url) from exc

    try:
        async with asyncio.timeout(timeout):
            response = await client.send(request)
    except TimeoutError as exc:
        raise FetchTimeoutError(f"timed out after {timeout}s fetching {url}", url=url) from exc
    except httpx.TimeoutException as exc:
        raise FetchTimeoutError(f"timed out fetching {url}: {exc}", url=url) from exc
    except httpx.HTTPError as exc:
        raise FetchError(f"failed to fetch {url}: {exc}", url=url) from exc
    return response


async def fetch_text(
    url: str,
    client: HTTPClient,
    *,
    timeout: float = FETCH_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> str:
    """GET *url* and return its body; anything but HTTP 200 is a :class:`FetchError`."""
    response = await fetch_response(url, client, timeout=timeout, user_agent=user_agent)
    if response.status_code != 200:
        raise FetchError(
            f"failed to fetch {url}: HTTP {response.status_code} {response.reason_phrase}".rstrip(),
            url=url,
            status_code=response.status_code,
        )
    return response.text


def parse_skill_document(content: str, url: str) -> Frontmatter:
    """Parse the front matter of a fetched SKILL.md, naming *url* on failure."""
    try:
        fm, _ = parse_frontmatter(content)
    except FrontmatterError as exc:
        raise FrontmatterError(f"failed to parse front matter of {url}: {exc}") from exc
    return fm


def require_name_and_description(fm: Frontmatter, url: str) -> None:
    if not fm.name or not fm.description:
        raise SkillValidationError(
            f"SKILL.md at {url} is missing required name or description in front matter"
        )
