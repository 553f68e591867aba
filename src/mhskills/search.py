# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Async client for the skills.sh search API."""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, Field

from mhskills.core.constants import FETCH_TIMEOUT, USER_AGENT
from mhskills.core.exceptions import FetchError, FetchTimeoutError, SourceError

logger = logging.getLogger("mhskills.search")

SEARCH_URL = "https://skills.sh/api/search"
DEFAULT_LIMIT = 10


class SkillSearchResult(BaseModel):
    """One hit from the search endpoint."""

    id: str
    name: str = ""
    installs: int = 0
    top_source: str = Field(default="", alias="topSource")

    model_config = {"populate_by_name": True}

    @property
    def package(self) -> str:
        """``<owner/repo>@<skill>`` form accepted by ``mhskills add``."""
        return f"{self.top_source}@{self.id}"

    @property
    def page_url(self) -> str:
        return f"https://skills.sh/{self.top_source}/{self.id}"


class SearchResponse(BaseModel):
    query: str = ""
    search_type: str = Field(default="", alias="searchType")
    skills: list[SkillSearchResult] = Field(default_factory=list)
    count: int = 0

    model_config = {"populate_by_name": True}


def _check_response(resp: httpx.Response, url: str) -> None:
    """Raise :class:`FetchError` for non-2xx responses."""
    if resp.is_success:
        return
    raise FetchError(
        f"skills.sh API returned HTTP {resp.status_code} {resp.reason_phrase}".rstrip(),
        url=url,
        status_code=resp.status_code,
    )


class SkillsShClient:
    """Search the public skills.sh directory.

    Parameters
    ----------
    base_url:
        Search endpoint (useful for testing).
    timeout:
        HTTP timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = SEARCH_URL,
        timeout: float = FETCH_TIMEOUT,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"User-Agent": self.user_agent},
        )

    async def search_response(self, query: str, limit: int = DEFAULT_LIMIT) -> SearchResponse:
        query = query.strip()
        if not query:
            raise SourceError("query is required")

        params: dict[str, str | int] = {"q": query, "limit": limit}
        try:
            async with self._client() as client:
                resp = await client.get(self.base_url, params=params)
        except httpx.TimeoutException as exc:
            raise FetchTimeoutError(f"skills search timed out: {exc}", url=self.base_url) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"failed to search skills: {exc}", url=self.base_url) from exc

        _check_response(resp, self.base_url)
        try:
            return SearchResponse.model_validate(resp.json())
        except ValueError as exc:
            raise FetchError(f"failed to parse search response: {exc}", url=self.base_url) from exc

    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[SkillSearchResult]:
        """Return the skills matching *query*, best first."""
        response = await self.search_response(query, limit=limit)
        logger.debug("Search %r returned %d skills", query, len(response.skills))
        return response.skills
