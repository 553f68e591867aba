# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract interface for HTTP-hosted skill providers.

Git-hosted sources (GitHub, GitLab, generic git) do not go through
providers; they use :func:`mhskills.git.fetch_git_skill`.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from mhskills.core.constants import FETCH_TIMEOUT, USER_AGENT
from mhskills.providers.http import HTTPClient, fetch_text

if TYPE_CHECKING:
    from mhskills.models.skill import RemoteSkill


@dataclass(frozen=True)
class ProviderMatch:
    """Result of asking a provider whether it recognises a URL."""

    matches: bool
    source_identifier: str = ""


class HostProvider(abc.ABC):
    """Base class for a provider that recognises and fetches one class of skill URL.

    Subclasses set :attr:`id` and :attr:`display_name` and implement
    :meth:`match`, :meth:`build_skill` and :meth:`get_source_identifier`.
    :meth:`fetch_skill` downloads :meth:`to_raw_url` and hands the body to
    :meth:`build_skill`, so one download can be offered to several providers.

    Args:
        timeout: Per-fetch time budget in seconds.
        user_agent: ``User-Agent`` header sent with every request.
    """

    id: ClassVar[str] = ""
    display_name: ClassVar[str] = ""

    def __init__(self, *, timeout: float = FETCH_TIMEOUT, user_agent: str = USER_AGENT) -> None:
        self.timeout = timeout
        self.user_agent = user_agent

    @abc.abstractmethod
    def match(self, url: str) -> ProviderMatch:
        """Report whether *url* belongs to this provider.  Must not perform I/O."""

    @abc.abstractmethod
    def build_skill(self, url: str, content: str) -> RemoteSkill:
        """Parse and validate *content* downloaded for *url*.

        Raises :class:`~mhskills.core.exceptions.ProviderMismatchError` when the
        document turns out not to belong to this provider.
        """

    async def fetch_skill(self, url: str, client: HTTPClient) -> RemoteSkill:
        """Fetch, parse and validate the skill at *url*."""
        content = await fetch_text(
            self.to_raw_url(url), client, timeout=self.timeout, user_agent=self.user_agent
        )
        return self.build_skill(url, content)

    def to_raw_url(self, url: str) -> str:
        """Convert a user-facing URL to its raw-content form."""
        return url

    @abc.abstractmethod
    def get_source_identifier(self, url: str) -> str:
        """Return a stable provenance tag for *url*."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"
