# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Provider for plain HTTP(S) links to a SKILL.md file."""

from __future__ import annotations

import posixpath
from urllib.parse import urlparse

from mhskills.models.skill import RemoteSkill
from mhskills.parsers.names import extract_install_name
from mhskills.providers.base import HostProvider, ProviderMatch
from mhskills.providers.http import parse_skill_document, require_name_and_description
from mhskills.sources.classifier import host_identifier

# Hosts with dedicated handling elsewhere (git path or their own provider)
EXCLUDED_HOST_FRAGMENTS = ("github.com", "gitlab.com", "huggingface.co")


def is_skill_url(url: str) -> bool:
    lower = url.lower()
    return lower.startswith(("http://", "https://")) and lower.endswith("/skill.md")


def on_excluded_host(url: str) -> bool:
    return any(fragment in url for fragment in EXCLUDED_HOST_FRAGMENTS)


def dir_from_url(url: str) -> str:
    """Name of the directory holding the file in *url*'s path (``/`` at the root)."""
    try:
        path = urlparse(url).path
    except ValueError:
        return ""
    return posixpath.basename(posixpath.dirname(path)) or "/"


class DirectProvider(HostProvider):
    """Fetches a SKILL.md from any non git-hosting HTTP(S) URL."""

    id = "direct"
    display_name = "Direct URL"

    def match(self, url: str) -> ProviderMatch:
        if not is_skill_url(url) or on_excluded_host(url):
            return ProviderMatch(matches=False)
        return ProviderMatch(matches=True, source_identifier=self.get_source_identifier(url))

    def build_skill(self, url: str, content: str) -> RemoteSkill:
        fm = parse_skill_document(content, url)
        require_name_and_description(fm, url)

        return RemoteSkill(
            name=fm.name,
            description=fm.description,
            content=content,
            install_name=extract_install_name(fm, dir_from_url(url), fm.name),
            source_url=url,
            metadata=fm.metadata,
        )

    def get_source_identifier(self, url: str) -> str:
        return host_identifier(url, "direct/unknown")
