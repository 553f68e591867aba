# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Provider for skills published by Mintlify-hosted documentation sites.

Mintlify URLs look exactly like direct SKILL.md links, so :meth:`match`
accepts the same shapes as :class:`~mhskills.providers.direct.DirectProvider`
and the real decision happens after the fetch: only documents declaring
``metadata.mintlify-proj`` are Mintlify skills.
"""

from __future__ import annotations

from mhskills.core.constants import MINTLIFY_SITE_KEY
from mhskills.core.exceptions import ProviderMismatchError
from mhskills.models.skill import RemoteSkill
from mhskills.parsers.names import sanitize_name
from mhskills.providers.base import HostProvider, ProviderMatch
from mhskills.providers.direct import is_skill_url, on_excluded_host
from mhskills.providers.http import parse_skill_document, require_name_and_description


class MintlifyProvider(HostProvider):
    id = "mintlify"
    display_name = "Mintlify"

    def match(self, url: str) -> ProviderMatch:
        if not is_skill_url(url) or on_excluded_host(url):
            return ProviderMatch(matches=False)
        return ProviderMatch(matches=True, source_identifier=self.get_source_identifier(url))

    def build_skill(self, url: str, content: str) -> RemoteSkill:
        fm = parse_skill_document(content, url)

        site = fm.metadata.get(MINTLIFY_SITE_KEY)
        if not isinstance(site, str) or not site:
            raise ProviderMismatchError(
                f"{url} is not a Mintlify skill (missing metadata.{MINTLIFY_SITE_KEY})"
            )
        require_name_and_description(fm, url)

        install_name = sanitize_name(site)
        if not install_name:
            raise ProviderMismatchError(
                f"{url} declares an unusable metadata.{MINTLIFY_SITE_KEY}: {site!r}"
            )

        return RemoteSkill(
            name=fm.name,
            description=fm.description,
            content=content,
            install_name=install_name,
            source_url=url,
            metadata=fm.metadata,
        )

    def get_source_identifier(self, url: str) -> str:
        return "mintlify/com"
