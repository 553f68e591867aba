# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Provider for SKILL.md files hosted in HuggingFace Spaces."""

from __future__ import annotations

import re

from mhskills.core.constants import INSTALL_NAME_KEY
from mhskills.models.skill import Frontmatter, RemoteSkill
from mhskills.parsers.names import extract_install_name
from mhskills.providers.base import HostProvider, ProviderMatch
from mhskills.providers.http import parse_skill_document, require_name_and_description

_SPACES_RE = re.compile(r"huggingface\.co/spaces/([^/]+)/([^/]+)")


class HuggingFaceProvider(HostProvider):
    """Matches ``https://huggingface.co/spaces/<owner>/<space>/.../SKILL.md``."""

    id = "huggingface"
    display_name = "HuggingFace"

    def match(self, url: str) -> ProviderMatch:
        if "huggingface.co" not in url:
            return ProviderMatch(matches=False)
        if not url.lower().endswith("/skill.md"):
            return ProviderMatch(matches=False)
        if "/spaces/" not in url:
            return ProviderMatch(matches=False)
        return ProviderMatch(matches=True, source_identifier=self.get_source_identifier(url))

    def build_skill(self, url: str, content: str) -> RemoteSkill:
        fm = parse_skill_document(content, url)
        require_name_and_description(fm, url)

        install_name = fm.metadata.get(INSTALL_NAME_KEY)
        if not isinstance(install_name, str) or not install_name:
            install_name = self._space_name(url) or fm.name

        return RemoteSkill(
            name=fm.name,
            description=fm.description,
            content=content,
            install_name=extract_install_name(Frontmatter(), install_name, fm.name),
            source_url=url,
            metadata=fm.metadata,
        )

    def to_raw_url(self, url: str) -> str:
        return url.replace("/blob/", "/raw/", 1)

    def get_source_identifier(self, url: str) -> str:
        m = _SPACES_RE.search(url)
        if m is None:
            return "huggingface/unknown"
        return f"huggingface/{m.group(1)}/{m.group(2)}"

    @staticmethod
    def _space_name(url: str) -> str:
        m = _SPACES_RE.search(url)
        return m.group(2) if m else ""
