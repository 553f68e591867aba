# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Resolve a source string to a skill and install it.

:class:`SkillResolver` ties the classifier to the fetch paths:

* ``local`` sources are read in place;
* ``github``/``gitlab``/``git`` sources go through the clone cache;
* ``direct-url`` sources go through the provider registry;
* ``well-known`` sources go through index discovery.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from mhskills.core.config import Settings, get_settings
from mhskills.core.constants import SourceKind, is_skill_filename
from mhskills.core.exceptions import InstallError, ProviderMismatchError, SourceError
from mhskills.git.client import GitClient, SubprocessGitClient
from mhskills.git.fetch import GitSource, fetch_git_skill, find_skill_dir
from mhskills.installer import install_remote_skill, install_skill
from mhskills.models.skill import LocalSkillDir, RemoteSkill
from mhskills.models.source import InstallResult, ParsedSource
from mhskills.parsers.frontmatter import read_skill_frontmatter
from mhskills.parsers.names import extract_install_name, sanitize_name
from mhskills.providers import ProviderRegistry, build_default_registry
from mhskills.providers.http import HTTPClient, default_http_client, fetch_text
from mhskills.sources.classifier import parse_source, source_identifier
from mhskills.wellknown import (
    discover_wellknown_skills,
    fetch_wellknown_skill,
    get_wellknown_source_identifier,
    select_wellknown_entry,
)

logger = logging.getLogger("mhskills.resolver")


@dataclass(frozen=True)
class ResolvedSkill:
    """A skill located on disk (``local``) or fetched into memory (``remote``)."""

    source: ParsedSource
    install_name: str
    source_identifier: str
    local: LocalSkillDir | None = None
    remote: RemoteSkill | None = None
    provider_id: str | None = None


def _skill_file(skill_dir: Path) -> Path | None:
    for entry in sorted(skill_dir.iterdir()):
        if entry.is_file() and is_skill_filename(entry.name):
            return entry
    return None


async def _directory_install_name(skill_dir: Path) -> str:
    skill_file = _skill_file(skill_dir)
    if skill_file is None:
        raise SourceError(f"no SKILL.md in {skill_dir}")
    fm, _ = await read_skill_frontmatter(skill_file)
    return extract_install_name(fm, skill_dir.name, skill_dir.name)


class SkillResolver:
    """Resolve and install skills from any supported source.

    Parameters
    ----------
    settings:
        Configuration; defaults to :func:`get_settings`.
    registry:
        Providers for ``direct-url`` sources; defaults to
        :func:`build_default_registry`.
    http_client:
        Shared HTTP client.  When omitted the resolver creates one and closes
        it in :meth:`aclose`.
    git_client:
        Git implementation; defaults to :class:`SubprocessGitClient`.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        registry: ProviderRegistry | None = None,
        http_client: HTTPClient | None = None,
        git_client: GitClient | None = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        if registry is None:
            registry = build_default_registry(
                timeout=self.settings.http_timeout, user_agent=self.settings.user_agent
            )
        self.registry = registry
        self._owns_client = http_client is None
        if http_client is None:
            http_client = default_http_client(self.settings.user_agent)
        self.http_client = http_client
        if git_client is None:
            git_client = SubprocessGitClient(self.settings.git_executable)
        self.git_client = git_client

    async def aclose(self) -> None:
        if self._owns_client and isinstance(self.http_client, httpx.AsyncClient):
            await self.http_client.aclose()

    async def __aenter__(self) -> SkillResolver:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def resolve(self, source: str, skill_filter: str | None = None) -> ResolvedSkill:
        """Classify *source* and fetch the skill it names.

        *skill_filter* overrides an ``@skill`` suffix in the source.
        """
        parsed = parse_source(source)
        logger.debug("Classified %r as %s", source, parsed.kind)
        skill_filter = skill_filter or parsed.skill_filter

        if parsed.kind == SourceKind.LOCAL:
            return await self._resolve_local(parsed, skill_filter)
        if parsed.is_git:
            return await self._resolve_git(parsed, skill_filter)
        if parsed.kind == SourceKind.DIRECT_URL:
            return await self._resolve_direct(parsed)
        return await self._resolve_wellknown(parsed, skill_filter)

    async def _resolve_local(self, parsed: ParsedSource, skill_filter: str | None) -> ResolvedSkill:
        path = Path(parsed.local_path or parsed.url)
        if not path.exists():
            raise SourceError(f"local path does not exist: {path}")
        if path.is_file():
            if not is_skill_filename(path.name):
                raise SourceError(f"local file is not a SKILL.md: {path}")
            skill_dir = path.parent
        elif _skill_file(path) is not None and not skill_filter:
            skill_dir = path
        else:
            skill_dir = find_skill_dir(path, skill_filter)

        return ResolvedSkill(
            source=parsed,
            install_name=await _directory_install_name(skill_dir),
            source_identifier=source_identifier(parsed),
            local=LocalSkillDir(path=skill_dir, skill_name=skill_dir.name),
        )

    async def _resolve_git(self, parsed: ParsedSource, skill_filter: str | None) -> ResolvedSkill:
        local = await fetch_git_skill(
            GitSource.from_parsed(parsed, skill_filter),
            self.git_client,
            cache_root=self.settings.cache_dir,
        )
        return ResolvedSkill(
            source=parsed,
            install_name=await _directory_install_name(local.path),
            source_identifier=source_identifier(parsed),
            local=local,
        )

    async def _resolve_direct(self, parsed: ParsedSource) -> ResolvedSkill:
        providers = self.registry.find_providers(parsed.url)
        if not providers:
            raise SourceError(f"no provider matches {parsed.url}")

        # Providers sharing a raw URL share one download
        documents: dict[str, str] = {}
        mismatch: ProviderMismatchError | None = None
        for provider in providers:
            raw_url = provider.to_raw_url(parsed.url)
            if raw_url not in documents:
                documents[raw_url] = await fetch_text(
                    raw_url,
                    self.http_client,
                    timeout=provider.timeout,
                    user_agent=provider.user_agent,
                )
            try:
                skill = provider.build_skill(parsed.url, documents[raw_url])
            except ProviderMismatchError as exc:
                logger.debug("Provider %s declined %s: %s", provider.id, parsed.url, exc)
                mismatch = exc
                continue
            return ResolvedSkill(
                source=parsed,
                install_name=skill.install_name,
                source_identifier=provider.get_source_identifier(parsed.url),
                remote=skill,
                provider_id=provider.id,
            )
        if mismatch is None:
            raise SourceError(f"no provider accepted {parsed.url}")
        raise mismatch

    async def _resolve_wellknown(
        self, parsed: ParsedSource, skill_filter: str | None
    ) -> ResolvedSkill:
        timeout = self.settings.http_timeout
        user_agent = self.settings.user_agent
        index, base_url = await discover_wellknown_skills(
            parsed.url, self.http_client, timeout=timeout, user_agent=user_agent
        )
        entry = select_wellknown_entry(index, skill_filter)
        skill = await fetch_wellknown_skill(
            base_url, entry, self.http_client, timeout=timeout, user_agent=user_agent
        )
        return ResolvedSkill(
            source=parsed,
            install_name=skill.install_name,
            source_identifier=get_wellknown_source_identifier(parsed.url),
            remote=skill,
        )

    # ------------------------------------------------------------------
    # Installation
    # ------------------------------------------------------------------

    async def add(
        self,
        source: str,
        target_root: Path | None = None,
        skill_filter: str | None = None,
    ) -> InstallResult:
        """Resolve *source* and install it under *target_root*.

        The skill lands in ``<target_root>/<install-name>``, replacing any
        previous install of the same name.
        """
        resolved = await self.resolve(source, skill_filter)
        root = target_root if target_root is not None else self.settings.install_dir
        if not resolved.install_name:
            raise InstallError(f"could not derive an install name for {source}")
        if sanitize_name(resolved.install_name) != resolved.install_name:
            raise InstallError(f"refusing unsafe install name {resolved.install_name!r}")
        root = root.resolve()
        target_dir = root / resolved.install_name
        if target_dir.parent != root:
            raise InstallError(f"install target {target_dir} is not inside {root}")

        if resolved.local is not None:
            src = resolved.local.path.resolve()
            if src == target_dir:
                raise InstallError(f"skill is already installed at {target_dir}")
            if target_dir.is_relative_to(src) or src.is_relative_to(target_dir):
                raise InstallError(f"install target {target_dir} overlaps skill source {src}")
            await asyncio.to_thread(install_skill, resolved.local.path, target_dir)
        elif resolved.remote is not None:
            await install_remote_skill(resolved.remote, target_dir)
        else:
            raise InstallError(f"nothing to install for {source}")

        return InstallResult(
            source=resolved.source,
            install_name=resolved.install_name,
            target_dir=target_dir,
            source_identifier=resolved.source_identifier,
            provider_id=resolved.provider_id,
        )
