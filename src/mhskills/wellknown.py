# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Discover and fetch skills from ``/.well-known/skills/`` endpoints.

The index served by an endpoint is attacker-controlled.  It is parsed for
shape first, then validated as a whole: one bad entry rejects the entire
index.  Only a fully validated index is ever returned.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlparse

import pydantic

from mhskills.core.constants import (
    FETCH_TIMEOUT,
    SKILL_FILENAME,
    USER_AGENT,
    WELL_KNOWN_INDEX_FILE,
    WELL_KNOWN_PATH,
    is_skill_filename,
)
from mhskills.core.exceptions import (
    FetchError,
    SkillNotFoundError,
    WellKnownIndexError,
    WellKnownValidationError,
)
from mhskills.installer import is_unsafe_path, normalize_relative_path
from mhskills.models.skill import WellKnownSkill
from mhskills.models.wellknown import WellKnownIndex, WellKnownSkillEntry
from mhskills.parsers.names import sanitize_name
from mhskills.providers.http import (
    HTTPClient,
    fetch_response,
    fetch_text,
    parse_skill_document,
    require_name_and_description,
)
from mhskills.sources.classifier import host_identifier

logger = logging.getLogger("mhskills.wellknown")

MAX_SKILL_NAME_LENGTH = 64
_SKILL_NAME_RE = re.compile(r"^[a-z0-9]([a-z0-9-]{0,62}[a-z0-9])?$")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_skill_entry(entry: WellKnownSkillEntry) -> None:
    if not entry.name:
        raise WellKnownValidationError("skill entry missing name")
    if len(entry.name) > MAX_SKILL_NAME_LENGTH:
        raise WellKnownValidationError(f"skill name too long: {entry.name}")
    if len(entry.name) > 1 and not _SKILL_NAME_RE.match(entry.name):
        raise WellKnownValidationError(f"invalid skill name format: {entry.name}")
    if not entry.description:
        raise WellKnownValidationError(f"skill entry missing description: {entry.name}")
    if not entry.files:
        raise WellKnownValidationError(f"skill entry has no files: {entry.name}")

    has_skill_md = False
    for file_path in entry.files:
        if is_skill_filename(file_path):
            has_skill_md = True
        if is_unsafe_path(file_path):
            raise WellKnownValidationError(
                f"invalid file path in skill {entry.name}: {file_path}"
            )
    if not has_skill_md:
        raise WellKnownValidationError(f"skill {entry.name} missing {SKILL_FILENAME} in files list")


def validate_wellknown_index(index: WellKnownIndex) -> None:
    """Validate every entry of *index*; the first failure rejects the whole index.

    Raises
    ------
    WellKnownValidationError
        Naming the rule and entry that failed.
    """
    if not index.skills:
        raise WellKnownValidationError("index has no skills")
    for entry in index.skills:
        validate_skill_entry(entry)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def index_candidates(base_url: str) -> list[tuple[str, str]]:
    """Return ``(index_url, resolved_base)`` pairs to try, in order."""
    try:
        parsed = urlparse(base_url)
    except ValueError as exc:
        raise WellKnownIndexError(f"invalid URL {base_url!r}: {exc}") from exc
    if not parsed.scheme or not parsed.netloc:
        raise WellKnownIndexError(f"invalid URL {base_url!r}: missing scheme or host")

    origin = f"{parsed.scheme}://{parsed.netloc}"
    base_path = parsed.path.rstrip("/")
    candidates = [
        (f"{origin}{base_path}/{WELL_KNOWN_PATH}/{WELL_KNOWN_INDEX_FILE}", f"{origin}{base_path}")
    ]
    if base_path:
        candidates.append((f"{origin}/{WELL_KNOWN_PATH}/{WELL_KNOWN_INDEX_FILE}", origin))
    return candidates


def _parse_index(body: str) -> WellKnownIndex:
    return WellKnownIndex.model_validate_json(body)


async def discover_wellknown_skills(
    base_url: str,
    client: HTTPClient,
    *,
    timeout: float = FETCH_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> tuple[WellKnownIndex, str]:
    """Find and validate the skills index for *base_url*.

    Tries ``<base>/.well-known/skills/index.json`` and, when *base_url* has a
    path, the host-root equivalent.  Network failures, non-200 responses,
    malformed JSON and validation failures all move on to the next candidate.

    Returns
    -------
    tuple[WellKnownIndex, str]
        The validated index and the base URL it was found under.

    Raises
    ------
    WellKnownIndexError
        If no candidate yields a valid index.
    """
    for index_url, resolved_base in index_candidates(base_url):
        try:
            response = await fetch_response(
                index_url, client, timeout=timeout, user_agent=user_agent
            )
        except FetchError as exc:
            logger.debug("Well-known index fetch failed for %s: %s", index_url, exc)
            continue
        if response.status_code != 200:
            logger.debug("Well-known index %s returned HTTP %d", index_url, response.status_code)
            continue
        try:
            index = _parse_index(response.text)
        except (ValueError, RecursionError, pydantic.ValidationError) as exc:
            logger.debug("Well-known index %s is malformed: %s", index_url, exc)
            continue
        try:
            validate_wellknown_index(index)
        except WellKnownValidationError as exc:
            logger.debug("Rejected well-known index %s: %s", index_url, exc)
            continue
        return index, resolved_base

    raise WellKnownIndexError(f"no valid well-known skills index found at {base_url}")


def select_wellknown_entry(
    index: WellKnownIndex, skill_filter: str | None = None
) -> WellKnownSkillEntry:
    """Pick the entry to install from a validated *index*."""
    if skill_filter:
        wanted = skill_filter.lower()
        for entry in index.skills:
            if entry.name.lower() == wanted:
                return entry
        available = ", ".join(e.name for e in index.skills)
        raise SkillNotFoundError(
            f"skill {skill_filter!r} not found in well-known index (available: {available})"
        )
    if len(index.skills) == 1:
        return index.skills[0]
    available = ", ".join(e.name for e in index.skills)
    raise SkillNotFoundError(
        f"index lists {len(index.skills)} skills; choose one with --skill (available: {available})"
    )


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------


async def _fetch_optional_file(
    url: str, client: HTTPClient, *, timeout: float, user_agent: str
) -> str | None:
    """Fetch an auxiliary file; any failure yields ``None``."""
    try:
        return await fetch_text(url, client, timeout=timeout, user_agent=user_agent)
    except FetchError as exc:
        logger.debug("Skipping auxiliary file %s: %s", url, exc)
        return None


async def fetch_wellknown_skill(
    base_url: str,
    entry: WellKnownSkillEntry,
    client: HTTPClient,
    *,
    timeout: float = FETCH_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> WellKnownSkill:
    """Fetch the SKILL.md and declared files of *entry* from *base_url*.

    Only the SKILL.md fetch is fatal.  Auxiliary files that fail to download
    are left out of :attr:`WellKnownSkill.files`.
    """
    validate_skill_entry(entry)

    skill_base = f"{base_url.rstrip('/')}/{WELL_KNOWN_PATH}/{entry.name}"
    skill_md_url = f"{skill_base}/{SKILL_FILENAME}"

    content = await fetch_text(skill_md_url, client, timeout=timeout, user_agent=user_agent)
    fm = parse_skill_document(content, skill_md_url)
    require_name_and_description(fm, skill_md_url)

    files: dict[str, str] = {SKILL_FILENAME: content}
    for file_path in entry.files:
        rel = normalize_relative_path(file_path)
        if rel is None or is_skill_filename(str(rel)):
            continue
        body = await _fetch_optional_file(
            f"{skill_base}/{file_path}", client, timeout=timeout, user_agent=user_agent
        )
        if body is not None:
            files[file_path] = body

    return WellKnownSkill(
        name=fm.name,
        description=fm.description,
        content=content,
        install_name=sanitize_name(entry.name),
        source_url=skill_md_url,
        files=files,
        metadata=fm.metadata,
        index_entry=entry,
    )


def get_wellknown_source_identifier(url: str) -> str:
    return host_identifier(url, "unknown/unknown")
