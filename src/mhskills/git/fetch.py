# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Fetch skills from git repositories through a local clone cache.

Each ``(url, ref)`` pair owns one cache directory under
``<cache-root>/mcphub/skills/``.  The first resolution clones it; later
resolutions refresh it in place.  Two concurrent resolutions of the same
pair are not serialized here and will race on that directory; callers that
need single-flight behaviour must add their own locking.
"""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from mhskills.core.constants import CACHE_NAMESPACE, is_skill_filename
from mhskills.core.exceptions import GitError, SkillNotFoundError, SourceError
from mhskills.git.client import GitClient
from mhskills.models.skill import LocalSkillDir
from mhskills.models.source import ParsedSource

logger = logging.getLogger("mhskills.git.fetch")


@dataclass(frozen=True)
class GitSource:
    """What the git path needs from a classified source."""

    url: str
    ref: str | None = None
    subpath: str | None = None
    skill_filter: str | None = None

    @classmethod
    def from_parsed(cls, parsed: ParsedSource, skill_filter: str | None = None) -> GitSource:
        if not parsed.is_git:
            raise SourceError(f"{parsed.kind.value} source is not a git repository: {parsed.url}")
        return cls(
            url=parsed.url,
            ref=parsed.ref,
            subpath=parsed.subpath,
            skill_filter=skill_filter or parsed.skill_filter,
        )


def default_cache_root() -> Path:
    """``$XDG_CACHE_HOME``, else ``~/.cache``, else the temp directory."""
    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg)
    try:
        return Path.home() / ".cache"
    except RuntimeError:
        return Path(tempfile.gettempdir())


def cache_key(url: str, ref: str | None = None) -> str:
    """Hex digest (16 chars) identifying ``url[@ref]``."""
    key = f"{url}@{ref}" if ref else url
    return hashlib.sha256(key.encode("utf-8")).digest()[:8].hex()


def _repo_name(url: str) -> str:
    name = url.rstrip("/").rsplit("/", 1)[-1]
    # scp-style remotes without a slash: git@host:repo.git
    name = name.rsplit(":", 1)[-1]
    return name[:-4] if name.endswith(".git") else name


def get_cache_dir(url: str, ref: str | None = None, cache_root: Path | None = None) -> Path:
    """Cache directory for a repository URL and optional ref."""
    root = cache_root if cache_root is not None else default_cache_root()
    return root.joinpath(*CACHE_NAMESPACE, f"{_repo_name(url)}-{cache_key(url, ref)}")


async def _clone(git: GitClient, url: str, ref: str | None, cache_dir: Path) -> None:
    try:
        cache_dir.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise GitError(f"failed to create cache directory {cache_dir.parent}: {exc}") from exc
    await git.clone(url, cache_dir, ref=ref, depth=1)


async def clone_or_update(git: GitClient, url: str, ref: str | None, cache_dir: Path) -> None:
    """Clone into *cache_dir*, or refresh an existing clone on a best-effort basis."""
    if not (cache_dir / ".git").exists():
        if cache_dir.exists():
            # Leftover from an interrupted clone; git refuses non-empty targets
            shutil.rmtree(cache_dir)
        await _clone(git, url, ref, cache_dir)
        return

    if not await git.is_repository(cache_dir):
        logger.warning("Cached clone at %s is corrupted; re-cloning", cache_dir)
        shutil.rmtree(cache_dir, ignore_errors=True)
        await _clone(git, url, ref, cache_dir)
        return

    try:
        await git.pull(cache_dir, force=True)
    except GitError as exc:
        logger.warning("Failed to update cached clone %s, using existing version: %s", cache_dir, exc)


def _within(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True


def find_skill_dir(search_dir: Path, skill_filter: str | None = None) -> Path:
    """Return the first directory under *search_dir* holding a SKILL.md.

    Directories are visited top-down with entries sorted by name, a
    directory's own files before its subdirectories, and ``.git`` pruned.
    With *skill_filter*, only a directory whose name equals the filter
    (case-insensitively) is accepted.

    Raises
    ------
    SkillNotFoundError
        If no matching directory exists.
    """
    if not search_dir.is_dir():
        raise SkillNotFoundError(f"path not found in repository: {search_dir}")

    wanted = skill_filter.lower() if skill_filter else None
    for dirpath, dirnames, filenames in os.walk(search_dir):
        dirnames[:] = sorted(d for d in dirnames if d != ".git")
        if not any(is_skill_filename(f) for f in filenames):
            continue
        current = Path(dirpath)
        if wanted is None or current.name.lower() == wanted:
            return current

    if skill_filter:
        raise SkillNotFoundError(
            f"skill {skill_filter!r} not found in repository (expected {skill_filter}/SKILL.md)"
        )
    raise SkillNotFoundError("no SKILL.md found in repository")


async def fetch_git_skill(
    source: GitSource,
    git: GitClient,
    *,
    cache_root: Path | None = None,
) -> LocalSkillDir:
    """Clone or refresh the repository for *source* and locate its skill directory."""
    cache_dir = get_cache_dir(source.url, source.ref, cache_root)
    await clone_or_update(git, source.url, source.ref, cache_dir)

    search_dir = cache_dir
    if source.subpath:
        search_dir = cache_dir / source.subpath.strip("/")
        if not _within(search_dir, cache_dir):
            raise SourceError(f"subpath escapes the repository: {source.subpath}")

    skill_dir = find_skill_dir(search_dir, source.skill_filter)
    logger.debug("Found skill directory %s", skill_dir)
    return LocalSkillDir(path=skill_dir, skill_name=skill_dir.name)
