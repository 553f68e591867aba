# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Classify a raw skill source string into a :class:`ParsedSource`.

Recognizers overlap (a GitLab tree URL is also an HTTP URL; a GitHub blob
URL is also a GitHub repo URL), so they run in a fixed order and the first
one that returns a result wins.  The order lives in :data:`RECOGNIZERS`.

Supported shapes, in precedence order:

1.  Local paths: ``/abs``, ``./rel``, ``../rel``, ``.``, ``..``, ``C:\\x``
2.  Direct ``.../SKILL.md`` URLs (incl. GitHub blob/raw and GitLab raw)
3.  ``https://github.com/o/r/tree/<ref>/<path>``
4.  ``https://github.com/o/r/tree/<ref>``
5.  ``https://github.com/o/r``
6.  ``https://<host>/<group>/<repo>/-/tree/<ref>/<path>``
7.  ``https://<host>/<group>/<repo>/-/tree/<ref>``
8.  ``https://gitlab.com/o/r``
9.  ``owner/repo@skill``
10. ``owner/repo[/path]``
11. Any other HTTP(S) URL not on a git host: well-known endpoint
12. Anything else: generic git remote
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from urllib.parse import urlparse

from mhskills.core.constants import WELL_KNOWN_EXCLUDED_HOSTS, SourceKind
from mhskills.core.exceptions import SourceError
from mhskills.models.source import ParsedSource

Recognizer = Callable[[str], ParsedSource | None]

_SKILL_SUFFIX = "/skill.md"

# ---------------------------------------------------------------------------
# Local paths
# ---------------------------------------------------------------------------

_DRIVE_RE = re.compile(r"^[A-Za-z]:[/\\]")


def _is_local_path(value: str) -> bool:
    if value.startswith(("/", "./", "../")):
        return True
    if value in {".", ".."}:
        return True
    return bool(_DRIVE_RE.match(value))


def _recognize_local(value: str) -> ParsedSource | None:
    if not _is_local_path(value):
        return None
    try:
        resolved = os.path.abspath(value)
    except (OSError, ValueError) as exc:
        raise SourceError(f"failed to resolve path {value!r}: {exc}") from exc
    return ParsedSource(kind=SourceKind.LOCAL, url=resolved, local_path=resolved)


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


def _is_http(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def _recognize_direct_url(value: str) -> ParsedSource | None:
    if not _is_http(value):
        return None
    if not value.lower().endswith(_SKILL_SUFFIX):
        return None

    # Git hosts only count when the URL points at one exact file
    if "github.com/" in value and "raw.githubusercontent.com" not in value:
        if "/blob/" not in value and "/raw/" not in value:
            return None
    if "gitlab.com/" in value and "/-/raw/" not in value:
        return None

    return ParsedSource(kind=SourceKind.DIRECT_URL, url=value)


# ---------------------------------------------------------------------------
# GitHub
# ---------------------------------------------------------------------------

_GITHUB_TREE_WITH_PATH_RE = re.compile(r"github\.com/([^/]+)/([^/]+)/tree/([^/]+)/(.+)")
_GITHUB_TREE_RE = re.compile(r"github\.com/([^/]+)/([^/]+)/tree/([^/]+)$")
_GITHUB_REPO_RE = re.compile(r"github\.com/([^/]+)/([^/]+)")


def _github_url(owner: str, repo: str) -> str:
    return f"https://github.com/{owner}/{repo}.git"


def _strip_git_suffix(value: str) -> str:
    return value[:-4] if value.endswith(".git") else value


def _recognize_github_tree_with_path(value: str) -> ParsedSource | None:
    m = _GITHUB_TREE_WITH_PATH_RE.search(value)
    if m is None:
        return None
    owner, repo, ref, subpath = m.groups()
    return ParsedSource(
        kind=SourceKind.GITHUB,
        url=_github_url(owner, repo),
        ref=ref,
        subpath=subpath,
    )


def _recognize_github_tree(value: str) -> ParsedSource | None:
    m = _GITHUB_TREE_RE.search(value)
    if m is None:
        return None
    owner, repo, ref = m.groups()
    return ParsedSource(kind=SourceKind.GITHUB, url=_github_url(owner, repo), ref=ref)


def _recognize_github_repo(value: str) -> ParsedSource | None:
    m = _GITHUB_REPO_RE.search(value)
    if m is None:
        return None
    owner, repo = m.groups()
    return ParsedSource(
        kind=SourceKind.GITHUB,
        url=_github_url(owner, _strip_git_suffix(repo)),
    )


# ---------------------------------------------------------------------------
# GitLab (gitlab.com and self-hosted instances using the /-/tree/ layout)
# ---------------------------------------------------------------------------

_GITLAB_TREE_WITH_PATH_RE = re.compile(r"^(https?)://([^/]+)/(.+?)/-/tree/([^/]+)/(.+)")
_GITLAB_TREE_RE = re.compile(r"^(https?)://([^/]+)/(.+?)/-/tree/([^/]+)$")
_GITLAB_REPO_RE = re.compile(r"gitlab\.com/([^/]+)/([^/]+)")


def _recognize_gitlab_tree_with_path(value: str) -> ParsedSource | None:
    m = _GITLAB_TREE_WITH_PATH_RE.match(value)
    if m is None:
        return None
    scheme, host, repo_path, ref, subpath = m.groups()
    if host == "github.com":
        return None
    return ParsedSource(
        kind=SourceKind.GITLAB,
        url=f"{scheme}://{host}/{_strip_git_suffix(repo_path)}.git",
        ref=ref,
        subpath=subpath,
    )


def _recognize_gitlab_tree(value: str) -> ParsedSource | None:
    m = _GITLAB_TREE_RE.match(value)
    if m is None:
        return None
    scheme, host, repo_path, ref = m.groups()
    if host == "github.com":
        return None
    return ParsedSource(
        kind=SourceKind.GITLAB,
        url=f"{scheme}://{host}/{_strip_git_suffix(repo_path)}.git",
        ref=ref,
    )


def _recognize_gitlab_repo(value: str) -> ParsedSource | None:
    m = _GITLAB_REPO_RE.search(value)
    if m is None:
        return None
    owner, repo = m.groups()
    return ParsedSource(
        kind=SourceKind.GITLAB,
        url=f"https://gitlab.com/{owner}/{_strip_git_suffix(repo)}.git",
    )


# ---------------------------------------------------------------------------
# GitHub shorthand
# ---------------------------------------------------------------------------

_SHORTHAND_WITH_SKILL_RE = re.compile(r"^([^/]+)/([^/@]+)@(.+)$")
_SHORTHAND_RE = re.compile(r"^([^/]+)/([^/]+)(?:/(.+))?$")


def _shorthand_allowed(value: str) -> bool:
    # ':' means a scheme or scp-style git URL
    return ":" not in value and not value.startswith((".", "/"))


def _recognize_shorthand_with_skill(value: str) -> ParsedSource | None:
    if not _shorthand_allowed(value):
        return None
    m = _SHORTHAND_WITH_SKILL_RE.match(value)
    if m is None:
        return None
    owner, repo, skill = m.groups()
    return ParsedSource(
        kind=SourceKind.GITHUB,
        url=_github_url(owner, repo),
        skill_filter=skill,
    )


def _recognize_shorthand(value: str) -> ParsedSource | None:
    if not _shorthand_allowed(value):
        return None
    m = _SHORTHAND_RE.match(value)
    if m is None:
        return None
    owner, repo, subpath = m.groups()
    return ParsedSource(
        kind=SourceKind.GITHUB,
        url=_github_url(owner, repo),
        subpath=subpath,
    )


# ---------------------------------------------------------------------------
# Well-known endpoints and generic git
# ---------------------------------------------------------------------------


def _recognize_well_known(value: str) -> ParsedSource | None:
    if not _is_http(value):
        return None
    try:
        host = urlparse(value).hostname or ""
    except ValueError:
        return None
    if host in WELL_KNOWN_EXCLUDED_HOSTS:
        return None
    if value.lower().endswith(_SKILL_SUFFIX):
        return None
    if value.endswith(".git"):
        return None
    return ParsedSource(kind=SourceKind.WELL_KNOWN, url=value)


def _recognize_generic_git(value: str) -> ParsedSource | None:
    return ParsedSource(kind=SourceKind.GIT, url=value)


RECOGNIZERS: tuple[tuple[str, Recognizer], ...] = (
    ("local", _recognize_local),
    ("direct-url", _recognize_direct_url),
    ("github-tree-with-path", _recognize_github_tree_with_path),
    ("github-tree", _recognize_github_tree),
    ("github-repo", _recognize_github_repo),
    ("gitlab-tree-with-path", _recognize_gitlab_tree_with_path),
    ("gitlab-tree", _recognize_gitlab_tree),
    ("gitlab-repo", _recognize_gitlab_repo),
    ("github-shorthand-with-skill", _recognize_shorthand_with_skill),
    ("github-shorthand", _recognize_shorthand),
    ("well-known", _recognize_well_known),
    ("git", _recognize_generic_git),
)


def parse_source(raw: str) -> ParsedSource:
    """Classify *raw* into a :class:`ParsedSource`.

    Raises
    ------
    SourceError
        If *raw* is blank or a local path cannot be resolved.
    """
    value = raw.strip()
    if not value:
        raise SourceError("empty source input")

    for _name, recognize in RECOGNIZERS:
        parsed = recognize(value)
        if parsed is not None:
            return parsed

    # The generic git recognizer accepts everything
    raise AssertionError("unreachable: no recognizer matched")


# ---------------------------------------------------------------------------
# Provenance tags
# ---------------------------------------------------------------------------


def host_identifier(url: str, unknown: str) -> str:
    """``docs.example.com`` -> ``example/com``; single-label hosts are returned as-is."""
    try:
        host = urlparse(url).hostname or ""
    except ValueError:
        return unknown
    if not host:
        return unknown
    parts = host.split(".")
    if len(parts) >= 2:
        return f"{parts[-2]}/{parts[-1]}"
    return host


def source_identifier(parsed: ParsedSource) -> str:
    """Return a stable provenance tag for *parsed*, independent of fetch success."""
    if parsed.kind is SourceKind.LOCAL:
        return "local"
    if parsed.kind in (SourceKind.GITHUB, SourceKind.GITLAB):
        path = urlparse(parsed.url).path.strip("/")
        return f"{parsed.kind.value}/{_strip_git_suffix(path)}"
    if parsed.kind is SourceKind.WELL_KNOWN:
        return host_identifier(parsed.url, "unknown/unknown")
    if parsed.kind is SourceKind.DIRECT_URL:
        return host_identifier(parsed.url, "direct/unknown")
    return parsed.url
