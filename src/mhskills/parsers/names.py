# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Derive filesystem-safe install names for skills."""

from __future__ import annotations

import re

from mhskills.core.constants import INSTALL_NAME_KEY
from mhskills.models.skill import Frontmatter

_DISALLOWED_RE = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUN_RE = re.compile(r"-{2,}")


def sanitize_name(name: str) -> str:
    """Make *name* safe for use as a directory name.

    Lower-cases, maps spaces and underscores to hyphens, drops everything
    outside ``[a-z0-9-]``, collapses hyphen runs and trims edge hyphens.
    The result always satisfies ``sanitize_name(x) == sanitize_name(sanitize_name(x))``.
    """
    name = name.lower().replace(" ", "-").replace("_", "-")
    name = _DISALLOWED_RE.sub("", name)
    name = _HYPHEN_RUN_RE.sub("-", name)
    return name.strip("-")


def extract_install_name(fm: Frontmatter, dir_name: str, fallback_name: str) -> str:
    """Pick the install directory name for a skill.

    Precedence: ``metadata.install-name``, then *dir_name*, then the header
    ``name``, then *fallback_name*.  A candidate that sanitizes to nothing
    (e.g. a ``/`` directory hint) is skipped.
    """
    candidates: list[str] = []

    install_name = fm.metadata.get(INSTALL_NAME_KEY)
    if isinstance(install_name, str) and install_name:
        candidates.append(install_name)
    if dir_name:
        candidates.append(dir_name)
    if fm.name:
        candidates.append(fm.name)

    for candidate in candidates:
        sanitized = sanitize_name(candidate)
        if sanitized:
            return sanitized
    return sanitize_name(fallback_name)
