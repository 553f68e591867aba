# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations and fixed protocol constants."""

from enum import StrEnum


class SourceKind(StrEnum):
    GITHUB = "github"
    GITLAB = "gitlab"
    GIT = "git"
    LOCAL = "local"
    DIRECT_URL = "direct-url"
    WELL_KNOWN = "well-known"


GIT_KINDS = frozenset({SourceKind.GITHUB, SourceKind.GITLAB, SourceKind.GIT})

# Marker document; matched case-insensitively everywhere it is searched for
SKILL_FILENAME = "SKILL.md"

USER_AGENT = "mh-skills"
FETCH_TIMEOUT = 30.0

WELL_KNOWN_PATH = ".well-known/skills"
WELL_KNOWN_INDEX_FILE = "index.json"

# Hosts that never serve a well-known skills index
WELL_KNOWN_EXCLUDED_HOSTS = frozenset(
    {
        "github.com",
        "gitlab.com",
        "huggingface.co",
        "raw.githubusercontent.com",
    }
)

# Directory (under the cache root) holding cached git clones
CACHE_NAMESPACE = ("mcphub", "skills")

# Front-matter metadata keys with meaning to mhskills
INSTALL_NAME_KEY = "install-name"
MINTLIFY_SITE_KEY = "mintlify-proj"


def is_skill_filename(name: str) -> bool:
    return name.lower() == SKILL_FILENAME.lower()
