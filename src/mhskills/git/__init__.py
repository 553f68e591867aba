# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Git-hosted skill sources."""

from mhskills.git.client import GitClient, SubprocessGitClient
from mhskills.git.fetch import (
    GitSource,
    cache_key,
    clone_or_update,
    fetch_git_skill,
    find_skill_dir,
    get_cache_dir,
)

__all__ = [
    "GitClient",
    "GitSource",
    "SubprocessGitClient",
    "cache_key",
    "clone_or_update",
    "fetch_git_skill",
    "find_skill_dir",
    "get_cache_dir",
]
