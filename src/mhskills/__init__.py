# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""mhskills - Resolve, fetch and install agent skills (SKILL.md)."""

__version__ = "0.4.0"

from mhskills.installer import install_remote_skill, install_skill
from mhskills.parsers.frontmatter import parse_frontmatter
from mhskills.parsers.names import extract_install_name, sanitize_name
from mhskills.providers import ProviderRegistry, build_default_registry
from mhskills.resolver import SkillResolver
from mhskills.sources.classifier import parse_source

__all__ = [
    "ProviderRegistry",
    "SkillResolver",
    "__version__",
    "build_default_registry",
    "extract_install_name",
    "install_remote_skill",
    "install_skill",
    "parse_frontmatter",
    "parse_source",
    "sanitize_name",
]
