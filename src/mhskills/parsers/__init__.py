# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SKILL.md front-matter and install-name utilities."""

from mhskills.parsers.frontmatter import parse_frontmatter, read_skill_frontmatter
from mhskills.parsers.names import extract_install_name, sanitize_name

__all__ = [
    "extract_install_name",
    "parse_frontmatter",
    "read_skill_frontmatter",
    "sanitize_name",
]
