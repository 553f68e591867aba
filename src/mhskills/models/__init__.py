# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Domain models for mhskills."""

from mhskills.models.skill import Frontmatter, LocalSkillDir, RemoteSkill, WellKnownSkill
from mhskills.models.source import InstallResult, ParsedSource
from mhskills.models.wellknown import WellKnownIndex, WellKnownSkillEntry

__all__ = [
    "Frontmatter",
    "InstallResult",
    "LocalSkillDir",
    "ParsedSource",
    "RemoteSkill",
    "WellKnownIndex",
    "WellKnownSkill",
    "WellKnownSkillEntry",
]
