# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Skill document and fetched-skill models."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mhskills.models.wellknown import WellKnownSkillEntry


class Frontmatter(BaseModel):
    """Parsed header of a SKILL.md file.

    Only ``name``, ``description`` and ``metadata`` are recognised; any other
    top-level key is ignored.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class RemoteSkill(BaseModel):
    """A fetched and validated skill, ready for installation."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    content: str
    install_name: str
    source_url: str
    files: dict[str, str] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)


class WellKnownSkill(RemoteSkill):
    """A skill fetched from a well-known endpoint, with its index entry."""

    index_entry: WellKnownSkillEntry


class LocalSkillDir(BaseModel):
    """A skill directory on disk (git cache checkout or local path)."""

    model_config = ConfigDict(frozen=True)

    path: Path
    skill_name: str
