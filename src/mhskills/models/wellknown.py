# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Pydantic models for the ``/.well-known/skills/index.json`` manifest.

These models only check the JSON *shape*.  Every value is still untrusted
after parsing; see :func:`mhskills.wellknown.validate_wellknown_index`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class WellKnownSkillEntry(BaseModel):
    """Single skill listed in a well-known index."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""
    files: list[str] = Field(default_factory=list)


class WellKnownIndex(BaseModel):
    """Top-level well-known skills index."""

    model_config = ConfigDict(frozen=True)

    skills: list[WellKnownSkillEntry] = Field(default_factory=list)
