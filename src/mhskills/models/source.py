# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Parsed source and install result models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from mhskills.core.constants import GIT_KINDS, SourceKind


class ParsedSource(BaseModel):
    """Structured form of a user-supplied skill source string."""

    model_config = ConfigDict(frozen=True)

    kind: SourceKind
    url: str
    local_path: str | None = None
    ref: str | None = None
    subpath: str | None = None
    skill_filter: str | None = None

    @property
    def is_git(self) -> bool:
        return self.kind in GIT_KINDS


class InstallResult(BaseModel):
    """Outcome of a successful ``add``."""

    model_config = ConfigDict(frozen=True)

    source: ParsedSource
    install_name: str
    target_dir: Path
    source_identifier: str
    provider_id: str | None = None
