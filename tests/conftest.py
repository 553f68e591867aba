# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

import pytest

from mhskills.core.config import Settings
from mhskills.core.exceptions import GitError


def skill_document(name: str, description: str = "A test skill.", extra: str = "") -> str:
    """Render a minimal SKILL.md with optional extra header lines."""
    return f"---\nname: {name}\ndescription: {description}\n{extra}---\n\n# {name}\n\nBody.\n"


def write_skill(root: Path, rel_dir: str, name: str, **kwargs: str) -> Path:
    """Create ``root/rel_dir/SKILL.md`` and return the skill directory."""
    skill_dir = root / rel_dir if rel_dir else root
    skill_dir.mkdir(parents=True, exist_ok=True)
    (skill_dir / "SKILL.md").write_text(skill_document(name, **kwargs))
    return skill_dir


class FakeGitClient:
    """In-memory stand-in for :class:`mhskills.git.client.SubprocessGitClient`.

    ``clone`` copies the tree registered for a URL (plus an empty ``.git``).
    """

    def __init__(self) -> None:
        self.repos: dict[str, Path] = {}
        self.calls: list[tuple] = []
        self.valid = True
        self.pull_error: GitError | None = None
        self.clone_error: GitError | None = None

    def add_repo(self, url: str, tree: Path) -> None:
        self.repos[url] = tree

    async def clone(self, url, dest, *, ref=None, depth=1):
        self.calls.append(("clone", url, Path(dest), ref, depth))
        if self.clone_error is not None:
            raise self.clone_error
        if url not in self.repos:
            raise GitError(f"repository not found: {url}", returncode=128)
        shutil.copytree(self.repos[url], dest)
        (Path(dest) / ".git").mkdir(exist_ok=True)

    async def pull(self, repo_dir, *, force=True):
        self.calls.append(("pull", Path(repo_dir), force))
        if self.pull_error is not None:
            raise self.pull_error

    async def is_repository(self, repo_dir):
        self.calls.append(("is_repository", Path(repo_dir)))
        return self.valid

    def ops(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_git() -> FakeGitClient:
    return FakeGitClient()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment, caching under tmp_path."""
    return Settings(
        _env_file=None,
        cache_dir=tmp_path / "cache",
        install_dir=tmp_path / "installed",
        http_timeout=5.0,
    )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep MHSKILLS_* and XDG_CACHE_HOME from leaking into tests."""
    for key in list(os.environ):
        if key.startswith("MHSKILLS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))


@pytest.fixture
def make_skill():
    return write_skill


@pytest.fixture
def skill_doc():
    return skill_document


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers the CLI attaches so they never outlive a CliRunner stream."""
    yield
    logger = logging.getLogger("mhskills")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
