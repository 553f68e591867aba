# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for skill installation."""

from __future__ import annotations

import os
import stat

import pytest

from mhskills.core.exceptions import InstallError
from mhskills.installer import (
    copy_dir,
    install_remote_skill,
    install_skill,
    is_unsafe_path,
    normalize_relative_path,
)
from mhskills.models.skill import RemoteSkill

SKILL = "---\nname: x\ndescription: y\n---\nbody\n"


def _remote(**overrides) -> RemoteSkill:
    data = {
        "name": "x",
        "description": "y",
        "content": SKILL,
        "install_name": "x",
        "source_url": "https://example.com/x/SKILL.md",
    }
    data.update(overrides)
    return RemoteSkill(**data)


class TestCopyDir:
    def test_copies_tree(self, tmp_path, make_skill) -> None:
        src = make_skill(tmp_path, "src", "x")
        (src / "scripts").mkdir()
        (src / "scripts" / "run.sh").write_text("echo hi")
        copy_dir(src, tmp_path / "dst")
        assert (tmp_path / "dst" / "SKILL.md").read_text() == (src / "SKILL.md").read_text()
        assert (tmp_path / "dst" / "scripts" / "run.sh").read_text() == "echo hi"

    def test_skips_git(self, tmp_path, make_skill) -> None:
        src = make_skill(tmp_path, "src", "x")
        (src / ".git").mkdir()
        (src / ".git" / "HEAD").write_text("ref")
        copy_dir(src, tmp_path / "dst")
        assert not (tmp_path / "dst" / ".git").exists()

    def test_skips_symlinks(self, tmp_path, make_skill) -> None:
        secret = tmp_path / "secret.txt"
        secret.write_text("top secret")
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "data").write_text("outside data")
        src = make_skill(tmp_path, "src", "x")
        os.symlink(secret, src / "link.txt")
        os.symlink(outside, src / "linkdir")

        copy_dir(src, tmp_path / "dst")

        assert not (tmp_path / "dst" / "link.txt").exists()
        assert not (tmp_path / "dst" / "linkdir").exists()
        assert (tmp_path / "dst" / "SKILL.md").is_file()

    def test_preserves_mode(self, tmp_path, make_skill) -> None:
        src = make_skill(tmp_path, "src", "x")
        script = src / "run.sh"
        script.write_text("#!/bin/sh\n")
        script.chmod(0o755)
        copy_dir(src, tmp_path / "dst")
        mode = stat.S_IMODE((tmp_path / "dst" / "run.sh").stat().st_mode)
        assert mode == 0o755


class TestInstallSkill:
    def test_replaces_existing_target(self, tmp_path, make_skill) -> None:
        src = make_skill(tmp_path, "src", "x")
        target = tmp_path / "skills" / "x"
        target.mkdir(parents=True)
        (target / "extra.txt").write_text("stale")

        install_skill(src, target)

        assert not (target / "extra.txt").exists()
        assert (target / "SKILL.md").is_file()

    def test_replaces_file_target(self, tmp_path, make_skill) -> None:
        src = make_skill(tmp_path, "src", "x")
        target = tmp_path / "skills" / "x"
        target.parent.mkdir()
        target.write_text("i am a file")
        install_skill(src, target)
        assert (target / "SKILL.md").is_file()

    def test_creates_parents(self, tmp_path, make_skill) -> None:
        src = make_skill(tmp_path, "src", "x")
        target = tmp_path / "a" / "b" / "c"
        install_skill(src, target)
        assert (target / "SKILL.md").is_file()

    def test_missing_source(self, tmp_path) -> None:
        with pytest.raises(InstallError, match="failed to copy"):
            install_skill(tmp_path / "nope", tmp_path / "target")


class TestInstallRemoteSkill:
    @pytest.mark.asyncio
    async def test_writes_content_and_files(self, tmp_path) -> None:
        skill = _remote(files={"SKILL.md": SKILL, "ref/guide.md": "guide"})
        target = tmp_path / "skills" / "x"

        await install_remote_skill(skill, target)

        assert (target / "SKILL.md").read_text() == SKILL
        assert (target / "ref" / "guide.md").read_text() == "guide"
        assert [p.name for p in (tmp_path / "skills").iterdir()] == ["x"]

    @pytest.mark.asyncio
    async def test_replaces_existing(self, tmp_path) -> None:
        target = tmp_path / "skills" / "x"
        target.mkdir(parents=True)
        (target / "extra.txt").write_text("stale")
        await install_remote_skill(_remote(), target)
        assert not (target / "extra.txt").exists()
        assert (target / "SKILL.md").read_text() == SKILL

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "bad", ["../escape.md", "/abs.md", "\\win.md", "a/../../b", "a\\b", "", ".", "./"]
    )
    async def test_rejects_unsafe_paths(self, tmp_path, bad: str) -> None:
        target = tmp_path / "skills" / "x"
        with pytest.raises(InstallError, match="unsafe path"):
            await install_remote_skill(_remote(files={bad: "x"}), target)
        assert not target.exists()
        assert not (tmp_path / "escape.md").exists()

    @pytest.mark.asyncio
    async def test_alias_cannot_replace_document(self, tmp_path) -> None:
        skill = _remote(files={"SKILL.md": SKILL, "./SKILL.md": "forged", "./ref/a.md": "a"})
        target = tmp_path / "skills" / "x"
        await install_remote_skill(skill, target)
        assert (target / "SKILL.md").read_text() == SKILL
        assert (target / "ref" / "a.md").read_text() == "a"


class TestRelativePaths:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [("a.md", "a.md"), ("./ref/a.md", "ref/a.md"), ("ref//a.md", "ref/a.md")],
    )
    def test_normalized(self, path: str, expected: str) -> None:
        assert str(normalize_relative_path(path)) == expected

    @pytest.mark.parametrize("path", ["", ".", "/a", "\\a", "a\\b", "..", "a/../b", "x..y"])
    def test_unsafe(self, path: str) -> None:
        assert normalize_relative_path(path) is None
        assert is_unsafe_path(path)
