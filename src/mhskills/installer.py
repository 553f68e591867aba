# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Copy skills into their install location.

Installation replaces whatever is at the target.  ``.git`` directories and
symlinks are never copied.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path, PurePosixPath

import aiofiles

from mhskills.core.constants import SKILL_FILENAME, is_skill_filename
from mhskills.core.exceptions import InstallError
from mhskills.models.skill import RemoteSkill

logger = logging.getLogger("mhskills.installer")


def copy_dir(src: Path, dst: Path) -> None:
    """Recursively copy *src* to *dst*, skipping ``.git`` and symlinks.

    Permission bits of files and directories are preserved.
    """
    dst.mkdir(parents=True, exist_ok=True)
    shutil.copymode(src, dst)
    for entry in sorted(src.iterdir()):
        if entry.is_symlink():
            logger.debug("Skipping symlink %s", entry)
            continue
        target = dst / entry.name
        if entry.is_dir():
            if entry.name == ".git":
                continue
            copy_dir(entry, target)
        elif entry.is_file():
            shutil.copyfile(entry, target)
            shutil.copymode(entry, target)


def _remove(path: Path) -> None:
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)


def install_skill(skill_dir: Path, target_dir: Path) -> None:
    """Replace *target_dir* with a copy of *skill_dir*.

    Raises
    ------
    InstallError
        If the existing target cannot be removed or the copy fails.
    """
    try:
        _remove(target_dir)
    except OSError as exc:
        raise InstallError(f"failed to remove existing skill at {target_dir}: {exc}") from exc

    try:
        target_dir.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise InstallError(f"failed to create skills directory {target_dir.parent}: {exc}") from exc

    try:
        copy_dir(skill_dir, target_dir)
    except OSError as exc:
        raise InstallError(f"failed to copy skill {skill_dir} to {target_dir}: {exc}") from exc
    logger.info("Installed skill %s to %s", skill_dir.name, target_dir)


def normalize_relative_path(path: str) -> PurePosixPath | None:
    """Return *path* as a relative POSIX path inside its root, or ``None`` if unsafe.

    Empty paths, absolute or backslash-leading paths, any backslash, any
    ``..`` and paths that name the root itself are all unsafe.
    """
    if not path or path.startswith(("/", "\\")) or "\\" in path or ".." in path:
        return None
    rel = PurePosixPath(path)
    if rel.is_absolute() or not rel.parts:
        return None
    return rel


def is_unsafe_path(path: str) -> bool:
    return normalize_relative_path(path) is None


def _check_relative_path(path: str) -> PurePosixPath:
    rel = normalize_relative_path(path)
    if rel is None:
        raise InstallError(f"refusing to write unsafe path: {path!r}")
    return rel


async def _write_file(root: Path, rel: PurePosixPath, body: str) -> None:
    dest = root.joinpath(*rel.parts)
    dest.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(dest, "w", encoding="utf-8") as fh:
        await fh.write(body)


async def install_remote_skill(skill: RemoteSkill, target_dir: Path) -> None:
    """Write a fetched skill to disk and install it at *target_dir*.

    The document and every auxiliary file are written to a staging directory
    next to the target first, so a failed write leaves the existing install
    untouched.
    """
    checked = {path: _check_relative_path(path) for path in skill.files}
    # The primary document is always written from skill.content
    files = {
        path: body for path, body in skill.files.items() if not is_skill_filename(str(checked[path]))
    }

    try:
        target_dir.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=".mhskills-", dir=target_dir.parent))
        staging.chmod(0o755)
    except OSError as exc:
        raise InstallError(f"failed to create staging directory in {target_dir.parent}: {exc}") from exc

    try:
        try:
            await _write_file(staging, PurePosixPath(SKILL_FILENAME), skill.content)
            for path, body in files.items():
                await _write_file(staging, checked[path], body)
        except OSError as exc:
            raise InstallError(f"failed to write skill {skill.install_name}: {exc}") from exc
        install_skill(staging, target_dir)
    finally:
        shutil.rmtree(staging, ignore_errors=True)
