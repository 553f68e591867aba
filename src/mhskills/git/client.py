# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Git transport used by the git fetch path.

:class:`GitClient` is the capability the fetch path depends on; the default
:class:`SubprocessGitClient` drives the ``git`` executable.  Tests inject a
fake implementing the same three methods.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Protocol

from mhskills.core.exceptions import GitError

logger = logging.getLogger("mhskills.git.client")


class GitClient(Protocol):
    async def clone(self, url: str, dest: Path, *, ref: str | None = None, depth: int = 1) -> None:
        """Clone *url* into *dest* (shallow; single branch when *ref* is given)."""
        ...

    async def pull(self, repo_dir: Path, *, force: bool = True) -> None:
        """Update the checkout at *repo_dir* from its remote."""
        ...

    async def is_repository(self, repo_dir: Path) -> bool:
        """Return ``True`` if *repo_dir* opens as a git repository rooted there."""
        ...


class SubprocessGitClient:
    """:class:`GitClient` backed by ``git`` subprocesses.

    Parameters
    ----------
    executable:
        Name or path of the git binary.

    No timeout is applied here; callers bound operations by cancelling the
    awaiting task, which kills the child process.
    """

    def __init__(self, executable: str = "git") -> None:
        self.executable = executable

    async def _run(self, *args: str) -> tuple[int, str, str]:
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        try:
            proc = await asyncio.create_subprocess_exec(
                self.executable,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except FileNotFoundError as exc:
            raise GitError(f"git executable not found: {self.executable}") from exc

        try:
            stdout, stderr = await proc.communicate()
        except asyncio.CancelledError:
            proc.kill()
            await proc.wait()
            raise

        returncode = proc.returncode if proc.returncode is not None else -1
        return (
            returncode,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    async def _check(self, action: str, *args: str) -> str:
        returncode, stdout, stderr = await self._run(*args)
        if returncode != 0:
            details = (stderr or stdout).strip()
            msg = f"failed to {action}: {details}" if details else f"failed to {action}"
            raise GitError(msg, returncode=returncode)
        return stdout

    async def clone(self, url: str, dest: Path, *, ref: str | None = None, depth: int = 1) -> None:
        args = ["clone", "--depth", str(depth)]
        if ref:
            args.extend(["--branch", ref, "--single-branch"])
        args.extend(["--", url, str(dest)])
        logger.info("Cloning %s%s", url, f" @ {ref}" if ref else "")
        await self._check("clone repository", *args)

    async def pull(self, repo_dir: Path, *, force: bool = True) -> None:
        args = ["-C", str(repo_dir), "pull"]
        if force:
            args.append("--force")
        await self._check(f"update {repo_dir}", *args)

    async def is_repository(self, repo_dir: Path) -> bool:
        returncode, stdout, _ = await self._run(
            "-C", str(repo_dir), "rev-parse", "--absolute-git-dir"
        )
        if returncode != 0:
            return False
        git_dir = stdout.strip()
        return bool(git_dir) and Path(git_dir).resolve() == (repo_dir / ".git").resolve()
