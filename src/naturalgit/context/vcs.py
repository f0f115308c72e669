"""Version-control probing for workspace snapshots."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Protocol

from loguru import logger

from naturalgit.errors import VcsProbeError

BRANCH_FALLBACK = "(unknown)"
STATUS_FALLBACK = "Git repository detected (unable to read status)"
REMOTE_FALLBACK = ""
NOT_A_REPOSITORY = "Not a Git repository"


class VcsProbe(Protocol):
    """Best-effort version-control queries.

    Each method fails independently and answers a fixed fallback string
    instead of raising.
    """

    async def branch(self) -> str: ...

    async def status(self) -> str: ...

    async def remote(self) -> str: ...


class GitProbe:
    """Probe a git checkout through the ``git`` executable."""

    def __init__(self, root: Path, *, timeout_seconds: float | None = 10.0) -> None:
        self.root = root
        self._timeout_seconds = timeout_seconds

    async def branch(self) -> str:
        try:
            return (await self._run("branch", "--show-current")).strip()
        except VcsProbeError as exc:
            logger.warning("vcs.branch.error root={} error={}", self.root, exc)
            return BRANCH_FALLBACK

    async def status(self) -> str:
        try:
            return (await self._run("status", "--short")).rstrip()
        except VcsProbeError as exc:
            logger.warning("vcs.status.error root={} error={}", self.root, exc)
            return STATUS_FALLBACK

    async def remote(self) -> str:
        try:
            output = (await self._run("remote", "-v")).strip()
        except VcsProbeError as exc:
            logger.warning("vcs.remote.error root={} error={}", self.root, exc)
            return REMOTE_FALLBACK
        return output.split("\n", 1)[0] if output else ""

    async def _run(self, *args: str) -> str:
        git_executable = shutil.which("git") or "git"
        try:
            process = await asyncio.create_subprocess_exec(
                git_executable,
                *args,
                cwd=self.root,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise VcsProbeError(f"git {' '.join(args)}: {exc!s}") from exc

        try:
            async with asyncio.timeout(self._timeout_seconds):
                stdout, stderr = await process.communicate()
        except TimeoutError as exc:
            process.kill()
            await process.wait()
            raise VcsProbeError(f"git {' '.join(args)}: timed out after {self._timeout_seconds}s") from exc

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip() or "(empty)"
            raise VcsProbeError(f"git {' '.join(args)}: exit={process.returncode} {detail}")
        return stdout.decode("utf-8", errors="replace")


def has_repository(root: Path) -> bool:
    return (root / ".git").exists()


async def render_vcs_status(root: Path, probe: VcsProbe) -> str:
    """Render the git section for ``root``."""
    if not has_repository(root):
        return NOT_A_REPOSITORY

    branch, status, remote = await asyncio.gather(probe.branch(), probe.status(), probe.remote())

    lines = [f"Current branch: {branch}"]
    if remote.strip():
        lines.append(f"Remote: {remote.strip().splitlines()[0]}")
    if status == STATUS_FALLBACK:
        lines.append(STATUS_FALLBACK)
    elif status.strip():
        lines.append(f"Modified files:\n{status.rstrip()}")
    else:
        lines.append("Working tree clean")
    return "\n".join(lines)
