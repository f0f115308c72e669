from __future__ import annotations

import asyncio
import shutil
import subprocess
from pathlib import Path

import pytest
from conftest import FakeProbe

from naturalgit.context import vcs
from naturalgit.context.vcs import (
    BRANCH_FALLBACK,
    NOT_A_REPOSITORY,
    REMOTE_FALLBACK,
    STATUS_FALLBACK,
    GitProbe,
    render_vcs_status,
)


@pytest.mark.asyncio
async def test_not_a_repository(tmp_path: Path) -> None:
    assert await render_vcs_status(tmp_path, FakeProbe()) == NOT_A_REPOSITORY


@pytest.mark.asyncio
async def test_clean_tree_with_remote(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    probe = FakeProbe(branch="main", remote="origin\tgit@example.com:me/repo.git (fetch)")

    output = await render_vcs_status(tmp_path, probe)

    assert output.splitlines() == [
        "Current branch: main",
        "Remote: origin\tgit@example.com:me/repo.git (fetch)",
        "Working tree clean",
    ]


@pytest.mark.asyncio
async def test_modified_files_without_remote(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    probe = FakeProbe(branch="feature", status=" M src/a.py\n?? notes.txt")

    output = await render_vcs_status(tmp_path, probe)

    assert output == "Current branch: feature\nModified files:\n M src/a.py\n?? notes.txt"


@pytest.mark.asyncio
async def test_status_fallback_is_reported(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    probe = FakeProbe(branch=BRANCH_FALLBACK, status=STATUS_FALLBACK, remote=REMOTE_FALLBACK)

    output = await render_vcs_status(tmp_path, probe)

    assert output == f"Current branch: {BRANCH_FALLBACK}\n{STATUS_FALLBACK}"


@pytest.mark.asyncio
async def test_git_probe_falls_back_when_git_is_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    async def _missing(*_args: object, **_kwargs: object) -> object:
        raise FileNotFoundError(2, "No such file or directory", "git")

    monkeypatch.setattr(vcs.asyncio, "create_subprocess_exec", _missing)
    probe = GitProbe(tmp_path)

    assert await probe.branch() == BRANCH_FALLBACK
    assert await probe.status() == STATUS_FALLBACK
    assert await probe.remote() == REMOTE_FALLBACK


@pytest.mark.asyncio
async def test_git_probe_each_call_fails_independently(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    class _Process:
        def __init__(self, returncode: int, stdout: bytes) -> None:
            self.returncode = returncode
            self._stdout = stdout

        async def communicate(self) -> tuple[bytes, bytes]:
            return self._stdout, b"fatal: boom" if self.returncode else b""

    async def _fake_exec(_git: str, *args: str, **_kwargs: object) -> _Process:
        if args[0] == "status":
            return _Process(128, b"")
        if args[0] == "branch":
            return _Process(0, b"develop\n")
        return _Process(0, b"origin\thttps://example.com/r.git (fetch)\norigin\thttps://example.com/r.git (push)\n")

    monkeypatch.setattr(vcs.asyncio, "create_subprocess_exec", _fake_exec)
    probe = GitProbe(tmp_path)

    assert await probe.branch() == "develop"
    assert await probe.status() == STATUS_FALLBACK
    assert await probe.remote() == "origin\thttps://example.com/r.git (fetch)"


@pytest.mark.asyncio
async def test_git_probe_times_out(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    class _SlowProcess:
        returncode = None
        killed = False

        async def communicate(self) -> tuple[bytes, bytes]:
            await asyncio.sleep(10)
            return b"", b""

        def kill(self) -> None:
            self.killed = True

        async def wait(self) -> int:
            return -9

    process = _SlowProcess()

    async def _fake_exec(*_args: object, **_kwargs: object) -> _SlowProcess:
        return process

    monkeypatch.setattr(vcs.asyncio, "create_subprocess_exec", _fake_exec)

    assert await GitProbe(tmp_path, timeout_seconds=0.01).branch() == BRANCH_FALLBACK
    assert process.killed


@pytest.mark.asyncio
@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
async def test_git_probe_reads_real_repository(tmp_path: Path) -> None:
    subprocess.run(["git", "init", "-q", "-b", "trunk", str(tmp_path)], check=True)
    (tmp_path / "new.txt").write_text("hello\n", encoding="utf-8")

    output = await render_vcs_status(tmp_path, GitProbe(tmp_path))

    assert output.splitlines() == ["Current branch: trunk", "Modified files:", "?? new.txt"]
