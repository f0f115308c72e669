from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from naturalgit.host.base import ActiveEditor, TextDocument, WorkspaceFolder
from naturalgit.types import OutboundMessage, TextEdit


class FakeTerminal:
    def __init__(self, name: str) -> None:
        self.name = name
        self.sent: list[str] = []
        self.shown = 0

    def send_text(self, text: str) -> None:
        self.sent.append(text)

    def show(self) -> None:
        self.shown += 1


class FakeHost:
    """In-memory editor host writing edits straight to disk."""

    def __init__(self, folders: Sequence[Path] = ()) -> None:
        self.folders = [WorkspaceFolder(name=path.name, path=path) for path in folders]
        self.documents: list[TextDocument] = []
        self.editor: ActiveEditor | None = None
        self.confirm_answer = True
        self.confirm_prompts: list[str] = []
        self.reject_edits = False
        self.fail_show = False
        self.applied: list[TextEdit] = []
        self.shown: list[Path] = []
        self.infos: list[str] = []
        self.errors: list[str] = []
        self.terminals: dict[str, FakeTerminal] = {}
        self.created_dirs: list[Path] = []

    @property
    def workspace_folders(self) -> list[WorkspaceFolder]:
        return self.folders

    @property
    def open_documents(self) -> list[TextDocument]:
        return self.documents

    @property
    def active_editor(self) -> ActiveEditor | None:
        return self.editor

    def terminal(self, name: str) -> FakeTerminal:
        return self.terminals.setdefault(name, FakeTerminal(name))

    async def open_document(self, path: Path) -> TextDocument:
        text = path.read_text(encoding="utf-8") if path.exists() else ""
        return TextDocument(path=path, text=text)

    async def apply_edit(self, edit: TextEdit) -> bool:
        if self.reject_edits:
            return False
        current = edit.path.read_text(encoding="utf-8") if edit.path.exists() else ""
        edit.path.write_text(current[: edit.start] + edit.new_text + current[edit.end :], encoding="utf-8")
        self.applied.append(edit)
        return True

    async def show_document(self, path: Path) -> None:
        if self.fail_show:
            raise RuntimeError("cannot show document")
        self.shown.append(path)

    def create_directory(self, path: Path) -> None:
        self.created_dirs.append(path)
        path.mkdir(parents=True, exist_ok=True)

    async def confirm(self, message: str) -> bool:
        self.confirm_prompts.append(message)
        return self.confirm_answer

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)


class FakeGenerator:
    def __init__(self, response: str | None = "", error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


class FakeProbe:
    def __init__(self, branch: str = "main", status: str = "", remote: str = "") -> None:
        self._branch = branch
        self._status = status
        self._remote = remote

    async def branch(self) -> str:
        return self._branch

    async def status(self) -> str:
        return self._status

    async def remote(self) -> str:
        return self._remote


class RecordingSink:
    def __init__(self) -> None:
        self.messages: list[OutboundMessage] = []

    async def post_message(self, message: OutboundMessage) -> None:
        self.messages.append(message)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def host(workspace: Path) -> FakeHost:
    return FakeHost([workspace])
