"""Collaborator interfaces consumed by the core."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from naturalgit.types import TextEdit


@dataclass(frozen=True)
class WorkspaceFolder:
    name: str
    path: Path

    @classmethod
    def from_path(cls, path: Path) -> WorkspaceFolder:
        resolved = path.resolve()
        return cls(name=resolved.name or str(resolved), path=resolved)


@dataclass(frozen=True)
class Selection:
    """Selected range of the active document, 1-based inclusive lines."""

    start_line: int
    end_line: int
    text: str

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class TextDocument:
    """Snapshot of one open document."""

    path: Path | None
    text: str
    language_id: str = "plaintext"
    untitled_name: str = "Untitled-1"

    @property
    def is_untitled(self) -> bool:
        return self.path is None

    @property
    def file_name(self) -> str:
        return self.untitled_name if self.path is None else self.path.name

    @property
    def line_count(self) -> int:
        # An empty document still has one (empty) line.
        return self.text.count("\n") + 1

    def preview(self, max_lines: int) -> str:
        return "\n".join(self.text.split("\n")[:max_lines])


@dataclass(frozen=True)
class ActiveEditor:
    document: TextDocument
    selection: Selection | None = None


class Terminal(Protocol):
    name: str

    def send_text(self, text: str) -> None: ...

    def show(self) -> None: ...


class EditorHost(Protocol):
    """Editor, filesystem and user-interaction capabilities of the host."""

    @property
    def workspace_folders(self) -> Sequence[WorkspaceFolder]: ...

    @property
    def open_documents(self) -> Sequence[TextDocument]: ...

    @property
    def active_editor(self) -> ActiveEditor | None: ...

    def terminal(self, name: str) -> Terminal:
        """Return the active terminal, creating one called ``name`` if none exists."""
        ...

    async def open_document(self, path: Path) -> TextDocument: ...

    async def apply_edit(self, edit: TextEdit) -> bool:
        """Apply ``edit``; return False when the host rejects it."""
        ...

    async def show_document(self, path: Path) -> None: ...

    def create_directory(self, path: Path) -> None: ...

    async def confirm(self, message: str) -> bool: ...

    def show_info(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...
