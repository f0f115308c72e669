"""Filesystem and terminal backed host used by the CLI."""

from __future__ import annotations

import asyncio
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from naturalgit.host.base import ActiveEditor, Selection, TextDocument, WorkspaceFolder
from naturalgit.types import TextEdit

LANGUAGE_IDS = {
    ".c": "c",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".css": "css",
    ".go": "go",
    ".h": "c",
    ".html": "html",
    ".java": "java",
    ".js": "javascript",
    ".json": "json",
    ".jsx": "javascriptreact",
    ".md": "markdown",
    ".py": "python",
    ".rb": "ruby",
    ".rs": "rust",
    ".sh": "shellscript",
    ".toml": "toml",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".txt": "plaintext",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def language_id_for(path: Path) -> str:
    return LANGUAGE_IDS.get(path.suffix.lower(), "plaintext")


def read_text(path: Path) -> str:
    """Read a document keeping its line endings."""
    with open(path, encoding="utf-8", newline="") as file:
        return file.read()


def write_text_atomic(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` through a sibling temp file."""
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as file:
            file.write(content)
        if path.exists():
            os.chmod(temp_name, path.stat().st_mode & 0o7777)
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise


class ConsoleTerminal:
    """Terminal sink that shows commands instead of running them."""

    def __init__(self, name: str, console: Console) -> None:
        self.name = name
        self._console = console
        self.history: list[str] = []

    def send_text(self, text: str) -> None:
        self.history.append(text)
        self._console.print(f"[dim]{self.name}[/dim] [bold green]$[/bold green] {escape(text)}", highlight=False)

    def show(self) -> None:
        logger.debug("terminal.show name={}", self.name)


class LocalHost:
    """Host over the local filesystem.

    Open documents are files passed on the command line; they are re-read on
    every access so the snapshot reflects the current disk state.
    """

    def __init__(
        self,
        folders: Sequence[Path],
        *,
        open_files: Sequence[Path] = (),
        active_file: Path | None = None,
        selection: tuple[int, int] | None = None,
        console: Console | None = None,
        assume_yes: bool = False,
    ) -> None:
        self._folders = [WorkspaceFolder.from_path(folder) for folder in folders]
        self._open_files = [path.resolve() for path in open_files]
        self._active_file = active_file.resolve() if active_file is not None else None
        if self._active_file is not None and self._active_file not in self._open_files:
            self._open_files.append(self._active_file)
        self._selection = selection
        self._console = console or Console()
        self._assume_yes = assume_yes
        self._active_terminal: ConsoleTerminal | None = None

    @property
    def workspace_folders(self) -> list[WorkspaceFolder]:
        return list(self._folders)

    @property
    def open_documents(self) -> list[TextDocument]:
        documents: list[TextDocument] = []
        for path in self._open_files:
            try:
                documents.append(self._load(path))
            except (OSError, UnicodeError) as exc:
                logger.warning("host.document.unreadable path={} error={}", path, exc)
        return documents

    @property
    def active_editor(self) -> ActiveEditor | None:
        if self._active_file is None:
            return None
        try:
            document = self._load(self._active_file)
        except (OSError, UnicodeError) as exc:
            logger.warning("host.document.unreadable path={} error={}", self._active_file, exc)
            return None
        return ActiveEditor(document=document, selection=self._build_selection(document))

    def _build_selection(self, document: TextDocument) -> Selection | None:
        if self._selection is None:
            return None
        start, end = self._selection
        lines = document.text.split("\n")
        start = max(start, 1)
        end = min(max(end, start), len(lines))
        if start > len(lines):
            return None
        return Selection(start_line=start, end_line=end, text="\n".join(lines[start - 1 : end]))

    @staticmethod
    def _load(path: Path) -> TextDocument:
        return TextDocument(path=path, text=read_text(path), language_id=language_id_for(path))

    def terminal(self, name: str) -> ConsoleTerminal:
        if self._active_terminal is None:
            self._active_terminal = ConsoleTerminal(name, self._console)
        return self._active_terminal

    async def open_document(self, path: Path) -> TextDocument:
        if not path.exists():
            return TextDocument(path=path, text="", language_id=language_id_for(path))
        return self._load(path)

    async def apply_edit(self, edit: TextEdit) -> bool:
        current = read_text(edit.path) if edit.path.exists() else ""
        if not 0 <= edit.start <= edit.end <= len(current):
            logger.warning("host.edit.rejected path={} range={}-{}", edit.path, edit.start, edit.end)
            return False
        write_text_atomic(edit.path, current[: edit.start] + edit.new_text + current[edit.end :])
        return True

    async def show_document(self, path: Path) -> None:
        self._console.print(f"[dim]Opened[/dim] [cyan]{escape(str(path))}[/cyan]", highlight=False)

    def create_directory(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    async def confirm(self, message: str) -> bool:
        if self._assume_yes:
            return True
        return await asyncio.to_thread(typer.confirm, message, default=False)

    def show_info(self, message: str) -> None:
        self._console.print(f"[bold blue]Info:[/bold blue] {escape(message)}", highlight=False)

    def show_error(self, message: str) -> None:
        self._console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)
