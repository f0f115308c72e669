"""Workspace snapshot assembly."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from naturalgit.context.tree import render_directory_tree
from naturalgit.context.vcs import GitProbe, VcsProbe, render_vcs_status
from naturalgit.host.base import EditorHost

MAX_OPEN_FILES = 5
MAX_PREVIEW_LINES = 50
MAX_RECENT_FILES = 10

SECTION_TITLES = {
    "folders": "WORKSPACE FOLDERS",
    "open_files": "OPEN FILES",
    "active_file": "CURRENTLY ACTIVE FILE",
    "file_tree": "WORKSPACE FILE STRUCTURE",
    "vcs_status": "GIT STATUS",
    "recent_files": "RECENTLY MODIFIED FILES",
}

type ProbeFactory = Callable[[Path], VcsProbe]


@dataclass(frozen=True)
class Section:
    key: str
    body: str

    @property
    def title(self) -> str:
        return SECTION_TITLES[self.key]

    def render(self) -> str:
        return f"=== {self.title} ===\n{self.body}\n"


@dataclass(frozen=True)
class WorkspaceSnapshot:
    """Ordered, labeled sections describing the workspace at one moment."""

    sections: tuple[Section, ...] = ()

    def get(self, key: str) -> str | None:
        for section in self.sections:
            if section.key == key:
                return section.body
        return None

    @property
    def keys(self) -> list[str]:
        return [section.key for section in self.sections]

    def render(self) -> str:
        return "\n".join(section.render() for section in self.sections)

    def __str__(self) -> str:
        return self.render()


class ContextAggregator:
    """Build a bounded text snapshot of the host's workspace.

    Every section is computed independently. A section that raises is logged
    and left out; the aggregation itself never fails.
    """

    def __init__(self, host: EditorHost, *, probe_factory: ProbeFactory | None = None) -> None:
        self._host = host
        self._probe_factory: ProbeFactory = probe_factory or GitProbe

    async def gather(self) -> WorkspaceSnapshot:
        sections: list[Section] = []
        for key, build in (
            ("folders", self._folders),
            ("open_files", self._open_files),
            ("active_file", self._active_file),
            ("file_tree", self._file_tree),
            ("vcs_status", self._vcs_status),
            ("recent_files", self._recent_files),
        ):
            try:
                body = await build()
            except Exception:
                logger.exception("context.section.error section={}", key)
                continue
            if body:
                sections.append(Section(key=key, body=body))
        logger.debug("context.gathered sections={}", [section.key for section in sections])
        return WorkspaceSnapshot(sections=tuple(sections))

    async def _folders(self) -> str | None:
        folders = self._host.workspace_folders
        if not folders:
            return None
        return "\n".join(
            f"Folder {index}: {folder.name} ({folder.path})" for index, folder in enumerate(folders, start=1)
        )

    async def _open_files(self) -> str | None:
        lines: list[str] = []
        for document in list(self._host.open_documents)[:MAX_OPEN_FILES]:
            if document.is_untitled:
                lines.append(f"[Untitled] - Language: {document.language_id}")
                continue
            preview_lines = min(MAX_PREVIEW_LINES, document.line_count)
            lines.extend(
                [
                    f"File: {document.file_name}",
                    f"Path: {document.path}",
                    f"Language: {document.language_id}",
                    f"Lines: {document.line_count}",
                    f"Preview (first {preview_lines} lines):",
                    "```",
                    document.preview(preview_lines),
                    "```",
                    "",
                ]
            )
        return "\n".join(lines) if lines else None

    async def _active_file(self) -> str | None:
        editor = self._host.active_editor
        if editor is None:
            return None
        document = editor.document
        lines = [
            f"File: {document.file_name}",
            f"Path: {document.path if document.path is not None else document.file_name}",
            f"Language: {document.language_id}",
            f"Line count: {document.line_count}",
        ]
        selection = editor.selection
        if selection is not None and not selection.is_empty:
            lines.append(f"Selected lines: {selection.start_line}-{selection.end_line}")
            lines.append(f"Selected text:\n{selection.text}")
        return "\n".join(lines)

    async def _file_tree(self) -> str | None:
        folders = self._host.workspace_folders
        if not folders:
            return None
        folder = folders[0]
        try:
            tree = render_directory_tree(folder.path)
        except Exception as exc:
            logger.exception("context.tree.error root={}", folder.path)
            return f"Root: {folder.name}\nError reading {folder.name}: {exc!s}"
        return f"Root: {folder.name}\n{tree}" if tree else f"Root: {folder.name}"

    async def _vcs_status(self) -> str | None:
        folders = self._host.workspace_folders
        if not folders:
            return None
        root = folders[0].path
        try:
            return await render_vcs_status(root, self._probe_factory(root))
        except Exception as exc:
            logger.exception("context.vcs.error root={}", root)
            return f"Git status error: {exc!s}"

    async def _recent_files(self) -> str | None:
        if not self._host.workspace_folders:
            return None
        stamped: list[tuple[float, str, Path]] = []
        for document in self._host.open_documents:
            if document.path is None:
                continue
            try:
                mtime = os.stat(document.path).st_mtime
            except OSError:
                continue
            stamped.append((mtime, document.file_name, document.path))
        stamped.sort(key=lambda item: item[0], reverse=True)
        lines = [f"- {name} ({path})" for _, name, path in stamped[:MAX_RECENT_FILES]]
        return "\n".join(lines) if lines else None


async def gather_context(host: EditorHost, *, probe_factory: ProbeFactory | None = None) -> WorkspaceSnapshot:
    """Gather a fresh workspace snapshot for ``host``."""
    return await ContextAggregator(host, probe_factory=probe_factory).gather()
