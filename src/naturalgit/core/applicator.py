"""Whole-file application of proposed edits."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from naturalgit.errors import WorkspaceNotFoundError
from naturalgit.host.base import EditorHost, WorkspaceFolder
from naturalgit.types import EditResult, FileEditProposal, TextEdit

NO_WORKSPACE_ERROR = "No workspace folder found"
REJECTED_EDIT_ERROR = "Failed to apply edit"


def resolve_edit_path(file_path: str, folders: Sequence[WorkspaceFolder]) -> Path:
    """Resolve a proposed path against the workspace roots.

    Absolute paths are used as-is. Relative paths resolve under the first
    root where they already exist, else under the first root.
    """
    if not folders:
        raise WorkspaceNotFoundError(NO_WORKSPACE_ERROR)
    candidate = Path(file_path)
    if candidate.is_absolute():
        return candidate
    for folder in folders:
        full_path = folder.path / candidate
        if full_path.exists():
            return full_path
    return folders[0].path / candidate


class EditApplicator:
    """Apply :class:`FileEditProposal` objects through an editor host."""

    def __init__(self, host: EditorHost) -> None:
        self._host = host

    async def apply(self, proposal: FileEditProposal) -> EditResult:
        try:
            target = resolve_edit_path(proposal.file_path, self._host.workspace_folders)
            if not target.exists():
                create = await self._host.confirm(
                    f"File {proposal.file_path} does not exist. Do you want to create it?"
                )
                if not create:
                    logger.info("edit.declined path={}", proposal.file_path)
                    return EditResult.declined(proposal.file_path)
                if not target.parent.exists():
                    self._host.create_directory(target.parent)

            document = await self._host.open_document(target)
            edit = TextEdit(path=target, start=0, end=len(document.text), new_text=proposal.content)
            if not await self._host.apply_edit(edit):
                logger.warning("edit.rejected path={}", target)
                return EditResult.failed(proposal.file_path, REJECTED_EDIT_ERROR)
        except Exception as exc:
            logger.exception("edit.error path={}", proposal.file_path)
            return EditResult.failed(proposal.file_path, str(exc))

        logger.info("edit.applied path={}", target)
        try:
            await self._host.show_document(target)
        except Exception as exc:
            logger.warning("edit.show.error path={} error={}", target, exc)
        return EditResult.applied(proposal.file_path)
