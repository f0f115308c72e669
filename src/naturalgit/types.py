"""Shared data types exchanged between the core and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

type Payload = dict[str, Any]
type EditStatus = Literal["applied", "failed", "declined"]


@dataclass(frozen=True)
class FileEditProposal:
    """Whole-file replacement proposed by the generator."""

    file_path: str
    content: str

    def to_payload(self) -> Payload:
        return {"filePath": self.file_path, "content": self.content}


@dataclass(frozen=True)
class TextEdit:
    """Replacement of the character range ``[start, end)`` of one document."""

    path: Path
    start: int
    end: int
    new_text: str


@dataclass(frozen=True)
class EditResult:
    """Outcome of one apply attempt."""

    file_path: str
    status: EditStatus
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status == "applied"

    @classmethod
    def applied(cls, file_path: str) -> EditResult:
        return cls(file_path=file_path, status="applied")

    @classmethod
    def failed(cls, file_path: str, error: str) -> EditResult:
        return cls(file_path=file_path, status="failed", error=error)

    @classmethod
    def declined(cls, file_path: str) -> EditResult:
        return cls(file_path=file_path, status="declined")

    def to_payload(self) -> Payload:
        payload: Payload = {"filePath": self.file_path, "success": self.success}
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(frozen=True)
class OutboundMessage:
    """Tagged value sent from a panel to its UI."""

    type: str
    value: Any

    def to_dict(self) -> Payload:
        return {"type": self.type, "value": self.value}
