"""Inbound message models for the panel protocol."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from naturalgit.types import FileEditProposal


class EditPayload(BaseModel):
    """Edit proposal as sent by the UI."""

    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(..., alias="filePath", min_length=1, description="Relative or absolute path")
    content: str = Field(..., description="Full replacement body")

    def to_proposal(self) -> FileEditProposal:
        return FileEditProposal(file_path=self.file_path, content=self.content)


class UserMessage(BaseModel):
    type: Literal["userMessage"]
    value: str


class InsertCommand(BaseModel):
    type: Literal["insertCommand"]
    value: str


class ApplyEdit(BaseModel):
    type: Literal["applyEdit"]
    value: EditPayload


class RejectEdit(BaseModel):
    type: Literal["rejectEdit"]
    value: Any = None


InboundMessage = Annotated[
    UserMessage | InsertCommand | ApplyEdit | RejectEdit,
    Field(discriminator="type"),
]

_INBOUND_ADAPTER: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)

AI_RESPONSE = "aiResponse"
EDIT_APPLIED = "editApplied"


def parse_inbound(data: Any) -> InboundMessage | None:
    """Validate a raw inbound message; unknown or malformed ones yield None."""
    try:
        return _INBOUND_ADAPTER.validate_python(data)
    except ValidationError as exc:
        logger.warning("protocol.inbound.invalid errors={}", exc.error_count())
        return None
