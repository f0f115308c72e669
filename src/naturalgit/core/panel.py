"""Conversation panels: the core's endpoints for one UI view."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Any

from loguru import logger

from naturalgit.context.aggregator import ContextAggregator, ProbeFactory
from naturalgit.core.applicator import EditApplicator
from naturalgit.core.parser import parse_commands, parse_response
from naturalgit.core.prompt import compose_analysis_prompt, compose_command_prompt
from naturalgit.generation import Generator, generate_text
from naturalgit.host.base import EditorHost
from naturalgit.outbox import MessageSink, Outbox
from naturalgit.protocol import (
    AI_RESPONSE,
    EDIT_APPLIED,
    ApplyEdit,
    InsertCommand,
    RejectEdit,
    UserMessage,
    parse_inbound,
)
from naturalgit.types import EditResult, FileEditProposal, OutboundMessage


class BasePanel(ABC):
    """One conversation view.

    A panel owns its outbound queue. Messages produced before a UI attaches
    are held and delivered in order on :meth:`attach`. ``handle_user_message``
    is not reentrant; the UI must wait for a round to finish before sending
    the next ``userMessage``.
    """

    name: str = "base"
    terminal_name: str = "Terminal"
    failure_notice: str = "Error"

    def __init__(self, host: EditorHost, generator: Generator) -> None:
        self.host = host
        self.generator = generator
        self.outbox = Outbox()

    async def attach(self, sink: MessageSink) -> None:
        await self.outbox.attach(sink)

    def detach(self) -> None:
        self.outbox.detach()

    async def post(self, type_: str, value: Any) -> None:
        await self.outbox.post(OutboundMessage(type=type_, value=value))

    async def receive(self, data: Any) -> None:
        """Dispatch one raw inbound message."""
        message = parse_inbound(data)
        if message is None:
            return
        match message:
            case UserMessage(value=text):
                await self.handle_user_message(text)
            case InsertCommand(value=command):
                self.insert_command(command)
            case _:
                await self.handle_extra(message)

    async def handle_extra(self, message: Any) -> None:
        logger.debug("{}.inbound.ignored type={}", self.name, message.type)

    def insert_command(self, command: str) -> None:
        terminal = self.host.terminal(self.terminal_name)
        terminal.send_text(command)
        terminal.show()

    async def handle_user_message(self, message: str) -> None:
        try:
            value = await self.respond(message)
        except Exception as exc:
            logger.exception("{}.generation.error", self.name)
            self.host.show_error(f"{self.failure_notice}: {exc!s}")
            value = self.failure_value(message, f"Error: {exc!s}")
        await self.post(AI_RESPONSE, value)

    @abstractmethod
    async def respond(self, message: str) -> dict[str, Any]:
        """Run one generation round and build the ``aiResponse`` value."""

    @abstractmethod
    def failure_value(self, message: str, error: str) -> dict[str, Any]:
        """Build the synthetic ``aiResponse`` value for a failed round."""


class CommandPanel(BasePanel):
    """Turn requests into Git commands."""

    name = "commands"
    terminal_name = "Git"
    failure_notice = "Error generating Git commands"

    async def respond(self, message: str) -> dict[str, Any]:
        text = await generate_text(self.generator, compose_command_prompt(message))
        return {"message": message, "commands": parse_commands(text)}

    def failure_value(self, message: str, error: str) -> dict[str, Any]:
        return {"message": message, "commands": [error]}


class WorkspacePanel(BasePanel):
    """Answer questions about the workspace and apply proposed edits."""

    name = "workspace"
    terminal_name = "Workspace"
    failure_notice = "Error generating workspace analysis"

    def __init__(
        self,
        host: EditorHost,
        generator: Generator,
        *,
        probe_factory: ProbeFactory | None = None,
    ) -> None:
        super().__init__(host, generator)
        self._aggregator = ContextAggregator(host, probe_factory=probe_factory)
        self._applicator = EditApplicator(host)

    async def respond(self, message: str) -> dict[str, Any]:
        snapshot = await self._aggregator.gather()
        text = await generate_text(self.generator, compose_analysis_prompt(message, snapshot.render()))
        parsed = parse_response(text)
        return {
            "message": message,
            "analysis": parsed.display_text,
            "commands": parsed.commands,
            "edits": [edit.to_payload() for edit in parsed.edits],
        }

    def failure_value(self, message: str, error: str) -> dict[str, Any]:
        return {"message": message, "analysis": error}

    async def handle_extra(self, message: Any) -> None:
        match message:
            case ApplyEdit(value=payload):
                await self.apply_edit(payload.to_proposal())
            case RejectEdit():
                logger.debug("workspace.edit.rejected")
            case _:
                await super().handle_extra(message)

    async def apply_edit(self, proposal: FileEditProposal) -> EditResult:
        result = await self._applicator.apply(proposal)
        if result.status == "declined":
            return result
        if result.success:
            self.host.show_info(f"Successfully applied changes to {PurePath(proposal.file_path).name}")
        else:
            self.host.show_error(f"Error applying edit: {result.error}")
        await self.post(EDIT_APPLIED, result.to_payload())
        return result
