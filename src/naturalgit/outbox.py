"""Outbound message buffer owned by one panel."""

from __future__ import annotations

from collections import deque
from typing import Protocol

from loguru import logger

from naturalgit.types import OutboundMessage


class MessageSink(Protocol):
    """Minimal async contract for a UI receiving panel messages."""

    async def post_message(self, message: OutboundMessage) -> None: ...


class Outbox:
    """FIFO of outbound messages held until a sink attaches.

    Messages posted while no sink is attached are queued and flushed in order
    exactly once, when :meth:`attach` is called. Nothing is deduplicated or
    coalesced.
    """

    def __init__(self) -> None:
        self._sink: MessageSink | None = None
        self._pending: deque[OutboundMessage] = deque()

    @property
    def attached(self) -> bool:
        return self._sink is not None

    @property
    def pending(self) -> list[OutboundMessage]:
        return list(self._pending)

    async def attach(self, sink: MessageSink) -> None:
        if self._pending:
            logger.debug("outbox.drain count={}", len(self._pending))
        # Posts made while draining are appended and picked up by this loop.
        while self._pending:
            await sink.post_message(self._pending.popleft())
        self._sink = sink

    def detach(self) -> None:
        self._sink = None

    async def post(self, message: OutboundMessage) -> None:
        if self._sink is None:
            self._pending.append(message)
            return
        await self._sink.post_message(message)
