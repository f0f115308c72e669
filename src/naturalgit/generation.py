"""Text generation backends."""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

from loguru import logger
from republic import LLM

from naturalgit.config import Settings
from naturalgit.errors import EmptyResponseError, ModelNotConfiguredError, NoResponseError

MODEL_NOT_CONFIGURED_ERROR = "Model not configured. Set NATURALGIT_MODEL (e.g., 'gemini:gemini-2.5-flash')."


class Generator(Protocol):
    """Opaque prompt-to-text service. May raise, or return no text."""

    async def generate(self, prompt: str) -> str | None: ...


def build_llm(settings: Settings) -> LLM:
    """Build Republic LLM client from settings."""
    if not settings.model:
        raise ModelNotConfiguredError(MODEL_NOT_CONFIGURED_ERROR)
    return LLM(
        settings.model,
        api_key=settings.api_key,
        api_base=settings.api_base,
    )


def extract_text(response: Any) -> str | None:
    """Pull assistant text out of a chat response of any supported shape."""
    if response is None or isinstance(response, str):
        return response
    for attribute in ("text", "value"):
        value = getattr(response, attribute, None)
        if isinstance(value, str):
            return value
    choices = getattr(response, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    if message is None:
        return None
    return getattr(message, "content", None)


class RepublicGenerator:
    """Generator backed by a Republic :class:`LLM` client."""

    def __init__(self, settings: Settings, llm: LLM | None = None) -> None:
        self._llm = llm if llm is not None else build_llm(settings)
        self._max_tokens = settings.max_tokens
        self._timeout_seconds = settings.model_timeout_seconds

    async def generate(self, prompt: str) -> str | None:
        kwargs: dict[str, Any] = {}
        if self._max_tokens is not None:
            kwargs["max_tokens"] = self._max_tokens
        async with asyncio.timeout(self._timeout_seconds):
            response = await self._llm.chat_async(prompt, **kwargs)
        return extract_text(response)


async def generate_text(generator: Generator, prompt: str) -> str:
    """Run one generation call and insist on non-empty text."""
    logger.debug("generation.start prompt_chars={}", len(prompt))
    text = await generator.generate(prompt)
    if text is None:
        raise NoResponseError("No response from model")
    if not text.strip():
        raise EmptyResponseError("Empty response from model")
    logger.debug("generation.finish response_chars={}", len(text))
    return text
