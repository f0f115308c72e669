"""Runtime logging helpers."""

from __future__ import annotations

import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "chat"]

DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"
_CONFIGURED_PROFILE: LogProfile | None = None


def _build_chat_handler() -> Handler:
    # Shares the global console so log lines interleave with rendered output.
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(*, profile: LogProfile = "default", level: str = "INFO") -> None:
    """Route loguru output for ``profile``; repeated calls for one profile are no-ops."""
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    logger.remove()
    if profile == "chat":
        logger.add(_build_chat_handler(), level=level.upper(), format="{message}", backtrace=False, diagnose=False)
    else:
        logger.add(sys.stderr, level=level.upper(), format=DEFAULT_FORMAT, backtrace=False, diagnose=False)
    _CONFIGURED_PROFILE = profile
