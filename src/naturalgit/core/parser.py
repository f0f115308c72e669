"""Extraction of commands and file edits from generated text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from naturalgit.types import FileEditProposal

COMMAND_PREFIXES = ("git ", "$")
PROMPT_MARKER_RE = re.compile(r"^\$\s*")
FILE_BLOCK_RE = re.compile(r"```file:([^\n]*)\n(.*?)```", re.DOTALL)
SHELL_BLOCK_RE = re.compile(r"```(?:bash|sh|shell|console)[ \t]*\n(.*?)```", re.DOTALL)
BLANK_RUN_RE = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")


@dataclass(frozen=True)
class EditExtraction:
    """File edits found in a response and the text left for display."""

    edits: list[FileEditProposal] = field(default_factory=list)
    display_text: str = ""


@dataclass(frozen=True)
class ParsedResponse:
    display_text: str
    commands: list[str] = field(default_factory=list)
    edits: list[FileEditProposal] = field(default_factory=list)


def parse_commands(text: str) -> list[str]:
    """Pick command lines out of a command-generation response.

    Lines starting with ``git `` or ``$`` (after trimming) are kept, minus the
    prompt marker. When nothing qualifies the whole text comes back as the
    only element, so callers never get an empty list.
    """
    commands: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped.startswith(COMMAND_PREFIXES):
            continue
        command = PROMPT_MARKER_RE.sub("", stripped)
        if command:
            commands.append(command)
    return commands or [text]


def parse_file_edits(text: str) -> EditExtraction:
    """Collect ``file:<path>`` fenced blocks and cut them out of the display text."""
    edits: list[FileEditProposal] = []
    spans: list[tuple[int, int]] = []
    for match in FILE_BLOCK_RE.finditer(text):
        path = match.group(1).strip()
        if not path:
            continue
        edits.append(FileEditProposal(file_path=path, content=match.group(2).strip()))
        spans.append(match.span())

    if not spans:
        return EditExtraction(edits=[], display_text=text)

    pieces: list[str] = []
    cursor = 0
    for start, end in spans:
        pieces.append(text[cursor:start])
        cursor = end
    pieces.append(text[cursor:])
    display_text = BLANK_RUN_RE.sub("\n\n", "".join(pieces)).strip()
    return EditExtraction(edits=edits, display_text=display_text)


def extract_shell_commands(text: str) -> list[str]:
    """Return the command lines of fenced ``bash``/``sh`` blocks."""
    commands: list[str] = []
    for match in SHELL_BLOCK_RE.finditer(text):
        for line in match.group(1).split("\n"):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            command = PROMPT_MARKER_RE.sub("", stripped)
            if command:
                commands.append(command)
    return commands


def parse_response(text: str) -> ParsedResponse:
    """Run the analysis-mode passes over one response."""
    extraction = parse_file_edits(text)
    return ParsedResponse(
        display_text=extraction.display_text,
        commands=extract_shell_commands(extraction.display_text),
        edits=extraction.edits,
    )
