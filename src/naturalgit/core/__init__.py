"""Core pipeline: prompt composition, response parsing, edit application and panels."""

from naturalgit.core.applicator import EditApplicator, resolve_edit_path
from naturalgit.core.panel import BasePanel, CommandPanel, WorkspacePanel
from naturalgit.core.parser import (
    EditExtraction,
    ParsedResponse,
    extract_shell_commands,
    parse_commands,
    parse_file_edits,
    parse_response,
)
from naturalgit.core.prompt import PromptMode, compose_analysis_prompt, compose_command_prompt, compose_prompt

__all__ = [
    "BasePanel",
    "CommandPanel",
    "EditApplicator",
    "EditExtraction",
    "ParsedResponse",
    "PromptMode",
    "WorkspacePanel",
    "compose_analysis_prompt",
    "compose_command_prompt",
    "compose_prompt",
    "extract_shell_commands",
    "parse_commands",
    "parse_file_edits",
    "parse_response",
    "resolve_edit_path",
]
