"""Prompt templates sent to the text generator."""

from __future__ import annotations

from typing import Literal

type PromptMode = Literal["commands", "analysis"]

COMMAND_PROMPT_TEMPLATE = "Convert the following request to Git commands: {message}"

ANALYSIS_PROMPT_TEMPLATE = """You are analyzing a VS Code workspace. Here is the current workspace context:

{context}

User request: {message}

Analyze the request in the context of the workspace and provide a detailed, helpful response. \
Consider the workspace structure, open files, and current state when answering.

If you suggest any commands (git, npm, shell commands, etc.), format them in code blocks with \
```bash or ```sh tags so they can be easily executed.

If you need to fix or modify code in a file, format it as:
```file:path/to/file.ext
[code content here]
```

This will allow the user to directly apply the fix to the file."""


def compose_command_prompt(message: str) -> str:
    return COMMAND_PROMPT_TEMPLATE.format(message=message)


def compose_analysis_prompt(message: str, context: str) -> str:
    return ANALYSIS_PROMPT_TEMPLATE.format(context=context, message=message)


def compose_prompt(message: str, context: str = "", *, mode: PromptMode = "analysis") -> str:
    """Compose the single prompt for one generation round.

    ``commands`` mode ignores ``context``; ``analysis`` mode embeds it and
    describes the fenced response format the parser understands.
    """
    if mode == "commands":
        return compose_command_prompt(message)
    return compose_analysis_prompt(message, context)
