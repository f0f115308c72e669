"""Console rendering of panel messages."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.syntax import Syntax

from naturalgit.protocol import AI_RESPONSE, EDIT_APPLIED
from naturalgit.types import OutboundMessage


class ConsoleSink:
    """Message sink that renders panel output with Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()
        self.received: list[OutboundMessage] = []

    @property
    def last_response(self) -> dict[str, Any]:
        for message in reversed(self.received):
            if message.type == AI_RESPONSE:
                return dict(message.value)
        return {}

    async def post_message(self, message: OutboundMessage) -> None:
        self.received.append(message)
        if message.type == AI_RESPONSE:
            self._render_response(message.value)
        elif message.type == EDIT_APPLIED:
            self._render_edit_result(message.value)

    def _render_response(self, value: dict[str, Any]) -> None:
        self.console.print(f"[bold cyan]You:[/bold cyan] {escape(str(value.get('message', '')))}", highlight=False)
        if "analysis" in value:
            self.console.print(Markdown(value["analysis"]))
        commands = value.get("commands") or []
        if commands:
            self.console.print("[bold]Commands:[/bold]")
            for index, command in enumerate(commands, start=1):
                self.console.print(f"  [dim]{index}.[/dim] {escape(command)}", highlight=False)
        for edit in value.get("edits") or []:
            self.console.print(f"[bold yellow]Proposed edit:[/bold yellow] {escape(edit['filePath'])}", highlight=False)
            lexer = Syntax.guess_lexer(edit["filePath"], code=edit["content"])
            self.console.print(Syntax(edit["content"], lexer, line_numbers=True))

    def _render_edit_result(self, value: dict[str, Any]) -> None:
        if value.get("success"):
            self.console.print(f"[green]Applied[/green] {escape(value['filePath'])}", highlight=False)
        else:
            error = escape(str(value.get("error", "")))
            self.console.print(f"[red]Failed[/red] {escape(value['filePath'])}: {error}", highlight=False)
