"""Command line interface for naturalgit."""

from __future__ import annotations

import asyncio
from functools import partial
from pathlib import Path

import typer
from rich.console import Console

from naturalgit.config import Settings, get_settings
from naturalgit.context.aggregator import ContextAggregator
from naturalgit.context.vcs import GitProbe
from naturalgit.core.panel import CommandPanel, WorkspacePanel
from naturalgit.errors import ConfigurationError
from naturalgit.generation import Generator, RepublicGenerator
from naturalgit.host.local import LocalHost
from naturalgit.render import ConsoleSink

app = typer.Typer(
    name="naturalgit",
    help="Ask about your workspace, get commands and edits back.",
    add_completion=False,
    rich_markup_mode="rich",
)

WorkspaceOption = typer.Option(None, "--workspace", "-w", help="Workspace root; repeat for several")
OpenOption = typer.Option(None, "--open", "-o", help="File treated as an open document; repeatable")
ActiveOption = typer.Option(None, "--active", "-a", help="File treated as the active editor")
SelectionOption = typer.Option(None, "--selection", "-s", help="Selected lines of the active file, START:END")


def build_generator(settings: Settings) -> Generator:
    return RepublicGenerator(settings)


def parse_selection(raw: str | None) -> tuple[int, int] | None:
    if raw is None:
        return None
    start, separator, end = raw.partition(":")
    try:
        first = int(start)
        last = int(end) if separator else first
    except ValueError as exc:
        raise typer.BadParameter(f"expected START:END, got {raw!r}") from exc
    if first < 1 or last < first:
        raise typer.BadParameter(f"invalid line range {raw!r}")
    return first, last


def _build_host(
    console: Console,
    workspace: list[Path] | None,
    open_files: list[Path] | None,
    active: Path | None,
    selection: str | None,
    *,
    assume_yes: bool = False,
) -> LocalHost:
    return LocalHost(
        workspace or [Path.cwd()],
        open_files=open_files or [],
        active_file=active,
        selection=parse_selection(selection),
        console=console,
        assume_yes=assume_yes,
    )


def _load_generator(settings: Settings) -> Generator:
    try:
        return build_generator(settings)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


@app.command()
def ask(
    message: str = typer.Argument(..., help="What you want to do with git"),
    insert: int | None = typer.Option(None, "--insert", "-i", help="Send command N to the terminal"),
) -> None:
    """Convert a request into Git commands."""
    settings = get_settings(profile="chat")
    console = Console()
    host = LocalHost([Path.cwd()], console=console)
    panel = CommandPanel(host, _load_generator(settings))
    sink = ConsoleSink(console)

    async def _run() -> None:
        await panel.attach(sink)
        await panel.receive({"type": "userMessage", "value": message})
        commands = sink.last_response.get("commands", [])
        if insert is not None:
            if not 1 <= insert <= len(commands):
                typer.echo(f"Error: no command number {insert}", err=True)
                raise typer.Exit(1)
            await panel.receive({"type": "insertCommand", "value": commands[insert - 1]})

    asyncio.run(_run())


@app.command()
def analyze(
    message: str = typer.Argument(..., help="Question or request about the workspace"),
    workspace: list[Path] | None = WorkspaceOption,
    open_files: list[Path] | None = OpenOption,
    active: Path | None = ActiveOption,
    selection: str | None = SelectionOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Apply every proposed edit without asking"),
) -> None:
    """Analyze the workspace and offer the proposed edits."""
    settings = get_settings(profile="chat")
    console = Console()
    host = _build_host(console, workspace, open_files, active, selection, assume_yes=yes)
    panel = WorkspacePanel(
        host,
        _load_generator(settings),
        probe_factory=partial(GitProbe, timeout_seconds=settings.vcs_timeout_seconds),
    )
    sink = ConsoleSink(console)

    async def _run() -> None:
        await panel.attach(sink)
        await panel.receive({"type": "userMessage", "value": message})
        for edit in sink.last_response.get("edits", []):
            accepted = yes or await asyncio.to_thread(typer.confirm, f"Apply edit to {edit['filePath']}?")
            if accepted:
                await panel.receive({"type": "applyEdit", "value": edit})
            else:
                await panel.receive({"type": "rejectEdit"})

    asyncio.run(_run())


@app.command()
def context(
    workspace: list[Path] | None = WorkspaceOption,
    open_files: list[Path] | None = OpenOption,
    active: Path | None = ActiveOption,
    selection: str | None = SelectionOption,
) -> None:
    """Print the workspace snapshot that would be sent with a question."""
    settings = get_settings(profile="chat")
    console = Console()
    host = _build_host(console, workspace, open_files, active, selection)
    aggregator = ContextAggregator(host, probe_factory=partial(GitProbe, timeout_seconds=settings.vcs_timeout_seconds))
    snapshot = asyncio.run(aggregator.gather())
    typer.echo(snapshot.render())
