"""Bounded directory tree rendering for workspace snapshots."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path

MAX_DEPTH = 3
MAX_ROOT_ENTRIES = 50
MAX_NESTED_ENTRIES = 20
INDENT = "  "

IGNORED_NAMES = frozenset(
    {
        "node_modules",
        ".git",
        ".vscode",
        "dist",
        "out",
        "build",
        ".next",
        ".cache",
        "coverage",
        ".DS_Store",
        ".env",
        ".env.local",
    }
)
IGNORED_GLOBS = ("*.log",)


def should_ignore(name: str) -> bool:
    """Check if an entry name matches the ignore set."""
    if name in IGNORED_NAMES:
        return True
    return any(fnmatchcase(name, pattern) for pattern in IGNORED_GLOBS)


def format_file_size(size_bytes: int) -> str:
    """Convert file size in bytes to human-readable format."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def entry_cap(depth: int) -> int:
    return MAX_ROOT_ENTRIES if depth == 0 else MAX_NESTED_ENTRIES


def render_directory_tree(root: Path, *, max_depth: int = MAX_DEPTH) -> str:
    """Render ``root`` as indented lines, depth-first.

    Directories sort before files, then by name. Ignored entries are dropped
    before the per-directory cap is applied; anything beyond the cap is
    summarised by a ``... (<n> more entries)`` marker. Read errors become
    inline ``Error:`` lines and never stop the walk.
    """
    lines: list[str] = []
    _walk(root, 0, max_depth, lines)
    return "\n".join(lines)


def _walk(directory: Path, depth: int, max_depth: int, lines: list[str]) -> None:
    if depth >= max_depth:
        return
    indent = INDENT * depth

    try:
        with os.scandir(directory) as iterator:
            entries = [entry for entry in iterator if not should_ignore(entry.name)]
    except OSError as exc:
        lines.append(f"{indent}Error: {exc}")
        return

    def _is_dir(entry: os.DirEntry[str]) -> bool:
        try:
            return entry.is_dir()
        except OSError:
            return False

    entries.sort(key=lambda entry: (not _is_dir(entry), entry.name))

    cap = entry_cap(depth)
    for entry in entries[:cap]:
        if _is_dir(entry):
            lines.append(f"{indent}📁 {entry.name}/")
            if depth < max_depth - 1:
                _walk(Path(entry.path), depth + 1, max_depth, lines)
            continue
        try:
            size = entry.stat().st_size
        except OSError as exc:
            lines.append(f"{indent}Error: {exc}")
            continue
        lines.append(f"{indent}📄 {entry.name} ({format_file_size(size)})")

    if len(entries) > cap:
        lines.append(f"{indent}... ({len(entries) - cap} more entries)")
