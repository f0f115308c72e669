from __future__ import annotations

import os
from pathlib import Path

import pytest

from naturalgit.context import tree
from naturalgit.context.tree import format_file_size, render_directory_tree, should_ignore


def _touch(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_directories_sort_before_files_then_by_name(tmp_path: Path) -> None:
    _touch(tmp_path / "b.txt", "hi")
    _touch(tmp_path / "a.txt")
    (tmp_path / "zeta").mkdir()
    (tmp_path / "alpha").mkdir()

    lines = render_directory_tree(tmp_path).splitlines()

    assert lines == ["📁 alpha/", "📁 zeta/", "📄 a.txt (0 B)", "📄 b.txt (2 B)"]


def test_nested_entries_are_indented(tmp_path: Path) -> None:
    _touch(tmp_path / "src" / "pkg" / "mod.py", "x = 1\n")

    lines = render_directory_tree(tmp_path).splitlines()

    assert lines == ["📁 src/", "  📁 pkg/", "    📄 mod.py (6 B)"]


def test_walk_stops_at_max_depth(tmp_path: Path) -> None:
    _touch(tmp_path / "a" / "b" / "c" / "d" / "deep.txt")
    _touch(tmp_path / "a" / "b" / "c" / "shallow.txt")

    output = render_directory_tree(tmp_path)

    assert "    📁 c/" in output
    assert "shallow.txt" not in output
    assert "d/" not in output
    assert all(not line.startswith(" " * 6) for line in output.splitlines())


@pytest.mark.parametrize("name", ["node_modules", ".git", "dist", "coverage", ".env", ".env.local", ".DS_Store"])
def test_ignored_names_are_skipped_at_any_depth(tmp_path: Path, name: str) -> None:
    (tmp_path / name).mkdir()
    (tmp_path / "src" / name).mkdir(parents=True)
    _touch(tmp_path / "src" / "keep.py")

    output = render_directory_tree(tmp_path)

    assert name not in output
    assert "keep.py" in output


def test_log_files_are_skipped_but_similar_names_are_kept(tmp_path: Path) -> None:
    _touch(tmp_path / "server.log")
    _touch(tmp_path / "nested" / "debug.log")
    _touch(tmp_path / "catalog.py")
    _touch(tmp_path / "changelog.md")

    output = render_directory_tree(tmp_path)

    assert ".log" not in output
    assert "catalog.py" in output
    assert "changelog.md" in output


def test_root_entries_are_capped_with_marker(tmp_path: Path) -> None:
    for index in range(57):
        _touch(tmp_path / f"file{index:02d}.txt")
    _touch(tmp_path / "ignored.log")

    lines = render_directory_tree(tmp_path).splitlines()

    assert len(lines) == 51
    assert lines[-1] == "... (7 more entries)"
    assert lines[0] == "📄 file00.txt (0 B)"
    assert lines[49] == "📄 file49.txt (0 B)"


def test_nested_entries_are_capped_at_twenty(tmp_path: Path) -> None:
    for index in range(25):
        _touch(tmp_path / "many" / f"f{index:02d}.txt")

    lines = render_directory_tree(tmp_path).splitlines()

    assert lines[0] == "📁 many/"
    assert len([line for line in lines if line.startswith("  📄")]) == 20
    assert lines[-1] == "  ... (5 more entries)"


def test_exact_cap_emits_no_marker(tmp_path: Path) -> None:
    for index in range(20):
        _touch(tmp_path / "dir" / f"f{index:02d}.txt")

    assert "more entries" not in render_directory_tree(tmp_path)


def test_unreadable_directory_reports_inline_and_continues(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "locked").mkdir()
    _touch(tmp_path / "open" / "visible.txt")
    real_scandir = os.scandir

    def _scandir(path: Path) -> object:
        if Path(path).name == "locked":
            raise PermissionError(13, "Permission denied")
        return real_scandir(path)

    monkeypatch.setattr(tree.os, "scandir", _scandir)

    lines = render_directory_tree(tmp_path).splitlines()

    assert lines[0] == "📁 locked/"
    assert lines[1].startswith("  Error: ")
    assert "Permission denied" in lines[1]
    assert "  📄 visible.txt (0 B)" in lines


def test_missing_root_reports_error(tmp_path: Path) -> None:
    output = render_directory_tree(tmp_path / "missing")

    assert output.startswith("Error: ")


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.0 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024, "1.0 MB"),
        (5 * 1024 * 1024 + 512 * 1024, "5.5 MB"),
    ],
)
def test_format_file_size(size: int, expected: str) -> None:
    assert format_file_size(size) == expected


def test_should_ignore() -> None:
    assert should_ignore("node_modules")
    assert should_ignore("npm-debug.log")
    assert not should_ignore("logger.py")
    assert not should_ignore("build.gradle")
