"""Workspace context aggregation."""

from naturalgit.context.aggregator import ContextAggregator, Section, WorkspaceSnapshot, gather_context
from naturalgit.context.tree import format_file_size, render_directory_tree, should_ignore
from naturalgit.context.vcs import GitProbe, VcsProbe, render_vcs_status

__all__ = [
    "ContextAggregator",
    "GitProbe",
    "Section",
    "VcsProbe",
    "WorkspaceSnapshot",
    "format_file_size",
    "gather_context",
    "render_directory_tree",
    "render_vcs_status",
    "should_ignore",
]
