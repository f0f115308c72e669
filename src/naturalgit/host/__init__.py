"""Host collaborators for naturalgit."""

from naturalgit.host.base import ActiveEditor, EditorHost, Selection, Terminal, TextDocument, WorkspaceFolder
from naturalgit.host.local import LocalHost

__all__ = [
    "ActiveEditor",
    "EditorHost",
    "LocalHost",
    "Selection",
    "Terminal",
    "TextDocument",
    "WorkspaceFolder",
]
