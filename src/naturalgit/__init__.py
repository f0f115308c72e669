"""naturalgit - ask about your workspace, get commands and edits back."""

from naturalgit.core import CommandPanel, WorkspacePanel
from naturalgit.types import EditResult, FileEditProposal, OutboundMessage

__version__ = "0.1.0"

__all__ = ["CommandPanel", "EditResult", "FileEditProposal", "OutboundMessage", "WorkspacePanel"]
