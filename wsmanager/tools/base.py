"""Interface to the host's workspace tools.

The workspace manager never manipulates workspaces itself; it asks the HPC
workspace tooling (``ws_list``, ``ws_extend``, ``ws_allocate``,
``ws_restore``) to do so.  The interface is synchronous: every call blocks
until the tool has finished and calls never overlap.

``ws_restore`` is deliberately absent: it prompts for a verification string
on the terminal, so restores are only prepared here and run by the operator.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class WorkspaceToolError(RuntimeError):
    """Raised when a listing tool cannot be run or exits with an error."""


@runtime_checkable
class WorkspaceTools(Protocol):
    """Protocol for the external workspace operations."""

    def list_workspaces(self) -> str:
        """Return the text inventory of active workspaces.  Raises ``WorkspaceToolError``."""
        ...

    def extend_workspace(self, workspace_id: str, days: int) -> bool:
        """Extend a workspace by *days*.  Returns ``False`` on failure, never raises."""
        ...

    def allocate_workspace(self, workspace_id: str, days: int) -> bool:
        """Allocate a new workspace for *days*.  Returns ``False`` on failure, never raises."""
        ...

    def list_restorable(self) -> str:
        """Return the list of restorable (expired) workspaces.  Raises ``WorkspaceToolError``."""
        ...
