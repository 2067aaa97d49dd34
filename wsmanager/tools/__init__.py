"""External workspace tool implementations."""

from wsmanager.tools.base import WorkspaceToolError, WorkspaceTools
from wsmanager.tools.shell import ShellWorkspaceTools

__all__ = ["ShellWorkspaceTools", "WorkspaceToolError", "WorkspaceTools"]
