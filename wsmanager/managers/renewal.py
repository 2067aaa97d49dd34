"""Renewal policy -- extends workspaces that are about to expire.

The policy is a decision table evaluated independently for every workspace
on every run; nothing is remembered between runs:

=====================================  ==========
condition                              action
=====================================  ==========
``remaining_days >= warning_days``     none
``available_extensions > 0``           extend
otherwise                              warn
=====================================  ==========

A warning means the workspace will expire and can only be recovered by a
restore, which needs the operator (see ``restoration``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from wsmanager.models.enums import RenewalAction

if TYPE_CHECKING:
    from wsmanager.models.workspace import WorkspaceStatus
    from wsmanager.tools.base import WorkspaceTools


@dataclass(frozen=True)
class RenewalOutcome:
    """What the engine did for one workspace."""

    workspace_id: str
    action: RenewalAction
    succeeded: bool = True


def decide(status: WorkspaceStatus, warning_days: int) -> RenewalAction:
    """Pure policy decision for one workspace."""
    if status.remaining_days >= warning_days:
        return RenewalAction.NONE
    if status.available_extensions > 0:
        return RenewalAction.EXTEND
    return RenewalAction.WARN


class RenewalEngine:
    """Applies the renewal policy, one workspace at a time."""

    def __init__(self, tools: WorkspaceTools, *, warning_days: int = 3, extension_days: int = 30) -> None:
        self._tools = tools
        self.warning_days = warning_days
        self.extension_days = extension_days

    def apply(self, status: WorkspaceStatus) -> RenewalOutcome:
        action = decide(status, self.warning_days)
        if action == RenewalAction.EXTEND:
            return self._extend(status)
        if action == RenewalAction.WARN:
            logger.warning(
                "WARNING: Workspace {} has only {} days left and no more extensions available! "
                "Restore it into a new workspace of the same name and move the files back into place.",
                status.id,
                status.remaining_days,
            )
        return RenewalOutcome(workspace_id=status.id, action=action)

    def _extend(self, status: WorkspaceStatus) -> RenewalOutcome:
        logger.info("Extending workspace {} (had {} days left)", status.id, status.remaining_days)
        if self._tools.extend_workspace(status.id, self.extension_days):
            logger.success("Successfully extended workspace {} by {} days", status.id, self.extension_days)
            return RenewalOutcome(workspace_id=status.id, action=RenewalAction.EXTEND)
        # Retried on the next scheduled run.
        logger.warning("Failed to extend workspace {}", status.id)
        return RenewalOutcome(workspace_id=status.id, action=RenewalAction.EXTEND, succeeded=False)
