"""Maintenance run -- drives both pipelines once.

1. **Renewal**: parse ``ws_list`` and apply the renewal policy to each
   workspace as soon as its block is complete.
2. **Restoration**: prepare restores for every restorable workspace.

The pipelines are independent: if listing fails for one, the other still
runs.  Individual failures never abort the run; everything is reported
through the log and summarised in the returned ``MaintenanceReport``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from wsmanager.managers.inventory import parse_inventory
from wsmanager.managers.renewal import RenewalEngine
from wsmanager.managers.restoration import RestorationReconciler
from wsmanager.models.enums import RenewalAction
from wsmanager.tools.base import WorkspaceToolError

if TYPE_CHECKING:
    from wsmanager.models.workspace import ManualRestoreCommand
    from wsmanager.settings import WorkspaceManagerSettings
    from wsmanager.tools.base import WorkspaceTools


@dataclass
class MaintenanceReport:
    """Summary of one maintenance run."""

    checked: int = 0
    extended: list[str] = field(default_factory=list)
    extend_failed: list[str] = field(default_factory=list)
    warned: list[str] = field(default_factory=list)
    restores: list[ManualRestoreCommand] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def run_maintenance(settings: WorkspaceManagerSettings, tools: WorkspaceTools) -> MaintenanceReport:
    """Run the renewal pipeline, then the restoration pipeline."""
    report = MaintenanceReport()
    logger.info("Starting workspace management check")
    _renew(settings, tools, report)
    _restore(settings, tools, report)
    logger.info(
        "Finished workspace management check ({} checked, {} extended, {} failed, {} warned, {} restores prepared)",
        report.checked,
        len(report.extended),
        len(report.extend_failed),
        len(report.warned),
        len(report.restores),
    )
    return report


def _renew(settings: WorkspaceManagerSettings, tools: WorkspaceTools, report: MaintenanceReport) -> None:
    try:
        inventory = tools.list_workspaces()
    except WorkspaceToolError as exc:
        logger.error("Cannot list workspaces: {}", exc)
        report.errors.append(str(exc))
        return

    engine = RenewalEngine(tools, warning_days=settings.warning_days, extension_days=settings.extension_days)
    for status in parse_inventory(inventory):
        report.checked += 1
        outcome = engine.apply(status)
        if outcome.action == RenewalAction.EXTEND:
            (report.extended if outcome.succeeded else report.extend_failed).append(outcome.workspace_id)
        elif outcome.action == RenewalAction.WARN:
            report.warned.append(outcome.workspace_id)


def _restore(settings: WorkspaceManagerSettings, tools: WorkspaceTools, report: MaintenanceReport) -> None:
    try:
        restorable = tools.list_restorable()
    except WorkspaceToolError as exc:
        logger.error("Cannot list restorable workspaces: {}", exc)
        report.errors.append(str(exc))
        return

    reconciler = RestorationReconciler(
        tools,
        user=settings.user,
        work_root=settings.work_root,
        restore_program=settings.restore_program,
    )
    report.restores.extend(reconciler.reconcile(restorable))
