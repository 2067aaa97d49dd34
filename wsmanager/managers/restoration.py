"""Restoration reconciler -- prepares restores of expired workspaces.

For every restorable entry owned by the user, the reconciler makes sure an
empty workspace of the same name exists to restore into, then tells the
operator exactly which ``ws_restore`` command to run.  The restore itself is
never run here: ``ws_restore`` asks for a verification string typed on the
terminal.  Once the operator has restored, ``merge.merge_restored`` moves the
restored tree into place.

Destination handling:

- occupied (non-empty) -- skip the entry, restoring would mix data.
- empty -- reuse it.
- missing -- allocate a fresh workspace; skip the entry if that fails.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from wsmanager.models.enums import DestinationState
from wsmanager.models.workspace import ManualRestoreCommand, RestorableEntry

if TYPE_CHECKING:
    from wsmanager.tools.base import WorkspaceTools

# Restore targets are always allocated for this many days.
ALLOCATION_DAYS = 30


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_restorable_id(full_id: str, user: str) -> RestorableEntry | None:
    """Split ``<user>-<name>-<generation>`` into its parts.

    Only a single trailing ``-<digits>`` group is taken as the generation, so
    a name that itself ends in ``-<digits>`` keeps that part
    (``alice-run-2-1700000000`` -> ``run-2``).  Returns ``None`` when
    *full_id* does not have the expected shape or the name would not stay
    inside the work root.
    """
    match = re.fullmatch(rf"{re.escape(user)}-(?P<name>[^/]+)-(?P<generation>\d+)", full_id)
    if match is None or match["name"] in {".", ".."}:
        return None
    return RestorableEntry(
        full_id=full_id,
        owner=user,
        workspace_name=match["name"],
        generation=match["generation"],
    )


def filter_restorable(text: str, user: str) -> list[RestorableEntry]:
    """Return the entries of ``ws_restore -l`` output that belong to *user*."""
    entries: list[RestorableEntry] = []
    prefix = f"{user}-"
    for line in text.splitlines():
        if not line.startswith(prefix):
            continue
        full_id = line.strip()
        entry = parse_restorable_id(full_id, user)
        if entry is None:
            logger.warning("Ignoring restorable entry {}: not of the form {}-<name>-<generation>", full_id, user)
            continue
        entries.append(entry)
    return entries


# ---------------------------------------------------------------------------
# Destination probe
# ---------------------------------------------------------------------------


def classify_destination(path: Path) -> DestinationState:
    """Classify a restore target.  A non-directory at *path* counts as occupied."""
    if not path.exists():
        return DestinationState.MISSING
    if not path.is_dir():
        return DestinationState.OCCUPIED
    if any(path.iterdir()):
        return DestinationState.OCCUPIED
    return DestinationState.EMPTY


# ---------------------------------------------------------------------------
# Reconciler
# ---------------------------------------------------------------------------


class RestorationReconciler:
    """Prepares a restore target and manual restore command per restorable entry."""

    def __init__(
        self,
        tools: WorkspaceTools,
        *,
        user: str,
        work_root: Path = Path("/work"),
        restore_program: str = "ws_restore",
    ) -> None:
        self._tools = tools
        self.user = user
        self.work_root = work_root
        self.restore_program = restore_program

    def destination_for(self, workspace_name: str) -> Path:
        return self.work_root / f"{self.user}-{workspace_name}"

    def reconcile(self, text: str) -> list[ManualRestoreCommand]:
        """Prepare every restorable entry of *text*; returns the prepared commands."""
        entries = filter_restorable(text, self.user)
        if not entries:
            return []

        logger.info("Found {} restorable workspaces", len(entries))
        prepared: list[ManualRestoreCommand] = []
        for entry in entries:
            logger.info("Preparing restoration of {}", entry.full_id)
            try:
                command = self.prepare(entry)
            except OSError as exc:
                logger.warning("Cannot prepare restoration of {}: {}", entry.full_id, exc)
                continue
            if command is not None:
                prepared.append(command)
        return prepared

    def prepare(self, entry: RestorableEntry) -> ManualRestoreCommand | None:
        """Make sure an empty target exists and announce the manual restore command.

        Returns ``None`` when the entry had to be skipped.
        """
        destination = self.destination_for(entry.workspace_name)
        state = classify_destination(destination)

        if state == DestinationState.OCCUPIED:
            logger.warning(
                "Cannot restore {}: workspace {} exists at {} and is not empty",
                entry.full_id,
                entry.workspace_name,
                destination,
            )
            return None

        if state == DestinationState.EMPTY:
            logger.info("Found empty workspace {} at {}, will use it", entry.workspace_name, destination)
        else:
            logger.info("Workspace {} does not exist yet, creating it", entry.workspace_name)
            if not self._tools.allocate_workspace(entry.workspace_name, ALLOCATION_DAYS):
                logger.warning("Failed to create new workspace {}", entry.workspace_name)
                return None
            logger.success("Created workspace {} at {}", entry.workspace_name, destination)

        command = ManualRestoreCommand(
            full_id=entry.full_id,
            workspace_name=entry.workspace_name,
            destination=destination,
            program=self.restore_program,
        )
        logger.info("Automatic restore is not possible: {} asks for a verification string.", self.restore_program)
        logger.warning("Run the following command and enter the verification string to restore into {}:", destination)
        logger.warning("    {}", command.shell_command)
        logger.info("Afterwards move the restored files into place with: {}", command.merge_command)
        return command
