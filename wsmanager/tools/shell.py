"""Workspace tools backed by the ws_* command line programs.

Each call runs one program with ``subprocess.run`` and waits for it.  No
timeout is applied: a hanging tool hangs the run, which is acceptable for a
job started once a day.
"""

from __future__ import annotations

import subprocess

from loguru import logger

from wsmanager.tools.base import WorkspaceToolError


class ShellWorkspaceTools:
    """``WorkspaceTools`` implementation that shells out to the ws_* programs."""

    def __init__(
        self,
        *,
        list_program: str = "ws_list",
        extend_program: str = "ws_extend",
        allocate_program: str = "ws_allocate",
        restore_program: str = "ws_restore",
    ) -> None:
        self.list_program = list_program
        self.extend_program = extend_program
        self.allocate_program = allocate_program
        self.restore_program = restore_program

    # -- Listing ---------------------------------------------------------------

    def list_workspaces(self) -> str:
        return self._read([self.list_program])

    def list_restorable(self) -> str:
        return self._read([self.restore_program, "-l"])

    # -- Actions ---------------------------------------------------------------

    def extend_workspace(self, workspace_id: str, days: int) -> bool:
        return self._act([self.extend_program, workspace_id, str(days)])

    def allocate_workspace(self, workspace_id: str, days: int) -> bool:
        return self._act([self.allocate_program, workspace_id, str(days)])

    # -- Helpers ---------------------------------------------------------------

    def _read(self, argv: list[str]) -> str:
        """Run a listing program and return its stdout.  Raises ``WorkspaceToolError``."""
        try:
            result = subprocess.run(argv, capture_output=True, text=True)
        except OSError as exc:
            msg = f"Cannot run {argv[0]}: {exc}"
            raise WorkspaceToolError(msg) from exc
        if result.returncode != 0:
            msg = f"{' '.join(argv)} exited with status {result.returncode}: {result.stderr.strip()}"
            raise WorkspaceToolError(msg)
        return result.stdout

    def _act(self, argv: list[str]) -> bool:
        """Run an action program.  Failures are logged and reported as ``False``."""
        try:
            result = subprocess.run(argv, capture_output=True, text=True)
        except OSError as exc:
            logger.warning("Cannot run {}: {}", argv[0], exc)
            return False
        if result.returncode != 0:
            logger.warning(
                "{} exited with status {}: {}",
                " ".join(argv),
                result.returncode,
                result.stderr.strip(),
            )
            return False
        return True
