"""Workspace records.

Both record types are transient: they are built from the text printed by the
workspace tools during one run and discarded afterwards.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from pydantic import BaseModel, Field


class WorkspaceStatus(BaseModel):
    """One active workspace as reported by ``ws_list``."""

    id: str
    remaining_days: int = Field(ge=0)
    available_extensions: int = Field(ge=0)


class RestorableEntry(BaseModel):
    """One expired workspace as reported by ``ws_restore -l``.

    ``full_id`` has the shape ``<owner>-<workspace_name>-<generation>``.
    """

    full_id: str
    owner: str
    workspace_name: str
    generation: str


class ManualRestoreCommand(BaseModel):
    """A prepared restore the operator has to run by hand.

    ``ws_restore`` asks for a verification string on the terminal, so the
    restore itself can never run unattended.  Once the operator has run
    ``shell_command``, ``merge_command`` moves the restored tree into place.
    """

    full_id: str
    workspace_name: str
    destination: Path
    program: str = "ws_restore"

    @property
    def shell_command(self) -> str:
        return shlex.join([self.program, self.full_id, self.workspace_name])

    @property
    def merge_command(self) -> str:
        return shlex.join(["wsmanager", "merge", self.workspace_name, self.full_id])
