"""Data models for the workspace manager."""

from wsmanager.models.enums import DestinationState, ParserState, RenewalAction
from wsmanager.models.workspace import ManualRestoreCommand, RestorableEntry, WorkspaceStatus

__all__ = [
    "DestinationState",
    "ManualRestoreCommand",
    "ParserState",
    "RenewalAction",
    "RestorableEntry",
    "WorkspaceStatus",
]
