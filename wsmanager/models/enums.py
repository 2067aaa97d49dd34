"""Shared enumerations."""

from __future__ import annotations

from enum import StrEnum

# -- Inventory ---------------------------------------------------------------


class ParserState(StrEnum):
    """Where the inventory parser stands within the current workspace block."""

    IDLE = "idle"
    COLLECTING = "collecting"
    EMITTED = "emitted"


# -- Renewal -----------------------------------------------------------------


class RenewalAction(StrEnum):
    """Decision of the renewal policy for one workspace."""

    NONE = "none"
    EXTEND = "extend"
    WARN = "warn"


# -- Restoration -------------------------------------------------------------


class DestinationState(StrEnum):
    """Result of probing the canonical path of a restore target."""

    MISSING = "missing"
    EMPTY = "empty"
    OCCUPIED = "occupied"
