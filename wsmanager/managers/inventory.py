"""Inventory parser -- turns ``ws_list`` output into ``WorkspaceStatus`` records.

``ws_list`` prints one block per workspace::

    id: bigdata
         workspace directory  : /work/alice-bigdata
         remaining time       : 2 days 4 hours
         available extensions : 1

The parser is a small state machine over lines.  Three line shapes are
recognised; every other line is ignored:

- ``id: <id>`` opens a new record (``IDLE``/``EMITTED`` -> ``COLLECTING``).
- ``remaining time ...: <n> days`` sets the remaining days.
- ``available extensions ...: <n>`` sets the extension count and, if the id
  and remaining days are already known, emits the record (-> ``EMITTED``).

Records are emitted as soon as they are complete, so callers can act on a
workspace before the rest of the listing is parsed.  A block that never
reports its extensions emits nothing.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from loguru import logger

from wsmanager.models.enums import ParserState
from wsmanager.models.workspace import WorkspaceStatus

_ID_RE = re.compile(r"^id:\s*(?P<value>.*?)\s*$")
_REMAINING_RE = re.compile(r"remaining time.*:\s*(?P<value>\S+)\s+days")
_EXTENSIONS_RE = re.compile(r"available extensions.*:\s*(?P<value>.*?)\s*$")


class MalformedFieldError(ValueError):
    """A numeric field of the inventory could not be read."""

    def __init__(self, field: str, raw: str) -> None:
        super().__init__(f"{field} is not a non-negative integer: {raw!r}")
        self.field = field
        self.raw = raw


def _parse_count(field: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise MalformedFieldError(field, raw) from None
    if value < 0:
        raise MalformedFieldError(field, raw)
    return value


@dataclass
class _PendingRecord:
    """Fields observed so far for the current workspace block."""

    workspace_id: str
    remaining_days: int | None = None
    available_extensions: int | None = None
    malformed: bool = False


class InventoryParser:
    """Line-at-a-time parser for ``ws_list`` output.

    Feed lines with :meth:`feed`; it returns a ``WorkspaceStatus`` whenever a
    line completes a record, ``None`` otherwise.
    """

    def __init__(self) -> None:
        self.state = ParserState.IDLE
        self._pending: _PendingRecord | None = None

    def feed(self, line: str) -> WorkspaceStatus | None:
        if match := _ID_RE.match(line):
            self._open(match["value"])
            return None
        if match := _REMAINING_RE.search(line):
            self._set_remaining(match["value"])
            return None
        if match := _EXTENSIONS_RE.search(line):
            return self._set_extensions(match["value"])
        return None

    # -- Transitions -----------------------------------------------------------

    def _open(self, workspace_id: str) -> None:
        if not workspace_id:
            self._pending = None
            self.state = ParserState.IDLE
            return
        logger.debug("Inventory: workspace {}", workspace_id)
        self._pending = _PendingRecord(workspace_id=workspace_id)
        self.state = ParserState.COLLECTING

    def _set_remaining(self, raw: str) -> None:
        if self._pending is None:
            return
        try:
            self._pending.remaining_days = _parse_count("remaining time", raw)
        except MalformedFieldError as exc:
            self._reject(self._pending, exc)
            return
        logger.debug("Inventory: {} has {} days left", self._pending.workspace_id, self._pending.remaining_days)

    def _set_extensions(self, raw: str) -> WorkspaceStatus | None:
        pending = self._pending
        if pending is None:
            return None
        try:
            pending.available_extensions = _parse_count("available extensions", raw)
        except MalformedFieldError as exc:
            self._reject(pending, exc)
            return None
        logger.debug("Inventory: {} has {} extensions left", pending.workspace_id, pending.available_extensions)

        if pending.malformed or pending.remaining_days is None or self.state == ParserState.EMITTED:
            return None
        self.state = ParserState.EMITTED
        return WorkspaceStatus(
            id=pending.workspace_id,
            remaining_days=pending.remaining_days,
            available_extensions=pending.available_extensions,
        )

    @staticmethod
    def _reject(pending: _PendingRecord, exc: MalformedFieldError) -> None:
        pending.malformed = True
        logger.warning("Inventory: skipping workspace {}: {}", pending.workspace_id, exc)


def parse_inventory(text: str) -> Iterator[WorkspaceStatus]:
    """Yield one ``WorkspaceStatus`` per complete block of *text*, in listing order."""
    parser = InventoryParser()
    for line in text.splitlines():
        status = parser.feed(line)
        if status is not None:
            yield status
