"""Once-a-day gate.

A single file holds the date (``YYYYMMDD``) of the last completed run.  The
gate only decides whether the daily driver should start; the maintenance
steps themselves are safe to run any number of times.

Writes are atomic: the date is written to a temporary file in the same
directory, then renamed onto the marker, so a crash never leaves a
half-written marker behind.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from datetime import date, datetime
from pathlib import Path

from loguru import logger

DATE_FORMAT = "%Y%m%d"


class LastRunMarker:
    """Last-run date stored in a single file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self) -> date | None:
        """Date of the last run, or ``None`` if unknown or unreadable."""
        try:
            raw = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        try:
            return datetime.strptime(raw, DATE_FORMAT).date()  # noqa: DTZ007
        except ValueError:
            logger.warning("Ignoring unreadable last-run marker {}: {!r}", self.path, raw)
            return None

    def should_run(self, today: date) -> bool:
        return self.read() != today

    def mark(self, today: date) -> None:
        _atomic_write(self.path, today.strftime(DATE_FORMAT) + "\n")


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise
