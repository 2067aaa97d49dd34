"""Unit tests for the once-a-day gate."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from wsmanager.gate import LastRunMarker


def test_runs_without_marker(tmp_path: Path) -> None:
    marker = LastRunMarker(tmp_path / "last_run")

    assert marker.read() is None
    assert marker.should_run(date(2025, 5, 7)) is True


def test_mark_blocks_same_day(tmp_path: Path) -> None:
    marker = LastRunMarker(tmp_path / "last_run")
    marker.mark(date(2025, 5, 7))

    assert (tmp_path / "last_run").read_text() == "20250507\n"
    assert marker.should_run(date(2025, 5, 7)) is False
    assert marker.should_run(date(2025, 5, 8)) is True


def test_mark_overwrites_previous_date(tmp_path: Path) -> None:
    marker = LastRunMarker(tmp_path / "last_run")
    marker.mark(date(2025, 5, 7))
    marker.mark(date(2025, 5, 8))

    assert marker.read() == date(2025, 5, 8)
    assert list(tmp_path.glob("*.tmp")) == []


def test_mark_creates_parent_directory(tmp_path: Path) -> None:
    marker = LastRunMarker(tmp_path / "state" / "last_run")
    marker.mark(date(2025, 1, 1))

    assert marker.read() == date(2025, 1, 1)


def test_unreadable_marker_allows_run(tmp_path: Path, logs) -> None:
    path = tmp_path / "last_run"
    path.write_text("yesterday")
    marker = LastRunMarker(path)

    assert marker.should_run(date(2025, 5, 7)) is True
    assert logs.contains("yesterday", level="WARNING")
