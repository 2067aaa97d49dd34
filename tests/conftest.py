"""Shared test fixtures: fake workspace tools, settings and log capture.

No HPC workspace tooling is required -- the ws_* programs are replaced by
``FakeWorkspaceTools`` and workspaces live under ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from wsmanager.settings import WorkspaceManagerSettings, _get_settings_cached
from wsmanager.tools.base import WorkspaceToolError

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeWorkspaceTools:
    """In-memory stand-in for the ws_* programs; records every action call.

    When ``work_root`` is set, a successful allocation creates the empty
    workspace directory like ``ws_allocate`` does.
    """

    def __init__(self, *, user: str = "alice", work_root: Path | None = None) -> None:
        self.user = user
        self.work_root = work_root
        self.inventory = ""
        self.restorable = ""
        self.extend_result = True
        self.allocate_result = True
        self.list_error: str | None = None
        self.restorable_error: str | None = None
        self.calls: list[tuple[str, str, int]] = []

    def list_workspaces(self) -> str:
        if self.list_error is not None:
            raise WorkspaceToolError(self.list_error)
        return self.inventory

    def list_restorable(self) -> str:
        if self.restorable_error is not None:
            raise WorkspaceToolError(self.restorable_error)
        return self.restorable

    def extend_workspace(self, workspace_id: str, days: int) -> bool:
        self.calls.append(("extend", workspace_id, days))
        return self.extend_result

    def allocate_workspace(self, workspace_id: str, days: int) -> bool:
        self.calls.append(("allocate", workspace_id, days))
        if self.allocate_result and self.work_root is not None:
            (self.work_root / f"{self.user}-{workspace_id}").mkdir(parents=True)
        return self.allocate_result


class LogCapture:
    """Collects loguru records emitted during a test."""

    def __init__(self) -> None:
        self.records: list[dict] = []

    def __call__(self, message) -> None:
        self.records.append(message.record)

    def messages(self, level: str | None = None) -> list[str]:
        return [r["message"] for r in self.records if level is None or r["level"].name == level]

    def contains(self, text: str, level: str | None = None) -> bool:
        return any(text in m for m in self.messages(level))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


@pytest.fixture
def logs() -> Iterator[LogCapture]:
    capture = LogCapture()
    handler_id = logger.add(capture, level=0, format="{message}")
    yield capture
    logger.remove(handler_id)


@pytest.fixture
def work_root(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture
def settings(tmp_path: Path, work_root: Path) -> WorkspaceManagerSettings:
    return WorkspaceManagerSettings(
        user="alice",
        work_root=work_root,
        log_file=None,
        last_run_file=tmp_path / "last_run",
    )


@pytest.fixture
def tools(work_root: Path) -> FakeWorkspaceTools:
    return FakeWorkspaceTools(user="alice", work_root=work_root)
