"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from wsmanager.settings import WorkspaceManagerSettings, get_settings


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("LOGNAME", "tester")
    monkeypatch.setenv("USER", "tester")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults(home: Path) -> None:
    settings = WorkspaceManagerSettings()

    assert settings.user == "tester"
    assert settings.work_root == Path("/work")
    assert settings.warning_days == 3
    assert settings.extension_days == 30
    assert settings.log_file == home / ".workspace_manager.log"
    assert settings.last_run_file == home / ".workspace_manager_last_run"
    assert settings.list_program == "ws_list"
    assert settings.restore_program == "ws_restore"


def test_env_overrides(home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WSM_USER", "alice")
    monkeypatch.setenv("WSM_WORK_ROOT", "/scratch")
    monkeypatch.setenv("WSM_WARNING_DAYS", "7")
    monkeypatch.setenv("WSM_LOG_FILE", "none")

    settings = get_settings()

    assert settings.user == "alice"
    assert settings.warning_days == 7
    assert settings.log_file is None
    assert settings.workspace_path("bigdata") == Path("/scratch/alice-bigdata")


def test_get_settings_is_cached(home: Path) -> None:
    assert get_settings() is get_settings()


def test_rejects_negative_threshold(home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WSM_WARNING_DAYS", "-1")

    with pytest.raises(ValueError, match="warning_days"):
        WorkspaceManagerSettings()
