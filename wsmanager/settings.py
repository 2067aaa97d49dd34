"""Configuration loaded from WSM_* environment variables."""

from __future__ import annotations

import getpass
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _home_file(name: str) -> Path:
    return Path.home() / name


class WorkspaceManagerSettings(BaseSettings):
    """Workspace manager settings.

    All fields are read from environment variables with the ``WSM_`` prefix.
    For example, ``WSM_WARNING_DAYS=5`` maps to ``warning_days``.  Settings are
    read once at startup and never re-read during a run.
    """

    model_config = SettingsConfigDict(
        env_prefix="WSM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_parse_none_str="none",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    log_file: Path | None = Field(default_factory=lambda: _home_file(".workspace_manager.log"))
    """Append-only log file.  Set to ``none`` to log to stderr only."""

    # -- Identity --------------------------------------------------------------
    user: str = Field(default_factory=getpass.getuser)
    """Owner used to scope restorable listings and build destination paths."""

    work_root: Path = Path("/work")
    """Workspaces live at ``{work_root}/{user}-{name}``."""

    # -- Policy ----------------------------------------------------------------
    warning_days: int = Field(default=3, ge=0)
    """Extend (or warn) when fewer than this many days remain."""

    extension_days: int = Field(default=30, gt=0)

    # -- Scheduling ------------------------------------------------------------
    last_run_file: Path = Field(default_factory=lambda: _home_file(".workspace_manager_last_run"))

    # -- External tools --------------------------------------------------------
    list_program: str = "ws_list"
    extend_program: str = "ws_extend"
    allocate_program: str = "ws_allocate"
    restore_program: str = "ws_restore"

    # -- Helpers ---------------------------------------------------------------

    def workspace_path(self, workspace_name: str) -> Path:
        """Canonical path of one of the user's workspaces."""
        return self.work_root / f"{self.user}-{workspace_name}"


def get_settings() -> WorkspaceManagerSettings:
    """Return a cached settings instance.

    Call ``_get_settings_cached.cache_clear()`` in tests to force a re-read after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> WorkspaceManagerSettings:
    return WorkspaceManagerSettings()
