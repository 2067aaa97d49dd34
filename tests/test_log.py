"""Tests for the loguru setup."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from wsmanager.log import setup_logging


@pytest.fixture
def _restore_loguru() -> Iterator[None]:
    yield
    logger.remove()
    logger.add(sys.stderr)
    logging.basicConfig(handlers=[], force=True)


@pytest.mark.usefixtures("_restore_loguru")
def test_file_sink_appends(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "workspace_manager.log"
    log_file.parent.mkdir()
    log_file.write_text("earlier run\n")

    setup_logging("info", log_file)
    logger.success("Successfully extended workspace proj1 by 30 days")
    logger.debug("not at this level")
    logger.remove()

    content = log_file.read_text()
    assert content.startswith("earlier run\n")
    assert "SUCCESS  | Successfully extended workspace proj1 by 30 days" in content
    assert "not at this level" not in content
    assert "<green>" not in content


@pytest.mark.usefixtures("_restore_loguru")
def test_stdlib_logging_is_intercepted(tmp_path: Path) -> None:
    log_file = tmp_path / "wsm.log"

    setup_logging("DEBUG", log_file)
    logging.getLogger("somelib").warning("from stdlib")
    logger.remove()

    assert "WARNING  | from stdlib" in log_file.read_text()
