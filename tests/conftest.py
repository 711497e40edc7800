"""Shared pytest fixtures for adfmd tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import pytest

from adfmd import logging_config


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch):
    """Let every test configure logging from scratch.

    ``configure_logging`` installs a root handler once per process; tests that
    exercise it (directly or through the CLI) must not leak that handler or
    the root level into later tests.
    """

    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if any(isinstance(item, logging_config._CorrelationIdFilter) for item in handler.filters):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _clear_adfmd_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ``ADFMD_*`` variables from the developer shell out of the tests."""

    for key in ("ADFMD_MAX_DEPTH", "ADFMD_ERROR_MESSAGE", "ADFMD_LOG_JSON", "ADFMD_LOG_LEVEL"):
        # setenv first so monkeypatch restores the key's absence afterwards,
        # even if a .env file loaded during the test sets it again.
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the shared fixtures directory."""

    return Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def load_json():
    """Helper fixture to load JSON fixtures by filename."""

    def _loader(path: str | Path) -> Dict[str, Any]:
        file_path = Path(path)
        with file_path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    return _loader
