"""Pytest hooks and fixtures."""

import sys

import pytest
from loguru import logger


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point ~ at a temp dir and keep CLI logging quiet and off disk."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("HOSTBRIDGE_LOGGING__FILE_ENABLED", "false")
    monkeypatch.setenv("HOSTBRIDGE_LOGGING__LEVEL", "WARNING")
    yield tmp_path
    # CLI commands replace loguru sinks with one bound to the runner's stderr.
    logger.remove()
    logger.add(sys.stderr)
