"""
Root conftest.py for tasklist tests.

This file provides:
1. Markers applied by test location
2. Shared fixtures for task files and stores
3. Logging isolation between tests
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from tasklist.logging import ROOT_LOGGER_NAME
from tasklist.models import Task
from tasklist.persistence import JsonTaskFile
from tasklist.store import TaskStore

# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        norm = str(item.fspath).replace("\\", "/")

        if "/tests/unit/cli/" in norm:
            item.add_marker(pytest.mark.cli)
        if "persistence" in norm:
            item.add_marker(pytest.mark.persistence)


# =============================================================================
# LOGGING ISOLATION
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_tasklist_logging():
    """Drop handlers installed by configure_logging during a test."""
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if getattr(handler, "_tasklist_handler", False):
            root.removeHandler(handler)
    root.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _clean_tasklist_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the developer's TASKLIST_* settings out of tests."""
    for name in ("TASKLIST_FILE", "TASKLIST_LOG_LEVEL", "TASKLIST_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    # Skip .env discovery
    monkeypatch.setenv("TASKLIST_ENV_LOADED", "1")


# =============================================================================
# TASK FILE FIXTURES
# =============================================================================


@pytest.fixture
def task_path(tmp_path: Path) -> Path:
    """Path for a task file that does not exist yet."""
    return tmp_path / "todos.json"


@pytest.fixture
def task_file(task_path: Path) -> JsonTaskFile:
    return JsonTaskFile(task_path)


@pytest.fixture
def store(task_file: JsonTaskFile) -> TaskStore:
    """Empty store persisted under tmp_path."""
    return TaskStore(task_file)


@pytest.fixture
def sample_tasks() -> list[Task]:
    return [
        Task(id=0, text="buy milk", completed=True),
        Task(id=3, text="walk dog"),
        Task(id=7, text="café ☕ «quoted»", completed=False),
    ]


@pytest.fixture
def write_json(task_path: Path):
    """Write arbitrary JSON (or raw text) to the task file."""

    def _write(data: Any, raw: bool = False) -> Path:
        task_path.write_text(data if raw else json.dumps(data), encoding="utf-8")
        return task_path

    return _write
