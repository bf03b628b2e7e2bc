"""Tests for TaskListConfig."""

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.config import TaskListConfig
from tasklist.errors import ConfigurationError


class TestFromEnv:
    """Tests for TaskListConfig.from_env."""

    def test_defaults(self) -> None:
        config = TaskListConfig.from_env({})

        assert config.task_file == Path("todos.json")
        assert config.log_level == "WARNING"
        assert config.log_format == "human"

    def test_reads_variables(self) -> None:
        config = TaskListConfig.from_env(
            {
                "TASKLIST_FILE": "~/lists/home.json",
                "TASKLIST_LOG_LEVEL": "debug",
                "TASKLIST_LOG_FORMAT": " JSON ",
            }
        )

        assert config.task_file == Path("~/lists/home.json")
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKLIST_FILE", "work.json")

        assert TaskListConfig.from_env().task_file == Path("work.json")

    def test_invalid_level(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            TaskListConfig.from_env({"TASKLIST_LOG_LEVEL": "LOUD"})

        assert exc_info.value.config_key == "TASKLIST_LOG_LEVEL"
        assert "DEBUG" in exc_info.value.hint

    def test_invalid_format(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            TaskListConfig.from_env({"TASKLIST_LOG_FORMAT": "xml"})

        assert exc_info.value.config_key == "TASKLIST_LOG_FORMAT"

    def test_empty_file_variable(self) -> None:
        with pytest.raises(ConfigurationError, match="set but empty"):
            TaskListConfig.from_env({"TASKLIST_FILE": "  "})


class TestOverrides:
    def test_none_keeps_value(self) -> None:
        config = TaskListConfig(task_file=Path("a.json"))

        assert config.with_overrides(task_file=None).task_file == Path("a.json")

    def test_override_applies(self) -> None:
        config = TaskListConfig().with_overrides(task_file=Path("b.json"), log_level="INFO")

        assert config.task_file == Path("b.json")
        assert config.log_level == "INFO"

    def test_to_dict(self) -> None:
        assert TaskListConfig().to_dict() == {
            "task_file": "todos.json",
            "log_level": "WARNING",
            "log_format": "human",
        }
