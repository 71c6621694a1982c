"""Tests for configuration module."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from market_list.config import (
    Settings,
    SettingsContext,
    get_context_settings,
    get_settings,
    reload_settings,
    set_context_settings,
    set_settings,
)


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self, temp_workspace: Path):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(workspace_dir=temp_workspace)

        assert settings.app_name == "market_list"
        assert settings.tasks_key == "tasks"
        assert settings.delete_mapping == "grouped"
        assert settings.log_level == "warning"
        assert settings.log_format == "console"

    def test_workspace_path_expansion(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(workspace_dir="~/test_workspace")

        assert settings.workspace_dir == Path.home() / "test_workspace"

    def test_defaults_file(self, temp_workspace: Path):
        settings = Settings(workspace_dir=temp_workspace)
        assert settings.defaults_file == temp_workspace / "defaults.json"

    def test_env_prefix(self, temp_workspace: Path):
        env = {
            "MARKET_LIST_DELETE_MAPPING": "flat",
            "MARKET_LIST_TASKS_KEY": "groceries",
            "MARKET_LIST_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(workspace_dir=temp_workspace)

        assert settings.delete_mapping == "flat"
        assert settings.tasks_key == "groceries"
        assert settings.log_level == "debug"

    def test_constructor_beats_env(self, temp_workspace: Path):
        with patch.dict(os.environ, {"MARKET_LIST_TASKS_KEY": "env"}, clear=True):
            settings = Settings(workspace_dir=temp_workspace, tasks_key="init")
        assert settings.tasks_key == "init"

    def test_invalid_delete_mapping(self, temp_workspace: Path):
        with pytest.raises(ValidationError):
            Settings(workspace_dir=temp_workspace, delete_mapping="sideways")

    def test_project_json_config(self, tmp_path: Path, monkeypatch):
        project = tmp_path / "project"
        (project / ".market_list").mkdir(parents=True)
        (project / ".market_list" / "settings.json").write_text(
            json.dumps({"delete_mapping": "flat", "log_format": "json"})
        )
        monkeypatch.chdir(project)

        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(workspace_dir=tmp_path / "ws")

        assert settings.delete_mapping == "flat"
        assert settings.log_format == "json"

    def test_env_beats_project_json(self, tmp_path: Path, monkeypatch):
        project = tmp_path / "project"
        (project / ".market_list").mkdir(parents=True)
        (project / ".market_list" / "settings.json").write_text(
            json.dumps({"tasks_key": "from_json"})
        )
        monkeypatch.chdir(project)

        with patch.dict(os.environ, {"MARKET_LIST_TASKS_KEY": "from_env"}, clear=True):
            settings = Settings(workspace_dir=tmp_path / "ws")

        assert settings.tasks_key == "from_env"


class TestSettingsAccessors:
    """Tests for global and context settings."""

    def test_set_and_get(self, mock_context):
        assert get_settings() is mock_context.settings

        other = Settings(workspace_dir=mock_context.workspace_dir, tasks_key="other")
        set_settings(other)
        assert get_settings() is other

    def test_context_takes_precedence(self, mock_context):
        scoped = Settings(workspace_dir=mock_context.workspace_dir, tasks_key="scoped")

        with SettingsContext(scoped) as s:
            assert s is scoped
            assert get_settings() is scoped
            assert get_context_settings() is scoped

        assert get_settings() is mock_context.settings
        assert get_context_settings() is None

    def test_set_context_settings_token(self, mock_context):
        scoped = Settings(workspace_dir=mock_context.workspace_dir)
        token = set_context_settings(scoped)
        assert get_settings() is scoped
        set_context_settings(None)
        assert get_settings() is mock_context.settings
        del token

    def test_reload_settings(self, mock_context):
        fresh = reload_settings()
        assert fresh is not mock_context.settings
        assert get_settings() is fresh
