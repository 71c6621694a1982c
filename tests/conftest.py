"""Shared test fixtures for market-list tests.

Provides:
- MockContext for isolating tests from global settings
- In-memory key-value store and task store fixtures
- Fixed dates spanning three calendar days
"""

import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

from market_list.config import (
    Settings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from market_list.persistence import InMemoryKeyValueStore
from market_list.tasks import Task, TaskStore

DAY1_MORNING = datetime(2024, 3, 10, 10, 0)
DAY1_AFTERNOON = datetime(2024, 3, 10, 14, 0)
DAY2_MORNING = datetime(2024, 3, 11, 9, 0)
DAY3_EVENING = datetime(2024, 3, 12, 21, 30)


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Resetting global settings singleton
    - Providing a temporary workspace directory
    - Clearing MARKET_LIST_* environment variables

    Usage:
        with MockContext(delete_mapping="flat") as ctx:
            settings = ctx.settings
            workspace = ctx.workspace_dir
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: Settings | None = None
        self._env_patch = None

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        workspace_dir = Path(self._temp_dir.name)

        clean_env = {k: v for k, v in os.environ.items() if not k.startswith("MARKET_LIST_")}
        self._env_patch = patch.dict(os.environ, clean_env, clear=True)
        self._env_patch.start()

        self._settings = Settings(workspace_dir=workspace_dir, **self._settings_kwargs)
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        set_context_settings(None)
        if self._env_patch is not None:
            self._env_patch.stop()
        reload_settings()
        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def workspace_dir(self) -> Path:
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated settings context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Fixture providing a temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True)
    return workspace


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv: InMemoryKeyValueStore) -> TaskStore:
    """Empty task store over the in-memory key-value store."""
    return TaskStore(kv)


@pytest.fixture
def market_store(store: TaskStore) -> TaskStore:
    """Store holding Milk and Eggs on day 1 and Bread on day 2."""
    store.add(Task.create("Milk", DAY1_MORNING))
    store.add(Task.create("Eggs", DAY1_AFTERNOON))
    store.add(Task.create("Bread", DAY2_MORNING))
    return store
