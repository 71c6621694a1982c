"""Market List - a single-screen to-do list grouped by day.

This package provides:

- Task records and a task store that persists the whole list to one
  key-value slot on every change
- Grouping of tasks by creation day, most recent day first
- Pluggable key-value backends (in-memory, JSON defaults file)
- A terminal front end built on rich and prompt_toolkit
"""

from market_list.config import (
    Settings,
    SettingsContext,
    get_settings,
    reload_settings,
    set_settings,
)
from market_list.persistence import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from market_list.tasks import Task, TaskStore, day_label, group_by_day

__all__ = [
    # Tasks
    "Task",
    "TaskStore",
    "group_by_day",
    "day_label",
    # Persistence
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Settings
    "Settings",
    "SettingsContext",
    "get_settings",
    "set_settings",
    "reload_settings",
]

__version__ = "0.1.0"
