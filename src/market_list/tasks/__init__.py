"""Task list model for the market list.

Provides the task record, the task store and the day-grouping helpers
the store uses to build its grouped view.

Example:
    >>> store = TaskStore(InMemoryKeyValueStore())
    >>> store.add(Task.create("Milk"))
    >>> store.grouped_tasks
    [[Task(name='Milk', ...)]]
"""

from market_list.tasks.grouping import day_key, day_label, group_by_day, locate
from market_list.tasks.models import Task
from market_list.tasks.store import TaskStore

__all__ = [
    "Task",
    "TaskStore",
    "day_key",
    "day_label",
    "group_by_day",
    "locate",
]
