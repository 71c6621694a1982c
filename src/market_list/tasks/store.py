"""Task store: the market list's single source of truth.

Holds the flat, insertion-ordered list of tasks together with a
grouped-by-day view that is rebuilt after every mutation. The whole list
is written to one key-value slot on every change and read back once at
construction. Persistence is best effort: encode and decode failures are
logged and never raised to the caller.
"""

import json
from collections.abc import Callable

from market_list.config import Settings
from market_list.logging import Loggers
from market_list.persistence.kv import JsonFileKeyValueStore, KeyValueStore
from market_list.tasks.grouping import group_by_day, locate
from market_list.tasks.models import Task

logger = Loggers.store()

Listener = Callable[[], None]


class TaskStore:
    """In-memory task list persisted to a key-value slot.

    Mutations run synchronously and leave ``tasks`` and ``grouped_tasks``
    consistent before returning. Subscribed listeners are called after
    each mutation that rebuilds the grouping.

    Example:
        >>> store = TaskStore(InMemoryKeyValueStore())
        >>> store.add(Task.create("Milk"))
        >>> store.toggle_completion(store.tasks[0])
        True
        >>> store.grouped_tasks[0][0].is_completed
        True
    """

    def __init__(self, storage: KeyValueStore, key: str = "tasks") -> None:
        self._storage = storage
        self._key = key
        self._tasks: list[Task] = []
        self._grouped: list[list[Task]] = []
        self._listeners: list[Listener] = []
        self.load()

    @classmethod
    def from_settings(cls, settings: Settings) -> "TaskStore":
        """Open the store backed by the configured defaults file."""
        return cls(JsonFileKeyValueStore(settings.defaults_file), key=settings.tasks_key)

    @property
    def key(self) -> str:
        return self._key

    @property
    def tasks(self) -> list[Task]:
        """Flat task list in insertion order."""
        return list(self._tasks)

    @property
    def grouped_tasks(self) -> list[list[Task]]:
        """Tasks bucketed by creation day, most recent day first."""
        return [list(bucket) for bucket in self._grouped]

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- change notification ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener after every mutation.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("task_listener_failed", listener=repr(listener))

    def _changed(self) -> None:
        self.save()
        self._regroup()
        self._notify()

    def _regroup(self) -> None:
        self._grouped = group_by_day(self._tasks)

    def _index_of(self, task: Task) -> int | None:
        for index, candidate in enumerate(self._tasks):
            if candidate == task:
                return index
        return None

    # ---- mutations ----

    def add(self, task: Task) -> None:
        """Append a task. Duplicate names are allowed."""
        self._tasks.append(task)
        logger.debug("task_added", task_id=task.id)
        self._changed()

    def remove(self, task: Task) -> bool:
        """Remove the first task equal to ``task``.

        Returns:
            True if removed, False if no equal task exists (nothing is saved).
        """
        index = self._index_of(task)
        if index is None:
            return False
        del self._tasks[index]
        logger.debug("task_removed", task_id=task.id)
        self._changed()
        return True

    def toggle_completion(self, task: Task) -> bool:
        """Flip the completion flag of the first task equal to ``task``.

        The list is saved and regrouped even when no task matches.

        Returns:
            True if a flag was flipped.
        """
        index = self._index_of(task)
        if index is not None:
            match = self._tasks[index]
            match.is_completed = not match.is_completed
            logger.debug("task_toggled", task_id=match.id, completed=match.is_completed)
        self._changed()
        return index is not None

    def clear(self) -> None:
        """Remove every task."""
        self._tasks.clear()
        logger.debug("tasks_cleared")
        self._changed()

    def remove_at(self, index: int) -> bool:
        """Remove the task at a position in the flat list.

        This addresses ``tasks``, not ``grouped_tasks``; a row number taken
        from the grouped view only lines up while a single day exists.
        """
        if not 0 <= index < len(self._tasks):
            return False
        return self.remove(self._tasks[index])

    def remove_in_section(self, section: int, row: int) -> bool:
        """Remove the task shown at ``row`` of day ``section``."""
        task = locate(self._grouped, section, row)
        if task is None:
            return False
        return self.remove(task)

    # ---- persistence ----

    def save(self) -> bool:
        """Write the whole list to the storage slot.

        Returns:
            True on success. Failures are logged, never raised.
        """
        try:
            payload = json.dumps([task.to_dict() for task in self._tasks]).encode("utf-8")
            self._storage.set(self._key, payload)
        except (TypeError, ValueError, OSError) as e:
            logger.error("tasks_save_failed", key=self._key, error=str(e))
            return False
        logger.debug("tasks_saved", key=self._key, count=len(self._tasks))
        return True

    def load(self) -> bool:
        """Replace the list with the contents of the storage slot.

        An absent slot leaves the list untouched. A slot that does not
        decode is logged and also leaves the list untouched.

        Returns:
            True if tasks were read from the slot.
        """
        loaded = False
        data = self._storage.get(self._key)
        if data is not None:
            try:
                raw = json.loads(data)
                if not isinstance(raw, list):
                    raise TypeError(f"expected a list, got {type(raw).__name__}")
                tasks = [Task.from_dict(item) for item in raw]
                if len({task.id for task in tasks}) != len(tasks):
                    raise ValueError("duplicate task ids")
                self._tasks = tasks
                loaded = True
                logger.debug("tasks_loaded", key=self._key, count=len(self._tasks))
            except (ValueError, KeyError, TypeError, RecursionError) as e:
                logger.warning("tasks_load_failed", key=self._key, error=str(e))
        self._regroup()
        return loaded
