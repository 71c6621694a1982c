"""Task record for the market list."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def new_task_id() -> str:
    """Return a fresh, never reused task identifier."""
    return str(uuid.uuid4())


@dataclass
class Task:
    """A single list entry.

    Equality compares every field (id, name, completion flag and date),
    so two records with the same id but a different completion flag are
    not equal. ``date`` is the creation time and never changes; only
    ``is_completed`` is flipped after creation.
    """

    name: str
    date: datetime
    is_completed: bool = False
    id: str = field(default_factory=new_task_id)

    @classmethod
    def create(cls, name: str, date: datetime | None = None) -> "Task":
        """Create a new, not yet completed task dated now unless given."""
        return cls(name=name, date=date or datetime.now())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "isCompleted": self.is_completed,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a task from its persisted form.

        Raises:
            KeyError: If a field is missing.
            TypeError: If a field has the wrong type.
            ValueError: If the date is not ISO-8601.
        """
        task_id = data["id"]
        name = data["name"]
        is_completed = data["isCompleted"]
        raw_date = data["date"]
        if not isinstance(task_id, str) or not isinstance(name, str):
            raise TypeError("id and name must be strings")
        if not isinstance(is_completed, bool):
            raise TypeError("isCompleted must be a boolean")
        if not isinstance(raw_date, str):
            raise TypeError("date must be an ISO-8601 string")
        return cls(
            id=task_id,
            name=name,
            is_completed=is_completed,
            date=datetime.fromisoformat(raw_date),
        )
