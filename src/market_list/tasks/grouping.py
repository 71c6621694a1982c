"""Day grouping for the task list.

Tasks are bucketed by the local calendar day of their creation date.
Buckets come back newest day first; within a bucket the tasks keep the
order they have in the flat list.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from market_list.tasks.models import Task


def day_key(when: datetime) -> date:
    """Local calendar day of a timestamp.

    Naive datetimes are taken as local time; aware ones are converted.
    """
    if when.tzinfo is None:
        return when.date()
    return when.astimezone().date()


def group_by_day(tasks: Iterable[Task]) -> list[list[Task]]:
    """Partition tasks into per-day buckets, most recent day first.

    Example:
        >>> group_by_day([milk_day1, bread_day2, eggs_day1])
        [[bread_day2], [milk_day1, eggs_day1]]
    """
    buckets: dict[date, list[Task]] = {}
    for task in tasks:
        buckets.setdefault(day_key(task.date), []).append(task)
    return [buckets[day] for day in sorted(buckets, reverse=True)]


def day_label(day: date, today: date | None = None) -> str:
    """Section header for a day: "Today", "Yesterday" or e.g. "Oct 18, 2026"."""
    today = today or date.today()
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return f"{day:%b} {day.day}, {day.year}"


def locate(grouped: list[list[Task]], section: int, row: int) -> Task | None:
    """Return the task at a section/row position, or None if out of range."""
    if not 0 <= section < len(grouped):
        return None
    bucket = grouped[section]
    if not 0 <= row < len(bucket):
        return None
    return bucket[row]
