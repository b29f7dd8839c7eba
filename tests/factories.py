# tests/factories.py

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from taskdeck.models import Task
from taskdeck.models.task import Priority, TaskStatus

# Wednesday 2024-06-12, 10:00 UTC
NOW = datetime(2024, 6, 12, 10, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def make_task(
    id: str,
    *,
    title: str | None = None,
    due: date | None = None,
    priority: Priority = Priority.MEDIUM,
    status: TaskStatus = TaskStatus.TODO,
    order: int = 0,
    **fields,
) -> Task:
    """
    Stored task with sensible defaults.

    completed_at follows the status so the invariant holds for fixtures too.
    """
    created = NOW - timedelta(days=1)
    return Task(
        id=id,
        title=title or f"task {id}",
        due_date=due,
        priority=priority,
        status=status,
        order=order,
        completed_at=NOW if status == TaskStatus.DONE else None,
        created_at=created,
        updated_at=created,
        **fields,
    )
