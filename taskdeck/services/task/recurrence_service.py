"""
Recurrence rollover

Completing a recurring task never moves it into the future: the done
instance stays as it is and a sibling task is created for the next
occurrence.
"""

import logging
from datetime import datetime

from taskdeck.models.base import generate_id
from taskdeck.models.recurrence import Recurrence
from taskdeck.models.task import Task, TaskStatus
from taskdeck.utils.recurrence_calculator import calculate_next_due_date
from taskdeck.utils.dates import to_local_date

logger = logging.getLogger(__name__)


def is_recurring(task: Task) -> bool:
    return task.recurrence != Recurrence.NONE


def roll_forward(task: Task, now: datetime) -> Task:
    """
    Build the next occurrence of a recurring task.

    The next due date is computed from the task's own due date, so a daily
    task due three days ago comes back due two days ago. An undated
    recurring task is anchored to the completion day instead.

    Args:
        task: the instance being completed
        now: completion time

    Returns:
        A new, not yet stored task: fresh id and timestamps, status todo,
        every subtask reset to incomplete

    Raises:
        ValueError: if the task does not recur
    """
    anchor = task.due_date or to_local_date(now, now.tzinfo)
    next_due = calculate_next_due_date(anchor, task.recurrence)

    next_task = task.model_copy(
        update={
            "id": generate_id(),
            "status": TaskStatus.TODO,
            "completed_at": None,
            "due_date": next_due,
            "subtasks": [s.model_copy(update={"completed": False}) for s in task.subtasks],
            "created_at": now,
            "updated_at": now,
        },
        deep=True,
    )
    logger.info(f"Rolled {task.recurrence.value} task {task.id} forward to {next_task.id} due {next_due}")
    return next_task
