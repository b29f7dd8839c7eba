"""Recurrence calculator for rolling recurring tasks forward"""
from datetime import date, timedelta

from taskdeck.models.recurrence import Recurrence


def add_months(current: date, months: int = 1) -> date:
    """
    Move a date forward by whole calendar months.

    If the target month is shorter than the source day (e.g. 1/31 -> 2/31)
    the day is clamped to the last day of the target month.
    """
    month_index = current.month - 1 + months
    year = current.year + month_index // 12
    month = month_index % 12 + 1

    day = current.day
    while True:
        try:
            return current.replace(year=year, month=month, day=day)
        except ValueError:
            day -= 1
            if day < 1:
                raise ValueError(f"Failed to calculate next month for {current}")


def calculate_next_due_date(due_date: date, recurrence: Recurrence) -> date:
    """
    Calculate the due date of the next occurrence.

    The next date is anchored to the task's own due date, never to the
    completion time: a daily task due three days ago advances by one day.

    Args:
        due_date: due date of the instance being completed
        recurrence: recurrence of the task
            - "daily": +1 day
            - "weekly": +7 days
            - "monthly": +1 calendar month, clamped to month end

    Returns:
        Due date of the next instance

    Raises:
        ValueError: if the task does not recur
    """
    if recurrence == Recurrence.DAILY:
        return due_date + timedelta(days=1)

    if recurrence == Recurrence.WEEKLY:
        return due_date + timedelta(weeks=1)

    if recurrence == Recurrence.MONTHLY:
        return add_months(due_date, 1)

    raise ValueError(f"Task with recurrence '{recurrence}' has no next occurrence")
