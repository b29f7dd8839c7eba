"""
View/filter engine.

Pure functions that turn the full task list into what a view displays:
bucket by time horizon, apply the search/priority/status/date filters,
sort, and group. Every function takes `today` explicitly and has no side
effects, so the same input on the same day always yields the same output.
"""

import calendar
import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from taskdeck.models.task import PRIORITY_RANK, Priority, Subtask, Task, TaskStatus
from taskdeck.models.view import (
    CalendarDay,
    DateFilter,
    NavCounts,
    TaskFilters,
    TaskGroup,
    ViewMode,
    ViewResult,
)
from taskdeck.utils.dates import is_same_month, week_dates, week_start

logger = logging.getLogger(__name__)


GROUP_LABELS: Dict[str, str] = {
    "high": "High priority",
    "medium": "Medium priority",
    "low": "Low priority",
    "done": "Done",
}


# ---- date buckets ----

def is_today(value: Optional[date], today: date) -> bool:
    return value is not None and value == today


def is_tomorrow(value: Optional[date], today: date) -> bool:
    return value is not None and value == today + timedelta(days=1)


def is_this_week(value: Optional[date], today: date) -> bool:
    if value is None:
        return False
    monday = week_start(today)
    return monday <= value <= monday + timedelta(days=6)


def is_this_month(value: Optional[date], today: date) -> bool:
    return value is not None and is_same_month(value, today)


def is_overdue(task: Task, today: date) -> bool:
    """Due strictly before today and not done"""
    return task.due_date is not None and task.due_date < today and not task.is_done


_BUCKETS = {
    ViewMode.TODAY: is_today,
    ViewMode.TOMORROW: is_tomorrow,
    ViewMode.WEEK: is_this_week,
    ViewMode.MONTH: is_this_month,
}


def _date_in_bucket(task: Task, predicate, today: date) -> bool:
    """The task's own due date, or any incomplete subtask's, satisfies the predicate"""
    if predicate(task.due_date, today):
        return True
    return any(
        not s.completed and s.due_date is not None and predicate(s.due_date, today)
        for s in task.subtasks
    )


def matches_view(
    task: Task,
    view: ViewMode,
    today: date,
    project_id: Optional[str] = None,
) -> bool:
    """
    Whether a task belongs to a navigation view.

    - inbox: every task
    - project: tasks of the selected project (no project selected: every task)
    - today/tomorrow/week/month: own due date or an incomplete subtask's
      due date falls in the bucket
    """
    if view == ViewMode.INBOX:
        return True

    if view == ViewMode.PROJECT:
        if project_id is None:
            return True
        return task.project_id == project_id

    return _date_in_bucket(task, _BUCKETS[view], today)


def subtask_matches_view(subtask: Subtask, view: ViewMode, today: date) -> bool:
    """Strict per-subtask match: in dated views a subtask without a date does not match"""
    if view in (ViewMode.INBOX, ViewMode.PROJECT):
        return True
    return _BUCKETS[view](subtask.due_date, today)


# ---- secondary filters ----

def matches_search(task: Task, query: str) -> bool:
    """Case-insensitive substring match on title, description or any subtask title"""
    q = query.strip().lower()
    if not q:
        return True
    if q in task.title.lower() or q in task.description.lower():
        return True
    return any(q in s.title.lower() for s in task.subtasks)


def matches_date_filter(task: Task, date_filter: DateFilter, today: date) -> bool:
    if date_filter == DateFilter.TODAY:
        return is_today(task.due_date, today)
    if date_filter == DateFilter.TOMORROW:
        return is_tomorrow(task.due_date, today)
    if date_filter == DateFilter.WEEK:
        return is_this_week(task.due_date, today)
    if date_filter == DateFilter.OVERDUE:
        return is_overdue(task, today)
    if date_filter == DateFilter.NO_DATE:
        return task.due_date is None
    logger.warning(f"Unknown date filter '{date_filter}', ignoring")
    return True


def matches_filters(task: Task, filters: TaskFilters, today: date) -> bool:
    if filters.search and not matches_search(task, filters.search):
        return False
    if filters.priority is not None and task.priority != filters.priority:
        return False
    if filters.status is not None and task.status != filters.status:
        return False
    if filters.date_filter is not None and not matches_date_filter(task, filters.date_filter, today):
        return False
    return True


# ---- ordering / grouping ----

def sort_key(task: Task):
    """
    Done tasks last, then manual order, then priority (high first),
    then due date (undated after dated).
    """
    return (
        task.is_done,
        task.order,
        PRIORITY_RANK[task.priority],
        task.due_date is None,
        task.due_date or date.min,
    )


def sort_tasks(tasks: Iterable[Task]) -> List[Task]:
    return sorted(tasks, key=sort_key)


def filter_tasks(
    tasks: Iterable[Task],
    view: ViewMode,
    today: date,
    project_id: Optional[str] = None,
    filters: Optional[TaskFilters] = None,
) -> List[Task]:
    """
    Ordered tasks to display for a view.

    Args:
        tasks: full task list
        view: navigation view
        today: the caller's current calendar date
        project_id: selected project (project view only)
        filters: optional search/priority/status/date filters

    Returns:
        Filtered tasks in display order
    """
    filters = filters or TaskFilters()
    selected = [
        t for t in tasks
        if matches_view(t, view, today, project_id) and matches_filters(t, filters, today)
    ]
    return sort_tasks(selected)


def select_for_calendar(
    tasks: Iterable[Task],
    today: date,
    project_id: Optional[str] = None,
    filters: Optional[TaskFilters] = None,
) -> List[Task]:
    """
    Tasks handed to the week and month calendars.

    Only the project and the secondary filters apply here; the calendar
    cells do their own per-day bucketing.
    """
    return filter_tasks(tasks, ViewMode.PROJECT, today, project_id, filters)


def group_tasks(tasks: Iterable[Task]) -> List[TaskGroup]:
    """
    Group an already-sorted list for display.

    Open tasks go into high/medium/low groups in that order; done tasks
    form a trailing "done" group. Empty groups are omitted.
    """
    buckets: Dict[str, List[Task]] = {p.value: [] for p in (Priority.HIGH, Priority.MEDIUM, Priority.LOW)}
    done: List[Task] = []

    for task in tasks:
        if task.is_done:
            done.append(task)
        else:
            buckets[task.priority.value].append(task)

    groups = [
        TaskGroup(key=key, label=GROUP_LABELS[key], tasks=items)
        for key, items in buckets.items()
    ]
    if done:
        groups.append(TaskGroup(key="done", label=GROUP_LABELS["done"], tasks=done))

    return [g for g in groups if g.tasks]


def build_view(
    tasks: Iterable[Task],
    view: ViewMode,
    today: date,
    project_id: Optional[str] = None,
    filters: Optional[TaskFilters] = None,
) -> ViewResult:
    """Filtered, ordered and grouped tasks of a view (week view is not grouped)"""
    selected = filter_tasks(tasks, view, today, project_id, filters)
    done_count = sum(1 for t in selected if t.is_done)
    return ViewResult(
        view=view,
        tasks=selected,
        groups=None if view == ViewMode.WEEK else group_tasks(selected),
        subtasks_in_view={
            t.id: [s.id for s in t.subtasks if subtask_matches_view(s, view, today)]
            for t in selected if t.subtasks
        },
        done_count=done_count,
        total_count=len(selected),
    )


# ---- badges ----

def nav_counts(tasks: Iterable[Task], today: date) -> NavCounts:
    """Open (non-done) tasks per navigation view"""
    open_tasks = [t for t in tasks if t.status != TaskStatus.DONE]
    return NavCounts(
        inbox=len(open_tasks),
        today=sum(1 for t in open_tasks if matches_view(t, ViewMode.TODAY, today)),
        tomorrow=sum(1 for t in open_tasks if matches_view(t, ViewMode.TOMORROW, today)),
        week=sum(1 for t in open_tasks if matches_view(t, ViewMode.WEEK, today)),
        month=sum(1 for t in open_tasks if matches_view(t, ViewMode.MONTH, today)),
    )


def project_counts(tasks: Iterable[Task]) -> Dict[str, int]:
    """Open tasks per project id"""
    counts: Dict[str, int] = {}
    for task in tasks:
        if task.project_id is None or task.is_done:
            continue
        counts[task.project_id] = counts.get(task.project_id, 0) + 1
    return counts


# ---- calendar views ----

def _due_on(task: Task, day: date) -> bool:
    return task.due_date == day or any(
        not s.completed and s.due_date == day for s in task.subtasks
    )


def group_by_day(tasks: Iterable[Task], today: date) -> List[CalendarDay]:
    """
    Week view: one cell per day Monday..Sunday of the current week.

    A task lands on a day if it is due that day or has an incomplete
    subtask due that day (so it may appear on several days).
    """
    tasks = list(tasks)
    days = []
    for day in week_dates(today):
        day_tasks = sort_tasks(t for t in tasks if _due_on(t, day))
        days.append(CalendarDay(
            date=day,
            is_today=day == today,
            tasks=day_tasks,
            done_count=sum(1 for t in day_tasks if t.is_done),
        ))
    return days


def month_grid(tasks: Iterable[Task], year: int, month: int, today: date) -> List[CalendarDay]:
    """
    Month view: Monday-first calendar grid of the month.

    Leading and trailing cells from the adjacent months pad the grid to
    whole weeks. Each cell holds the tasks whose own due date is that day.
    """
    tasks = list(tasks)
    by_date: Dict[date, List[Task]] = {}
    for task in tasks:
        if task.due_date is not None:
            by_date.setdefault(task.due_date, []).append(task)

    cells = []
    for week in calendar.Calendar(firstweekday=calendar.MONDAY).monthdatescalendar(year, month):
        for day in week:
            day_tasks = sort_tasks(by_date.get(day, []))
            cells.append(CalendarDay(
                date=day,
                is_current_month=day.month == month,
                is_today=day == today,
                tasks=day_tasks,
                done_count=sum(1 for t in day_tasks if t.is_done),
            ))
    return cells
