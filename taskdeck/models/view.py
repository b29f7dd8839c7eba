"""View/filter models"""
import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field

from taskdeck.models.base import CamelModel
from taskdeck.models.task import Priority, Task, TaskStatus


class ViewMode(str, Enum):
    """Navigation views of the task list"""
    INBOX = "inbox"
    TODAY = "today"
    TOMORROW = "tomorrow"
    WEEK = "week"
    MONTH = "month"
    PROJECT = "project"


class DateFilter(str, Enum):
    """Secondary date filter applied on top of the view bucket"""
    TODAY = "today"
    TOMORROW = "tomorrow"
    WEEK = "week"
    OVERDUE = "overdue"
    NO_DATE = "no_date"


class TaskFilters(CamelModel):
    """Optional filters, combined with AND. None means "all"."""
    search: str = ""
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None
    date_filter: Optional[DateFilter] = None


class TaskGroup(CamelModel):
    """A display group of the filtered list"""
    key: str  # high | medium | low | done
    label: str
    tasks: List[Task] = Field(default_factory=list)


class NavCounts(CamelModel):
    """Open-task badges for the sidebar"""
    inbox: int = 0
    today: int = 0
    tomorrow: int = 0
    week: int = 0
    month: int = 0


class CalendarDay(CamelModel):
    """One day cell of the week view or the month grid"""
    date: datetime.date
    is_current_month: bool = True
    is_today: bool = False
    tasks: List[Task] = Field(default_factory=list)
    done_count: int = 0


class ViewResult(CamelModel):
    """Ordered tasks of a view plus their display groups"""
    view: ViewMode
    tasks: List[Task]
    groups: Optional[List[TaskGroup]] = None  # week view is grouped by day instead
    # task id -> ids of its subtasks that fall in the view; the rest are shown dimmed
    subtasks_in_view: Dict[str, List[str]] = Field(default_factory=dict)
    done_count: int = 0
    total_count: int = 0
