"""Domain models for the application"""
from .base import CamelModel, generate_id
from .recurrence import Recurrence, RECURRENCE_LABELS
from .task import (
    Priority, TaskStatus, Subtask, SubtaskCreate, Task, TaskCreate,
    PRIORITY_RANK, PRIORITY_LABELS, STATUS_LABELS,
)
from .project import Project, ProjectCreate, PROJECT_COLORS, PROJECT_ICONS
from .stats import CompletionRecord, DayCount, StatsSummary
from .view import ViewMode, DateFilter, TaskFilters, TaskGroup, NavCounts, CalendarDay, ViewResult
from .document import Document

__all__ = [
    'CamelModel', 'generate_id',
    'Recurrence', 'RECURRENCE_LABELS',
    'Priority', 'TaskStatus', 'Subtask', 'SubtaskCreate', 'Task', 'TaskCreate',
    'PRIORITY_RANK', 'PRIORITY_LABELS', 'STATUS_LABELS',
    'Project', 'ProjectCreate', 'PROJECT_COLORS', 'PROJECT_ICONS',
    'CompletionRecord', 'DayCount', 'StatsSummary',
    'ViewMode', 'DateFilter', 'TaskFilters', 'TaskGroup', 'NavCounts', 'CalendarDay', 'ViewResult',
    'Document',
]
