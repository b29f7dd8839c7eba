"""Task domain model"""
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Dict, List, Optional

from pydantic import BeforeValidator, Field, field_serializer, field_validator

from taskdeck.models.base import CamelModel
from taskdeck.models.recurrence import Recurrence, RecurrenceField


class Priority(str, Enum):
    """Task priority"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    """Task lifecycle status"""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


# high sorts first
PRIORITY_RANK: Dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}

PRIORITY_LABELS: Dict[Priority, str] = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
}

STATUS_LABELS: Dict[TaskStatus, str] = {
    TaskStatus.TODO: "To do",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.DONE: "Done",
}


def _empty_to_none(value):
    if value == "":
        return None
    return value


# legacy documents store "no date" as an empty string
OptionalDate = Annotated[Optional[date], BeforeValidator(_empty_to_none)]


class SubtaskCreate(CamelModel):
    """Subtask fields accepted on creation"""
    id: Optional[str] = None
    title: str
    completed: bool = False
    due_date: OptionalDate = None
    priority: Optional[Priority] = None

    @field_validator("title")
    @classmethod
    def title_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("subtask title is required")
        return value


class Subtask(CamelModel):
    """A checklist item inside a task"""
    id: str
    title: str
    completed: bool = False
    due_date: OptionalDate = None
    priority: Optional[Priority] = None  # falls back to the parent's
    order: Optional[int] = None

    def effective_priority(self, parent: "Task") -> Priority:
        return self.priority or parent.priority


class TaskBase(CamelModel):
    """Task fields shared by creation and the stored record"""
    title: str
    description: str = ""
    project_id: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    due_date: OptionalDate = None
    recurrence: RecurrenceField = Recurrence.NONE

    @field_validator("description", mode="before")
    @classmethod
    def none_description_to_empty(cls, value):
        return "" if value is None else value

    @field_serializer("due_date")
    def serialize_due_date(self, due_date: Optional[date]) -> str:
        """An undated task is stored with an empty dueDate"""
        return due_date.isoformat() if due_date else ""

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE


class TaskCreate(TaskBase):
    """Task creation model (full form)"""
    id: Optional[str] = None
    subtasks: List[SubtaskCreate] = Field(default_factory=list)
    completed_at: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def title_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title is required")
        return value


class Task(TaskBase):
    """Complete task record as persisted"""
    id: str
    subtasks: List[Subtask] = Field(default_factory=list)
    order: int = 0
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("order", mode="before")
    @classmethod
    def default_legacy_order(cls, value):
        return 0 if value is None else value

    @field_validator("subtasks", mode="before")
    @classmethod
    def default_legacy_subtasks(cls, value):
        return [] if value is None else value

    def sorted_subtasks(self) -> List[Subtask]:
        """Subtasks in manual order (missing order counts as 0)"""
        return sorted(self.subtasks, key=lambda s: s.order or 0)
