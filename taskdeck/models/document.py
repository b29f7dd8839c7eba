"""The persisted aggregate: one JSON document holding everything"""
from typing import List, Optional

from pydantic import Field, field_validator

from taskdeck.models.base import CamelModel
from taskdeck.models.project import Project
from taskdeck.models.stats import CompletionRecord
from taskdeck.models.task import Task


class Document(CamelModel):
    """
    Whole application state.

    `deleted` is a single-slot undo buffer: only the most recently deleted
    task can be restored.
    """
    tasks: List[Task] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    stats: List[CompletionRecord] = Field(default_factory=list)
    deleted: Optional[Task] = None

    @field_validator("tasks", "projects", "stats", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return [] if value is None else value
