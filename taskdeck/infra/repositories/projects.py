"""Project repository"""
import logging
from datetime import datetime
from typing import Optional, Tuple, List

from taskdeck.models.document import Document
from taskdeck.models.project import Project
from taskdeck.models.task import Task

from .base import BaseRepository
from .tasks import TaskRepository

logger = logging.getLogger(__name__)


class ProjectRepository(BaseRepository[Project]):
    """Repository for project operations"""

    def __init__(self, document: Document):
        super().__init__(document, "projects", "Project")

    def delete_with_references(self, id: Optional[str], now: datetime) -> Tuple[Project, List[Task]]:
        """
        Remove a project and clear `project_id` on the tasks referencing it.

        Tasks are kept; only the reference is nulled.

        Returns:
            (removed project, tasks whose reference was cleared)
        """
        removed = self.delete(id)
        cleared = TaskRepository(self._document).clear_project(removed.id, now)
        return removed, cleared
