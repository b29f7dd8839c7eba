"""Task repository"""
import logging
from datetime import datetime
from typing import List, Optional

from taskdeck.models.document import Document
from taskdeck.models.task import Task

from .base import BaseRepository

logger = logging.getLogger(__name__)


class TaskRepository(BaseRepository[Task]):
    """Repository for task operations"""

    def __init__(self, document: Document):
        super().__init__(document, "tasks", "Task")

    def create(self, item: Task) -> Task:
        """Append a task at the end of the manual order"""
        item.order = self.count()
        return super().create(item)

    def delete(self, id: Optional[str]) -> Task:
        """
        Remove a task and keep it in the single-slot undo buffer.

        Any task already in the buffer is overwritten and can no longer be
        restored.
        """
        removed = super().delete(id)
        if self._document.deleted is not None:
            logger.info(f"Undo buffer dropped task {self._document.deleted.id}")
        self._document.deleted = removed
        return removed

    def restore_deleted(self) -> Optional[Task]:
        """
        Pop the undo buffer back into the list, placed at the end.

        Returns:
            The restored task, or None when there is nothing to restore
        """
        restored = self._document.deleted
        if restored is None:
            return None

        self._document.deleted = None
        if self.find_by_id(restored.id) is not None:
            # an identical id was re-created meanwhile; keep the live one
            logger.warning(f"Task {restored.id} already present, discarding buffered copy")
            return None

        return self.create(restored)

    def find_by_project(self, project_id: str) -> List[Task]:
        return [t for t in self._items if t.project_id == project_id]

    def clear_project(self, project_id: str, now: datetime) -> List[Task]:
        """Null the project reference on every task pointing at it (no cascade)"""
        cleared = self.find_by_project(project_id)
        for task in cleared:
            task.project_id = None
            task.updated_at = now
        return cleared
