"""
Task Service

Handles business logic for tasks including:
- CRUD operations and the single-slot undo buffer
- Status transitions (completion timestamps, stats, recurrence rollover)
- Bulk actions and manual reordering
- Subtask operations
"""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, List, Optional

from taskdeck.config import STATS_RETENTION_DAYS
from taskdeck.db.session import DocumentStore
from taskdeck.errors import NotFoundError, ValidationError
from taskdeck.infra.repositories import StatsRepository, TaskRepository
from taskdeck.models.base import generate_id
from taskdeck.models.document import Document
from taskdeck.models.recurrence import Recurrence
from taskdeck.models.task import Priority, Subtask, SubtaskCreate, Task, TaskCreate, TaskStatus
from taskdeck.services.task.recurrence_service import is_recurring, roll_forward
from taskdeck.utils.dates import local_now, to_local_date

logger = logging.getLogger(__name__)


class BulkAction(str, Enum):
    """Actions applicable to a selection of tasks"""
    SET_PRIORITY = "set_priority"
    SET_DUE_DATE = "set_due_date"
    SET_PROJECT = "set_project"
    DELETE = "delete"


class TaskService:
    """Service for managing tasks"""

    def __init__(self, store: DocumentStore, retention_days: int = STATS_RETENTION_DAYS):
        self.store = store
        self.retention_days = retention_days

    # ---- helpers ----

    def _stats(self, doc: Document) -> StatsRepository:
        return StatsRepository(doc, self.retention_days)

    def _apply_transition(
        self,
        doc: Document,
        task: Task,
        previous: TaskStatus,
        now: datetime,
    ) -> Optional[Task]:
        """
        Apply the side effects of moving `task` from `previous` to its
        current status, and keep `completed_at` set iff the task is done.

        Returns:
            The next occurrence when a recurring task was just completed
        """
        today = to_local_date(now, now.tzinfo)
        was_done = previous == TaskStatus.DONE

        if task.is_done and not was_done:
            task.completed_at = now
            self._stats(doc).record(today)
            if is_recurring(task):
                return TaskRepository(doc).create(roll_forward(task, now))
            return None

        if was_done and not task.is_done:
            task.completed_at = None
            self._stats(doc).decrement(today)
            return None

        if task.is_done and task.completed_at is None:
            task.completed_at = now
        elif not task.is_done:
            task.completed_at = None
        return None

    def _change_status(self, doc: Document, task: Task, status: TaskStatus, now: datetime) -> None:
        previous = task.status
        if previous == status:
            return

        task.status = status
        task.updated_at = now
        next_task = self._apply_transition(doc, task, previous, now)

        logger.info(f"Task {task.id} status {previous.value} -> {status.value}")
        if next_task is not None:
            logger.info(f"Created next occurrence {next_task.id} due {next_task.due_date}")

    @staticmethod
    def _find_subtask(task: Task, subtask_id: str) -> Subtask:
        for subtask in task.subtasks:
            if subtask.id == subtask_id:
                return subtask
        raise NotFoundError("Subtask", subtask_id)

    # ---- tasks ----

    async def list_tasks(self) -> List[Task]:
        """All tasks in stored order"""
        return self.store.load().tasks

    async def create_task(self, data: TaskCreate, now: Optional[datetime] = None) -> List[Task]:
        """
        Create a task from the full form.

        Args:
            data: task fields; id and timestamps are filled in when absent
            now: creation time (defaults to local now)

        Returns:
            The task list after the write
        """
        now = now or local_now()
        task = Task(
            id=data.id or generate_id(),
            title=data.title,
            description=data.description,
            project_id=data.project_id,
            priority=data.priority,
            status=data.status,
            due_date=data.due_date,
            recurrence=data.recurrence,
            subtasks=[
                Subtask(
                    id=s.id or generate_id(),
                    title=s.title,
                    completed=s.completed,
                    due_date=s.due_date,
                    priority=s.priority,
                    order=index,
                )
                for index, s in enumerate(data.subtasks)
            ],
            completed_at=(data.completed_at or now) if data.status == TaskStatus.DONE else None,
            created_at=now,
            updated_at=now,
        )

        with self.store.transaction() as doc:
            TaskRepository(doc).create(task)
            logger.info(f"Created task {task.id}")
            return doc.tasks

    async def quick_add(
        self,
        title: str,
        project_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[Task]:
        """
        Create a task from a title only.

        The task gets medium priority, status todo, no recurrence and is
        due today.

        Raises:
            ValidationError: if the title is blank
        """
        now = now or local_now()
        title = (title or "").strip()
        if not title:
            raise ValidationError("title is required")

        data = TaskCreate(
            title=title,
            project_id=project_id,
            priority=Priority.MEDIUM,
            status=TaskStatus.TODO,
            due_date=to_local_date(now, now.tzinfo),
            recurrence=Recurrence.NONE,
        )
        return await self.create_task(data, now)

    async def replace_task(self, task: Task, now: Optional[datetime] = None) -> List[Task]:
        """
        Replace a task by id.

        A status change carried by the new version has the same effects as
        `set_status`.

        Raises:
            ValidationError: if the task has no id
            NotFoundError: if no task has that id
        """
        now = now or local_now()
        with self.store.transaction() as doc:
            repo = TaskRepository(doc)
            existing = repo.get(task.id)

            task = task.model_copy(update={"created_at": existing.created_at, "updated_at": now})
            if task.is_done and existing.is_done:
                # keep the first completion time across plain edits
                task.completed_at = existing.completed_at or task.completed_at
            repo.update(task)
            self._apply_transition(doc, task, existing.status, now)

            logger.info(f"Updated task {task.id}")
            return doc.tasks

    async def set_status(
        self,
        task_id: str,
        status: TaskStatus,
        now: Optional[datetime] = None,
    ) -> List[Task]:
        """
        Move a task to a new status.

        - to done: stamp completed_at, count a completion, and roll a
          recurring task forward
        - from done: clear completed_at and take the completion back

        Raises:
            ValidationError: if no id is given
            NotFoundError: if no task has that id
        """
        now = now or local_now()
        with self.store.transaction() as doc:
            self._change_status(doc, TaskRepository(doc).get(task_id), status, now)
            return doc.tasks

    async def toggle_status(self, task_id: str, now: Optional[datetime] = None) -> List[Task]:
        """Done becomes todo; todo and in_progress become done"""
        now = now or local_now()
        with self.store.transaction() as doc:
            task = TaskRepository(doc).get(task_id)
            target = TaskStatus.TODO if task.is_done else TaskStatus.DONE
            self._change_status(doc, task, target, now)
            return doc.tasks

    async def delete_task(self, task_id: Optional[str]) -> List[Task]:
        """
        Delete a task into the undo buffer.

        Raises:
            ValidationError: if no id is given
            NotFoundError: if no task has that id
        """
        with self.store.transaction() as doc:
            TaskRepository(doc).delete(task_id)
            logger.info(f"Deleted task {task_id}")
            return doc.tasks

    async def restore_deleted(self) -> List[Task]:
        """Restore the most recently deleted task, if any, at the end of the list"""
        with self.store.transaction() as doc:
            restored = TaskRepository(doc).restore_deleted()
            if restored is None:
                logger.info("Nothing to restore")
            else:
                logger.info(f"Restored task {restored.id}")
            return doc.tasks

    async def reorder(self, task_ids: List[str], now: Optional[datetime] = None) -> List[Task]:
        """
        Persist a drag-and-drop result: each listed task gets `order = index`.

        Tasks not listed keep their order.

        Raises:
            NotFoundError: if any id is unknown (nothing is written)
        """
        now = now or local_now()
        with self.store.transaction() as doc:
            tasks = TaskRepository(doc).find_by_ids(dict.fromkeys(task_ids))
            for index, task in enumerate(tasks):
                task.order = index
                task.updated_at = now
            logger.info(f"Reordered {len(tasks)} task(s)")
            return doc.tasks

    # ---- bulk actions ----

    async def bulk(
        self,
        task_ids: Iterable[str],
        action: BulkAction,
        value: Any = None,
        now: Optional[datetime] = None,
    ) -> List[Task]:
        """
        Apply one action to a selection of tasks in a single write.

        Args:
            task_ids: selected task ids
            action: what to do with them
            value: new priority, due date (None clears it) or project id
                (None detaches); unused for delete
            now: modification time

        Returns:
            The task list after the write

        Raises:
            ValidationError: on an empty selection or a missing priority
            NotFoundError: if any id is unknown (nothing is written)
        """
        now = now or local_now()
        # a repeated id selects the same task once
        task_ids = list(dict.fromkeys(task_ids))
        if not task_ids:
            raise ValidationError("no tasks selected")
        if action == BulkAction.SET_PRIORITY and value is None:
            raise ValidationError("priority is required")

        with self.store.transaction() as doc:
            repo = TaskRepository(doc)
            tasks = repo.find_by_ids(task_ids)

            if action == BulkAction.DELETE:
                # each deletion passes through the undo slot; the last one stays recoverable
                for task in tasks:
                    repo.delete(task.id)
            else:
                for task in tasks:
                    if action == BulkAction.SET_PRIORITY:
                        task.priority = Priority(value)
                    elif action == BulkAction.SET_DUE_DATE:
                        task.due_date = value
                    elif action == BulkAction.SET_PROJECT:
                        task.project_id = value or None
                    task.updated_at = now

            logger.info(f"Bulk {action.value} applied to {len(tasks)} task(s)")
            return doc.tasks

    async def bulk_set_priority(self, task_ids: Iterable[str], priority: Priority, now: Optional[datetime] = None) -> List[Task]:
        return await self.bulk(task_ids, BulkAction.SET_PRIORITY, priority, now)

    async def bulk_set_due_date(self, task_ids: Iterable[str], due_date: Optional[date], now: Optional[datetime] = None) -> List[Task]:
        return await self.bulk(task_ids, BulkAction.SET_DUE_DATE, due_date, now)

    async def bulk_set_project(self, task_ids: Iterable[str], project_id: Optional[str], now: Optional[datetime] = None) -> List[Task]:
        return await self.bulk(task_ids, BulkAction.SET_PROJECT, project_id, now)

    async def bulk_delete(self, task_ids: Iterable[str]) -> List[Task]:
        return await self.bulk(task_ids, BulkAction.DELETE)

    # ---- subtasks ----

    async def add_subtask(self, task_id: str, data: SubtaskCreate, now: Optional[datetime] = None) -> List[Task]:
        """Append a subtask at the end of the parent's manual order"""
        now = now or local_now()
        with self.store.transaction() as doc:
            task = TaskRepository(doc).get(task_id)
            subtask = Subtask(
                id=data.id or generate_id(),
                title=data.title,
                completed=data.completed,
                due_date=data.due_date,
                priority=data.priority,
                order=len(task.subtasks),
            )
            task.subtasks.append(subtask)
            task.updated_at = now
            logger.info(f"Added subtask {subtask.id} to task {task_id}")
            return doc.tasks

    async def toggle_subtask(self, task_id: str, subtask_id: str, now: Optional[datetime] = None) -> List[Task]:
        now = now or local_now()
        with self.store.transaction() as doc:
            task = TaskRepository(doc).get(task_id)
            subtask = self._find_subtask(task, subtask_id)
            subtask.completed = not subtask.completed
            task.updated_at = now
            return doc.tasks

    async def delete_subtask(self, task_id: str, subtask_id: str, now: Optional[datetime] = None) -> List[Task]:
        now = now or local_now()
        with self.store.transaction() as doc:
            task = TaskRepository(doc).get(task_id)
            subtask = self._find_subtask(task, subtask_id)
            task.subtasks = [s for s in task.subtasks if s.id != subtask.id]
            task.updated_at = now
            logger.info(f"Deleted subtask {subtask_id} from task {task_id}")
            return doc.tasks

    async def set_subtask_due_date(
        self,
        task_id: str,
        subtask_id: str,
        due_date: Optional[date],
        now: Optional[datetime] = None,
    ) -> List[Task]:
        now = now or local_now()
        with self.store.transaction() as doc:
            task = TaskRepository(doc).get(task_id)
            self._find_subtask(task, subtask_id).due_date = due_date
            task.updated_at = now
            return doc.tasks

    async def set_subtask_priority(
        self,
        task_id: str,
        subtask_id: str,
        priority: Optional[Priority],
        now: Optional[datetime] = None,
    ) -> List[Task]:
        """Set a subtask's own priority; None falls back to the parent's"""
        now = now or local_now()
        with self.store.transaction() as doc:
            task = TaskRepository(doc).get(task_id)
            self._find_subtask(task, subtask_id).priority = priority
            task.updated_at = now
            return doc.tasks

    async def reorder_subtasks(
        self,
        task_id: str,
        subtask_ids: List[str],
        now: Optional[datetime] = None,
    ) -> List[Task]:
        """Each listed subtask gets `order = index` within its parent"""
        now = now or local_now()
        with self.store.transaction() as doc:
            task = TaskRepository(doc).get(task_id)
            subtasks = [self._find_subtask(task, sid) for sid in subtask_ids]
            for index, subtask in enumerate(subtasks):
                subtask.order = index
            task.updated_at = now
            return doc.tasks
