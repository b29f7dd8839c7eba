"""Task API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from taskdeck.api.errors import http_error
from taskdeck.db import DocumentStore, get_store
from taskdeck.errors import TaskdeckError
from taskdeck.models.base import CamelModel
from taskdeck.models.task import OptionalDate, Priority, SubtaskCreate, Task, TaskCreate, TaskStatus
from taskdeck.services.task import BulkAction, TaskService


router = APIRouter(prefix="/api/tasks", tags=["tasks"])


# Request models
class QuickAddRequest(CamelModel):
    title: str
    project_id: Optional[str] = None


class StatusRequest(CamelModel):
    status: TaskStatus


class ReorderRequest(CamelModel):
    ids: List[str]


class BulkRequest(CamelModel):
    ids: List[str]
    action: BulkAction
    priority: Optional[Priority] = None
    due_date: OptionalDate = None
    project_id: Optional[str] = None


class SubtaskDueDateRequest(CamelModel):
    due_date: OptionalDate = None


class SubtaskPriorityRequest(CamelModel):
    priority: Optional[Priority] = None


@router.get("", response_model=List[Task])
async def list_tasks(store: DocumentStore = Depends(get_store)):
    """List all tasks in stored order"""
    try:
        return await TaskService(store).list_tasks()
    except TaskdeckError as e:
        raise http_error(e, "list tasks")


@router.post("", response_model=List[Task])
async def create_task(request: TaskCreate, store: DocumentStore = Depends(get_store)):
    """Create a task from the full form"""
    try:
        return await TaskService(store).create_task(request)
    except TaskdeckError as e:
        raise http_error(e, "create task")


@router.put("", response_model=List[Task])
async def replace_task(request: Task, store: DocumentStore = Depends(get_store)):
    """Replace a task by id"""
    try:
        return await TaskService(store).replace_task(request)
    except TaskdeckError as e:
        raise http_error(e, "update task")


@router.delete("", response_model=List[Task])
async def delete_task(id: Optional[str] = None, store: DocumentStore = Depends(get_store)):
    """
    Delete a task; it can be restored until the next deletion.

    Raises:
        400: No id given
        404: No task with that id
    """
    try:
        return await TaskService(store).delete_task(id)
    except TaskdeckError as e:
        raise http_error(e, "delete task")


@router.post("/restore", response_model=List[Task])
async def restore_task(store: DocumentStore = Depends(get_store)):
    """Restore the most recently deleted task"""
    try:
        return await TaskService(store).restore_deleted()
    except TaskdeckError as e:
        raise http_error(e, "restore task")


@router.post("/quick", response_model=List[Task])
async def quick_add(request: QuickAddRequest, store: DocumentStore = Depends(get_store)):
    """Create a task due today from a title only"""
    try:
        return await TaskService(store).quick_add(request.title, request.project_id)
    except TaskdeckError as e:
        raise http_error(e, "add task")


@router.post("/reorder", response_model=List[Task])
async def reorder_tasks(request: ReorderRequest, store: DocumentStore = Depends(get_store)):
    """Persist a manual order: each listed task gets its index as order"""
    try:
        return await TaskService(store).reorder(request.ids)
    except TaskdeckError as e:
        raise http_error(e, "reorder tasks")


@router.post("/bulk", response_model=List[Task])
async def bulk_action(request: BulkRequest, store: DocumentStore = Depends(get_store)):
    """Apply one action to several tasks at once"""
    values = {
        BulkAction.SET_PRIORITY: request.priority,
        BulkAction.SET_DUE_DATE: request.due_date,
        BulkAction.SET_PROJECT: request.project_id,
        BulkAction.DELETE: None,
    }
    try:
        return await TaskService(store).bulk(request.ids, request.action, values[request.action])
    except TaskdeckError as e:
        raise http_error(e, f"apply {request.action.value}")


@router.post("/{task_id}/toggle", response_model=List[Task])
async def toggle_task(task_id: str, store: DocumentStore = Depends(get_store)):
    """Toggle a task between done and todo"""
    try:
        return await TaskService(store).toggle_status(task_id)
    except TaskdeckError as e:
        raise http_error(e, "toggle task")


@router.post("/{task_id}/status", response_model=List[Task])
async def set_task_status(task_id: str, request: StatusRequest, store: DocumentStore = Depends(get_store)):
    """Move a task to the given status"""
    try:
        return await TaskService(store).set_status(task_id, request.status)
    except TaskdeckError as e:
        raise http_error(e, "change status")


# Subtasks
@router.post("/{task_id}/subtasks", response_model=List[Task])
async def add_subtask(task_id: str, request: SubtaskCreate, store: DocumentStore = Depends(get_store)):
    try:
        return await TaskService(store).add_subtask(task_id, request)
    except TaskdeckError as e:
        raise http_error(e, "add subtask")


@router.post("/{task_id}/subtasks/reorder", response_model=List[Task])
async def reorder_subtasks(task_id: str, request: ReorderRequest, store: DocumentStore = Depends(get_store)):
    try:
        return await TaskService(store).reorder_subtasks(task_id, request.ids)
    except TaskdeckError as e:
        raise http_error(e, "reorder subtasks")


@router.post("/{task_id}/subtasks/{subtask_id}/toggle", response_model=List[Task])
async def toggle_subtask(task_id: str, subtask_id: str, store: DocumentStore = Depends(get_store)):
    try:
        return await TaskService(store).toggle_subtask(task_id, subtask_id)
    except TaskdeckError as e:
        raise http_error(e, "toggle subtask")


@router.put("/{task_id}/subtasks/{subtask_id}/due-date", response_model=List[Task])
async def set_subtask_due_date(
    task_id: str,
    subtask_id: str,
    request: SubtaskDueDateRequest,
    store: DocumentStore = Depends(get_store),
):
    try:
        return await TaskService(store).set_subtask_due_date(task_id, subtask_id, request.due_date)
    except TaskdeckError as e:
        raise http_error(e, "set subtask due date")


@router.put("/{task_id}/subtasks/{subtask_id}/priority", response_model=List[Task])
async def set_subtask_priority(
    task_id: str,
    subtask_id: str,
    request: SubtaskPriorityRequest,
    store: DocumentStore = Depends(get_store),
):
    try:
        return await TaskService(store).set_subtask_priority(task_id, subtask_id, request.priority)
    except TaskdeckError as e:
        raise http_error(e, "set subtask priority")


@router.delete("/{task_id}/subtasks/{subtask_id}", response_model=List[Task])
async def delete_subtask(task_id: str, subtask_id: str, store: DocumentStore = Depends(get_store)):
    try:
        return await TaskService(store).delete_subtask(task_id, subtask_id)
    except TaskdeckError as e:
        raise http_error(e, "delete subtask")
