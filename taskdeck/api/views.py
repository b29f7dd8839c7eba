"""View API endpoints: filtered lists, badges and calendars"""

from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import Field

from taskdeck.api.errors import http_error
from taskdeck.db import DocumentStore, get_store
from taskdeck.errors import TaskdeckError
from taskdeck.models.base import CamelModel
from taskdeck.models.task import Priority, Task, TaskStatus
from taskdeck.models.view import CalendarDay, DateFilter, NavCounts, TaskFilters, ViewMode, ViewResult
from taskdeck.services import view_service
from taskdeck.utils.dates import local_now

router = APIRouter(prefix="/api/views", tags=["views"])


class CountsResponse(CamelModel):
    nav: NavCounts
    projects: Dict[str, int] = Field(default_factory=dict)


def view_filters(
    search: str = "",
    priority: Optional[Priority] = None,
    status: Optional[TaskStatus] = None,
    date_filter: Optional[DateFilter] = Query(None, alias="dateFilter"),
) -> TaskFilters:
    """
    Secondary filters shared by every view endpoint.

    Args:
        search: substring of title, description or a subtask title
        priority: exact priority
        status: exact status
        date_filter: today, tomorrow, week, overdue or no_date
    """
    return TaskFilters(search=search, priority=priority, status=status, date_filter=date_filter)


def _today(today: Optional[date]) -> date:
    """Caller-supplied calendar date, or the server's local date"""
    return today or local_now().date()


def _load_tasks(store: DocumentStore) -> List[Task]:
    try:
        return store.load().tasks
    except TaskdeckError as e:
        raise http_error(e, "load tasks")


@router.get("/counts", response_model=CountsResponse)
async def get_counts(
    today: Optional[date] = None,
    store: DocumentStore = Depends(get_store),
):
    """Open-task badges per navigation view and per project"""
    tasks = _load_tasks(store)
    return CountsResponse(
        nav=view_service.nav_counts(tasks, _today(today)),
        projects=view_service.project_counts(tasks),
    )


@router.get("/week", response_model=List[CalendarDay])
async def get_week(
    project_id: Optional[str] = Query(None, alias="projectId"),
    filters: TaskFilters = Depends(view_filters),
    today: Optional[date] = None,
    store: DocumentStore = Depends(get_store),
):
    """Monday..Sunday of the current week, one cell per day, after filtering"""
    current = _today(today)
    tasks = view_service.select_for_calendar(_load_tasks(store), current, project_id, filters)
    return view_service.group_by_day(tasks, current)


@router.get("/month", response_model=List[CalendarDay])
async def get_month(
    year: Optional[int] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    project_id: Optional[str] = Query(None, alias="projectId"),
    filters: TaskFilters = Depends(view_filters),
    today: Optional[date] = None,
    store: DocumentStore = Depends(get_store),
):
    """Monday-first grid of a month (the current one by default), after filtering"""
    current = _today(today)
    if (year is None) != (month is None):
        raise HTTPException(status_code=400, detail="year and month must be given together")

    tasks = view_service.select_for_calendar(_load_tasks(store), current, project_id, filters)
    return view_service.month_grid(tasks, year or current.year, month or current.month, current)


@router.get("/{view}", response_model=ViewResult)
async def get_view(
    view: ViewMode,
    project_id: Optional[str] = Query(None, alias="projectId"),
    filters: TaskFilters = Depends(view_filters),
    today: Optional[date] = None,
    store: DocumentStore = Depends(get_store),
):
    """
    Ordered and grouped tasks of a navigation view.

    Args:
        view: inbox, today, tomorrow, week, month or project
        project_id: selected project (project view)
        today: calendar date to evaluate against (defaults to server date)
    """
    tasks = _load_tasks(store)
    return view_service.build_view(tasks, view, _today(today), project_id, filters)
