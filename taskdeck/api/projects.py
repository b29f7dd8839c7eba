"""Project API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from taskdeck.api.errors import http_error
from taskdeck.db import DocumentStore, get_store
from taskdeck.errors import TaskdeckError
from taskdeck.models.project import Project, ProjectCreate
from taskdeck.services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=List[Project])
async def list_projects(store: DocumentStore = Depends(get_store)):
    try:
        return await ProjectService(store).list_projects()
    except TaskdeckError as e:
        raise http_error(e, "list projects")


@router.post("", response_model=List[Project])
async def create_project(request: ProjectCreate, store: DocumentStore = Depends(get_store)):
    try:
        return await ProjectService(store).create_project(request)
    except TaskdeckError as e:
        raise http_error(e, "create project")


@router.put("", response_model=List[Project])
async def replace_project(request: Project, store: DocumentStore = Depends(get_store)):
    try:
        return await ProjectService(store).replace_project(request)
    except TaskdeckError as e:
        raise http_error(e, "update project")


@router.delete("", response_model=List[Project])
async def delete_project(id: Optional[str] = None, store: DocumentStore = Depends(get_store)):
    """
    Delete a project. Its tasks are kept with their project reference cleared.

    Raises:
        400: No id given
        404: No project with that id
    """
    try:
        return await ProjectService(store).delete_project(id)
    except TaskdeckError as e:
        raise http_error(e, "delete project")
