"""Project service"""

import logging
from datetime import datetime
from typing import List, Optional

from taskdeck.db.session import DocumentStore
from taskdeck.infra.repositories import ProjectRepository
from taskdeck.models.base import generate_id
from taskdeck.models.project import Project, ProjectCreate
from taskdeck.utils.dates import local_now

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for managing projects"""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_projects(self) -> List[Project]:
        return self.store.load().projects

    async def create_project(self, data: ProjectCreate, now: Optional[datetime] = None) -> List[Project]:
        now = now or local_now()
        project = Project(
            id=data.id or generate_id(),
            name=data.name,
            color=data.color,
            icon=data.icon,
            created_at=now,
        )
        with self.store.transaction() as doc:
            ProjectRepository(doc).create(project)
            logger.info(f"Created project {project.id}")
            return doc.projects

    async def replace_project(self, project: Project) -> List[Project]:
        """
        Replace a project by id.

        Raises:
            ValidationError: if the project has no id
            NotFoundError: if no project has that id
        """
        with self.store.transaction() as doc:
            repo = ProjectRepository(doc)
            existing = repo.get(project.id)
            repo.update(project.model_copy(update={"created_at": existing.created_at}))
            logger.info(f"Updated project {project.id}")
            return doc.projects

    async def delete_project(self, project_id: Optional[str], now: Optional[datetime] = None) -> List[Project]:
        """
        Delete a project and detach its tasks in the same write.

        Tasks are not deleted; their `project_id` is cleared.

        Raises:
            ValidationError: if no id is given
            NotFoundError: if no project has that id
        """
        now = now or local_now()
        with self.store.transaction() as doc:
            removed, cleared = ProjectRepository(doc).delete_with_references(project_id, now)
            logger.info(f"Deleted project {removed.id}, detached {len(cleared)} task(s)")
            return doc.projects
