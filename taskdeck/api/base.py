from fastapi import APIRouter
from taskdeck.api import health, meta, projects, stats, tasks, views

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(tasks.router)
api_router.include_router(projects.router)
api_router.include_router(stats.router)
api_router.include_router(views.router)
api_router.include_router(meta.router)
