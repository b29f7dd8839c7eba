# API module exports
from taskdeck.api import health, meta, projects, stats, tasks, views
from taskdeck.api.base import api_router

__all__ = ["health", "meta", "projects", "stats", "tasks", "views", "api_router"]
