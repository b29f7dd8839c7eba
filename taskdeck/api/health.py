"""Health check endpoints"""

from fastapi import APIRouter, Depends

from taskdeck.db import DocumentStore, get_store
from taskdeck.errors import StorageError

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(store: DocumentStore = Depends(get_store)):
    """Basic health check: reports whether the document can be read"""
    try:
        document = store.load()
    except StorageError as e:
        return {
            "status": "unhealthy",
            "service": "taskdeck",
            "error": str(e),
        }

    return {
        "status": "healthy",
        "service": "taskdeck",
        "tasks": len(document.tasks),
        "projects": len(document.projects),
    }
