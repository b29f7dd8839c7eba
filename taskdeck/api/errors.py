"""Mapping of domain errors to HTTP responses"""

import logging

from fastapi import HTTPException

from taskdeck.errors import NotFoundError, StorageError, TaskdeckError, ValidationError

logger = logging.getLogger(__name__)


def http_error(e: TaskdeckError, action: str) -> HTTPException:
    """
    Translate a domain error raised while performing `action`.

    - ValidationError -> 400 with the message as-is
    - NotFoundError -> 404
    - StorageError (and anything else) -> 500
    """
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, StorageError):
        logger.error(f"Storage failure during {action}: {e}")
    return HTTPException(status_code=500, detail=f"Failed to {action}: {str(e)}")
