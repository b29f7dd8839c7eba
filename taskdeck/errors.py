"""Error taxonomy shared by repositories, services and routers"""
from typing import Optional


class TaskdeckError(Exception):
    """Base class for all domain errors"""


class ValidationError(TaskdeckError):
    """
    Raised when input is missing or malformed.

    The message is meant to be shown to the caller as-is so it can correct
    the request (e.g. "id is required").
    """


class NotFoundError(TaskdeckError):
    """Raised when an update/delete references an id that does not exist"""

    def __init__(self, kind: str, entity_id: Optional[str]):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found")


class StorageError(TaskdeckError):
    """Raised when the document cannot be read or written"""
