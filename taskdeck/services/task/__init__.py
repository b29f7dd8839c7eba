"""Task services"""
from .recurrence_service import roll_forward, is_recurring
from .task_service import TaskService, BulkAction

__all__ = ["TaskService", "BulkAction", "roll_forward", "is_recurring"]
