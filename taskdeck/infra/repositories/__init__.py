"""Document-backed repositories"""
from .base import BaseRepository
from .tasks import TaskRepository
from .projects import ProjectRepository
from .stats import StatsRepository

__all__ = [
    "BaseRepository",
    "TaskRepository",
    "ProjectRepository",
    "StatsRepository",
]
