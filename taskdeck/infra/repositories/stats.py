"""Completion stats repository"""
from datetime import date
from typing import List

from taskdeck.models.document import Document
from taskdeck.models.stats import CompletionRecord
from taskdeck.services import stats_service


class StatsRepository:
    """Repository for the per-day completion counters"""

    def __init__(self, document: Document, retention_days: int = stats_service.DEFAULT_RETENTION_DAYS):
        self._document = document
        self._retention_days = retention_days

    def find_all(self) -> List[CompletionRecord]:
        return list(self._document.stats)

    def record(self, today: date) -> List[CompletionRecord]:
        """Count one completion for today and prune the retention window"""
        self._document.stats = stats_service.record(self._document.stats, today, self._retention_days)
        return self.find_all()

    def decrement(self, today: date) -> List[CompletionRecord]:
        """Take back one completion for today (floored at 0)"""
        self._document.stats = stats_service.decrement(self._document.stats, today)
        return self.find_all()
