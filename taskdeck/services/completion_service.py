"""Completion stats service: persisted counters plus the live-today correction"""

import logging
from datetime import datetime
from typing import List, Optional

from taskdeck.config import STATS_RETENTION_DAYS
from taskdeck.db.session import DocumentStore
from taskdeck.infra.repositories import StatsRepository
from taskdeck.models.stats import CompletionRecord, StatsSummary
from taskdeck.services import stats_service
from taskdeck.utils.dates import local_now, to_local_date

logger = logging.getLogger(__name__)


class CompletionStatsService:
    """Service for the per-day completion counters"""

    def __init__(self, store: DocumentStore, retention_days: int = STATS_RETENTION_DAYS):
        self.store = store
        self.retention_days = retention_days

    async def list_stats(self) -> List[CompletionRecord]:
        return self.store.load().stats

    async def record(self, now: Optional[datetime] = None) -> List[CompletionRecord]:
        """Count one completion for today"""
        now = now or local_now()
        today = to_local_date(now, now.tzinfo)
        with self.store.transaction() as doc:
            stats = StatsRepository(doc, self.retention_days).record(today)
            logger.info(f"Recorded completion for {today}")
            return stats

    async def decrement(self, now: Optional[datetime] = None) -> List[CompletionRecord]:
        """Take back one completion for today"""
        now = now or local_now()
        today = to_local_date(now, now.tzinfo)
        with self.store.transaction() as doc:
            stats = StatsRepository(doc, self.retention_days).decrement(today)
            logger.info(f"Decremented completion for {today}")
            return stats

    async def get_summary(self, now: Optional[datetime] = None) -> StatsSummary:
        """Today/week/streak figures reconciled with the task list"""
        now = now or local_now()
        doc = self.store.load()
        return stats_service.summary(doc.stats, doc.tasks, now)
