"""Completion statistics models"""
import datetime
from typing import List

from pydantic import Field

from taskdeck.models.base import CamelModel


class CompletionRecord(CamelModel):
    """Number of tasks completed on one calendar day"""
    date: datetime.date
    count: int = Field(0, ge=0)


class DayCount(CamelModel):
    """One bar of the recent-days chart"""
    date: datetime.date
    count: int


class StatsSummary(CamelModel):
    """Derived figures for the stats bar, with the live-today correction applied"""
    today: int
    week: int
    streak: int
    last_days: List[DayCount] = Field(default_factory=list)
