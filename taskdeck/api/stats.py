"""Completion stats API endpoints"""

from enum import Enum
from typing import List

from fastapi import APIRouter, Depends

from taskdeck.api.errors import http_error
from taskdeck.db import DocumentStore, get_store
from taskdeck.errors import TaskdeckError
from taskdeck.models.base import CamelModel
from taskdeck.models.stats import CompletionRecord, StatsSummary
from taskdeck.services.completion_service import CompletionStatsService

router = APIRouter(prefix="/api/stats", tags=["stats"])


class StatsAction(str, Enum):
    RECORD = "record"
    DECREMENT = "decrement"


class StatsActionRequest(CamelModel):
    action: StatsAction


@router.get("", response_model=List[CompletionRecord])
async def list_stats(store: DocumentStore = Depends(get_store)):
    """Persisted per-day completion records"""
    try:
        return await CompletionStatsService(store).list_stats()
    except TaskdeckError as e:
        raise http_error(e, "load stats")


@router.post("", response_model=List[CompletionRecord])
async def update_stats(request: StatsActionRequest, store: DocumentStore = Depends(get_store)):
    """Record or take back one completion for today"""
    service = CompletionStatsService(store)
    try:
        if request.action == StatsAction.RECORD:
            return await service.record()
        return await service.decrement()
    except TaskdeckError as e:
        raise http_error(e, f"{request.action.value} completion")


@router.get("/summary", response_model=StatsSummary)
async def stats_summary(store: DocumentStore = Depends(get_store)):
    """Today, 7-day total, streak and the last 7 days, reconciled with the task list"""
    try:
        return await CompletionStatsService(store).get_summary()
    except TaskdeckError as e:
        raise http_error(e, "compute stats")
