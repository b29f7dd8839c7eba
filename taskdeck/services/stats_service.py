"""
Stats / streak engine.

Keeps a trailing window of per-day completion counters (at most one record
per date) and derives today/week totals and the consecutive-day streak.
"""

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional

from taskdeck.models.stats import CompletionRecord, DayCount, StatsSummary
from taskdeck.models.task import Task
from taskdeck.utils.dates import to_local_date

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 90
WEEK_DAYS = 7


def _find(stats: List[CompletionRecord], day: date) -> Optional[CompletionRecord]:
    return next((s for s in stats if s.date == day), None)


def prune(
    stats: List[CompletionRecord],
    today: date,
    retention_days: int = DEFAULT_RETENTION_DAYS,
) -> List[CompletionRecord]:
    """Drop records dated strictly more than `retention_days` before today"""
    cutoff = today - timedelta(days=retention_days)
    kept = [s for s in stats if s.date >= cutoff]
    if len(kept) < len(stats):
        logger.debug(f"Pruned {len(stats) - len(kept)} stats record(s) older than {cutoff}")
    return kept


def record(
    stats: List[CompletionRecord],
    today: date,
    retention_days: int = DEFAULT_RETENTION_DAYS,
) -> List[CompletionRecord]:
    """
    Count one completion for today, then prune the window.

    Returns:
        The new list of records (input is not mutated)
    """
    stats = [s.model_copy() for s in stats]
    existing = _find(stats, today)
    if existing is None:
        existing = CompletionRecord(date=today, count=0)
        stats.append(existing)
    existing.count += 1
    return prune(stats, today, retention_days)


def decrement(stats: List[CompletionRecord], today: date) -> List[CompletionRecord]:
    """
    Take back one completion for today, floored at zero. Does not prune.

    Returns:
        The new list of records (input is not mutated)
    """
    stats = [s.model_copy() for s in stats]
    existing = _find(stats, today)
    if existing is not None and existing.count > 0:
        existing.count -= 1
    return stats


def streak(stats: Iterable[CompletionRecord], today: date) -> int:
    """
    Consecutive days with at least one completion, ending today or yesterday.

    The most recent active day must be today or yesterday, otherwise the
    streak is broken and 0 is returned. From there days are counted backward
    while each step is exactly one calendar day.
    """
    dates = sorted({s.date for s in stats if s.count > 0}, reverse=True)
    if not dates:
        return 0

    if dates[0] not in (today, today - timedelta(days=1)):
        return 0

    count = 1
    for current, previous in zip(dates, dates[1:]):
        if (current - previous).days == 1:
            count += 1
        else:
            break
    return count


def live_today_count(tasks: Iterable[Task], today: date, tz: Optional[tzinfo] = None) -> int:
    """Tasks done with a completion timestamp falling on today"""
    return sum(
        1 for t in tasks
        if t.is_done and t.completed_at is not None and to_local_date(t.completed_at, tz) == today
    )


def corrected_counts(
    stats: Iterable[CompletionRecord],
    tasks: Iterable[Task],
    today: date,
    tz: Optional[tzinfo] = None,
) -> Dict[date, int]:
    """
    Per-day counts where today's persisted counter is replaced by a live
    recount from the tasks' completion timestamps. Prior days keep their
    persisted counts.
    """
    counts = {s.date: s.count for s in stats}
    counts[today] = live_today_count(tasks, today, tz)
    return counts


def last_days(
    stats: Iterable[CompletionRecord],
    tasks: Iterable[Task],
    today: date,
    days: int = WEEK_DAYS,
    tz: Optional[tzinfo] = None,
) -> List[DayCount]:
    """Oldest-first series of the last `days` days ending today"""
    counts = corrected_counts(stats, tasks, today, tz)
    return [
        DayCount(date=day, count=counts.get(day, 0))
        for day in (today - timedelta(days=i) for i in range(days - 1, -1, -1))
    ]


def week_total(
    stats: Iterable[CompletionRecord],
    tasks: Iterable[Task],
    today: date,
    tz: Optional[tzinfo] = None,
) -> int:
    """Completions over the 7 days ending today, with the live-today correction"""
    return sum(d.count for d in last_days(stats, tasks, today, WEEK_DAYS, tz))


def summary(
    stats: Iterable[CompletionRecord],
    tasks: Iterable[Task],
    now: datetime,
) -> StatsSummary:
    """
    Figures for the stats bar.

    Args:
        stats: persisted completion records
        tasks: full task list (source of truth for "done today")
        now: caller's current time; its zone defines the calendar day

    Returns:
        StatsSummary with today/week/streak and the 7-day series
    """
    stats = list(stats)
    tasks = list(tasks)
    tz = now.tzinfo
    today = now.date()

    counts = corrected_counts(stats, tasks, today, tz)
    corrected = [CompletionRecord(date=d, count=c) for d, c in counts.items()]
    series = last_days(stats, tasks, today, WEEK_DAYS, tz)

    return StatsSummary(
        today=counts[today],
        week=sum(d.count for d in series),
        streak=streak(corrected, today),
        last_days=series,
    )
