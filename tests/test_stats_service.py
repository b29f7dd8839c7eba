# tests/test_stats_service.py

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from taskdeck.models.stats import CompletionRecord
from taskdeck.models.task import TaskStatus
from taskdeck.services import stats_service

from .factories import NOW, TODAY, make_task


def rec(day: date, count: int) -> CompletionRecord:
    return CompletionRecord(date=day, count=count)


def test_record_creates_then_increments_today() -> None:
    stats = stats_service.record([], TODAY)
    assert stats == [rec(TODAY, 1)]

    stats = stats_service.record(stats, TODAY)
    assert stats == [rec(TODAY, 2)]


def test_record_does_not_mutate_input() -> None:
    original = [rec(TODAY, 1)]
    stats_service.record(original, TODAY)
    assert original[0].count == 1


def test_record_prunes_records_older_than_window() -> None:
    stale = TODAY - timedelta(days=91)
    edge = TODAY - timedelta(days=90)
    stats = stats_service.record([rec(stale, 3), rec(edge, 2)], TODAY)

    assert [s.date for s in stats] == [edge, TODAY]


def test_record_keeps_recent_day() -> None:
    stats = stats_service.record([rec(date(2024, 6, 1), 5)], date(2024, 6, 2))
    assert rec(date(2024, 6, 1), 5) in stats


def test_decrement_floors_at_zero_and_does_not_prune() -> None:
    stale = rec(TODAY - timedelta(days=200), 1)
    stats = stats_service.decrement([stale, rec(TODAY, 1)], TODAY)
    assert stats == [stale, rec(TODAY, 0)]

    stats = stats_service.decrement(stats, TODAY)
    assert stats[-1].count == 0

    # nothing recorded today: no-op
    assert stats_service.decrement([], TODAY) == []


def test_streak_zero_without_today_or_yesterday() -> None:
    assert stats_service.streak([], TODAY) == 0
    assert stats_service.streak([rec(TODAY - timedelta(days=2), 4)], TODAY) == 0
    assert stats_service.streak([rec(TODAY, 0), rec(TODAY - timedelta(days=1), 0)], TODAY) == 0


def test_streak_counts_consecutive_days() -> None:
    days = [TODAY - timedelta(days=i) for i in range(3)]
    assert stats_service.streak([rec(d, 1) for d in days], TODAY) == 3

    # ending yesterday still counts
    days = [TODAY - timedelta(days=i) for i in range(1, 4)]
    assert stats_service.streak([rec(d, 2) for d in days], TODAY) == 3


def test_streak_stops_at_gap_or_zero_day() -> None:
    stats = [
        rec(TODAY, 1),
        rec(TODAY - timedelta(days=1), 1),
        rec(TODAY - timedelta(days=2), 0),
        rec(TODAY - timedelta(days=3), 1),
    ]
    assert stats_service.streak(stats, TODAY) == 2


def test_live_today_count_uses_completion_timestamps() -> None:
    done_today = make_task("a", status=TaskStatus.DONE)
    done_before = make_task("b", status=TaskStatus.DONE)
    done_before.completed_at = NOW - timedelta(days=1)
    open_task = make_task("c")

    count = stats_service.live_today_count([done_today, done_before, open_task], TODAY, timezone.utc)
    assert count == 1


def test_live_today_count_respects_zone() -> None:
    task = make_task("a", status=TaskStatus.DONE)
    # 23:30 UTC on the 11th is already the 12th in UTC+2
    task.completed_at = datetime(2024, 6, 11, 23, 30, tzinfo=timezone.utc)
    plus_two = timezone(timedelta(hours=2))

    assert stats_service.live_today_count([task], TODAY, plus_two) == 1
    assert stats_service.live_today_count([task], TODAY, timezone.utc) == 0


def test_summary_prefers_live_today_count() -> None:
    # persisted counter is stale (says 5) but only one task was completed today
    stats = [
        rec(TODAY, 5),
        rec(TODAY - timedelta(days=1), 2),
        rec(TODAY - timedelta(days=6), 1),
        rec(TODAY - timedelta(days=7), 10),
    ]
    tasks = [make_task("a", status=TaskStatus.DONE)]

    summary = stats_service.summary(stats, tasks, NOW)

    assert summary.today == 1
    assert summary.week == 1 + 2 + 1
    assert summary.streak == 2
    assert len(summary.last_days) == 7
    assert summary.last_days[0].date == TODAY - timedelta(days=6)
    assert summary.last_days[-1].date == TODAY


def test_summary_streak_uses_corrected_today() -> None:
    # stale record claims a completion today, but nothing is done now
    stats = [rec(TODAY, 1)]
    summary = stats_service.summary(stats, [], NOW)

    assert summary.today == 0
    assert summary.streak == 0


def test_week_total_covers_seven_days_with_live_today() -> None:
    stats = [rec(TODAY - timedelta(days=i), 1) for i in range(10)]
    tasks = [make_task("a", status=TaskStatus.DONE), make_task("b", status=TaskStatus.DONE)]

    # six prior days at 1 each, plus today's live count of 2
    assert stats_service.week_total(stats, tasks, TODAY, timezone.utc) == 8
