"""Calendar helpers used by the view and stats engines"""
from datetime import date, datetime, timedelta, tzinfo
from typing import List, Optional


def local_now() -> datetime:
    """
    Current time as a timezone-aware datetime in the local zone.

    Returns:
        datetime: aware "now" used as the default for every date computation
    """
    return datetime.now().astimezone()


def to_local_date(ts: datetime, tz: Optional[tzinfo] = None) -> date:
    """
    Calendar date of a timestamp as seen from the given zone.

    Naive timestamps are taken to be local already.
    """
    if ts.tzinfo is None:
        return ts.date()
    return ts.astimezone(tz).date()


def week_start(today: date) -> date:
    """Monday of the ISO week containing today"""
    return today - timedelta(days=today.weekday())


def week_dates(today: date) -> List[date]:
    """The seven dates Monday..Sunday of the week containing today"""
    monday = week_start(today)
    return [monday + timedelta(days=i) for i in range(7)]


def is_same_month(value: date, today: date) -> bool:
    return value.year == today.year and value.month == today.month
