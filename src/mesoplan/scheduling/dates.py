"""
Calendar helpers for schedule walking. Weekdays are 0=Mon..6=Sun
(date.weekday()).
"""

from datetime import date, timedelta
from typing import Iterable


def monday_of(d: date) -> date:
    """Monday of the week containing d."""
    return d - timedelta(days=d.weekday())


def next_preferred_day(start: date, preferred_days: Iterable[int]) -> date:
    """First date on or after start that falls on a preferred weekday."""
    days = sorted(preferred_days)
    current = start.weekday()
    for pd in days:
        if pd >= current:
            return start + timedelta(days=pd - current)
    return start + timedelta(days=7 - current + days[0])


def next_assignable_date(cursor: date, preferred_days: Iterable[int], new_week: bool) -> date:
    """
    Date the walk assigns next.

    When the walk crosses into a new program week, the cursor first jumps to
    the following Monday (unless it already sits on a Monday).

    Args:
        cursor: Earliest allowed date
        preferred_days: Training weekdays
        new_week: Whether this day starts a new program week

    Returns:
        Assigned date
    """
    if new_week:
        monday = monday_of(cursor)
        boundary = monday + timedelta(days=7) if cursor > monday else monday
        cursor = max(cursor, boundary)
    return next_preferred_day(cursor, preferred_days)


def days_between(a: date, b: date) -> int:
    return (b - a).days
