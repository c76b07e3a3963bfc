"""
Schedule Engine

Maps program days to calendar dates using preferred training weekdays,
and re-flows future days when the user trains early, late, or not at all.
"""

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models import ProgramSchedule, ScheduledDay, SkipReason, TrainingProgram
from .dates import monday_of, next_assignable_date, next_preferred_day

logger = logging.getLogger(__name__)


DEFAULT_PREFERRED_DAYS = {
    3: (0, 2, 4),           # Mon, Wed, Fri
    4: (0, 1, 3, 4),        # Mon, Tue, Thu, Fri
    5: (0, 1, 2, 3, 4),     # Mon-Fri
    6: (0, 1, 2, 3, 4, 5),  # Mon-Sat
}


def default_preferred_days(days_per_week: int) -> Tuple[int, ...]:
    return DEFAULT_PREFERRED_DAYS.get(days_per_week, (0, 2, 4))


def walk_days(
    days: Sequence[ScheduledDay],
    start_index: int,
    cursor: date,
    current_week: int,
    preferred_days: Iterable[int]
) -> List[ScheduledDay]:
    """
    Reassign planned dates from start_index onward.

    Completed and skipped days keep their dates and are stepped over.
    Every other day gets the next assignable date after the cursor, and
    the cursor moves to the day after it.

    Args:
        days: Scheduled days in program order
        start_index: First index to reassign
        cursor: Earliest date the walk may use
        current_week: Program week the cursor is currently in
        preferred_days: Training weekdays

    Returns:
        New list of scheduled days
    """
    preferred = tuple(preferred_days)
    updated = list(days)

    for i in range(start_index, len(updated)):
        sd = updated[i]
        if sd.is_done:
            continue

        new_week = sd.week_number > current_week
        if new_week:
            current_week = sd.week_number

        assigned = next_assignable_date(cursor, preferred, new_week)
        updated[i] = replace(sd, planned_date=assigned)
        cursor = assigned + timedelta(days=1)

    return updated


def build_schedule(
    program: TrainingProgram,
    preferred_days: Iterable[int],
    start_date: date
) -> ProgramSchedule:
    """
    Build the initial schedule.

    Each program week's days go onto consecutive preferred weekdays; after a
    week is placed the cursor jumps to the following Monday.

    Args:
        program: Generated program
        preferred_days: Training weekdays (0=Mon..6=Sun)
        start_date: First date a session may fall on

    Returns:
        ProgramSchedule, empty when no preferred days are given
    """
    preferred = tuple(sorted(set(preferred_days)))
    if not preferred:
        logger.debug("No preferred days, schedule is empty")
        return ProgramSchedule(preferred_days=preferred, start_date=start_date)

    scheduled: List[ScheduledDay] = []
    cursor = start_date

    for week in program.weeks:
        for day in week.days:
            assigned = next_preferred_day(cursor, preferred)
            scheduled.append(ScheduledDay(
                week_number=week.week_number,
                day_index=day.day_index,
                planned_date=assigned,
            ))
            cursor = assigned + timedelta(days=1)

        cursor = max(cursor, monday_of(cursor) + timedelta(days=7))

    return ProgramSchedule(
        preferred_days=preferred,
        start_date=start_date,
        scheduled_days=tuple(scheduled),
    )


def find_index(schedule: ProgramSchedule, week_number: int, day_index: int) -> int:
    """Position of a (week, day) in the schedule, -1 if absent."""
    for i, sd in enumerate(schedule.scheduled_days):
        if sd.week_number == week_number and sd.day_index == day_index:
            return i
    return -1


def reschedule_forward(
    schedule: ProgramSchedule,
    week_number: int,
    day_index: int,
    completed_date: date
) -> ProgramSchedule:
    """
    Mark a day completed and re-flow every later open day from the day after.

    Args:
        schedule: Current schedule
        week_number: Completed day's week
        day_index: Completed day's index
        completed_date: Date it was trained

    Returns:
        Updated schedule; unchanged if the day is unknown
    """
    idx = find_index(schedule, week_number, day_index)
    if idx == -1:
        logger.debug(f"Day {week_number}-{day_index} not in schedule")
        return schedule

    days = list(schedule.scheduled_days)
    days[idx] = replace(days[idx], completed_date=completed_date)

    days = walk_days(
        days, idx + 1, completed_date + timedelta(days=1),
        week_number, schedule.preferred_days
    )
    return replace(schedule, scheduled_days=tuple(days))


def pending_merged_days(schedule: ProgramSchedule) -> List[ScheduledDay]:
    """Merged days whose volume no session has absorbed yet."""
    return [
        sd for sd in schedule.scheduled_days
        if sd.skipped_reason is SkipReason.MERGED and sd.carried_into is None
    ]


def consume_merged_days(schedule: ProgramSchedule, session_key: str) -> ProgramSchedule:
    """Stamp every pending merged day as carried into the given session."""
    pending = {sd.key for sd in pending_merged_days(schedule)}
    if not pending:
        return schedule

    logger.debug(f"Merged day(s) {sorted(pending)} carried into {session_key}")
    days = tuple(
        replace(sd, carried_into=session_key) if sd.key in pending else sd
        for sd in schedule.scheduled_days
    )
    return replace(schedule, scheduled_days=days)


def planned_day_for_date(schedule: ProgramSchedule, on: date) -> Optional[ScheduledDay]:
    for sd in schedule.scheduled_days:
        if sd.planned_date == on:
            return sd
    return None


def next_scheduled_day(schedule: ProgramSchedule, today: Optional[date] = None) -> Optional[ScheduledDay]:
    """Today's open day if there is one, else the next open day after today."""
    today = today or date.today()

    for sd in schedule.scheduled_days:
        if sd.planned_date == today and not sd.is_done:
            return sd

    for sd in schedule.scheduled_days:
        if not sd.is_done and sd.planned_date > today:
            return sd

    return None


def format_schedule_text(schedule: ProgramSchedule, program: Optional[TrainingProgram] = None) -> str:
    """One line per scheduled day with its status."""
    lines = []
    for sd in schedule.scheduled_days:
        label = ''
        if program is not None:
            day = program.day(sd.week_number, sd.day_index)
            label = f" {day.label}" if day else ''

        if sd.completed_date:
            status = f"done {sd.completed_date.isoformat()}"
        elif sd.skipped_date:
            reason = sd.skipped_reason.value if sd.skipped_reason else "skip"
            if sd.carried_into:
                reason = f"{reason} into {sd.carried_into}"
            status = f"skipped ({reason})"
        else:
            status = "planned"

        lines.append(
            f"W{sd.week_number} D{sd.day_index + 1}{label}: "
            f"{sd.planned_date.strftime('%a %Y-%m-%d')} [{status}]"
        )
    return "\n".join(lines)
