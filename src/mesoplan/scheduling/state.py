"""
Active Program State transitions

Every function returns a new ActiveProgramState; callers swap it in whole.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence, Tuple

from ..models import (
    ActiveProgramState,
    ResolutionAction,
    TrainingProgram,
    WorkoutSession,
    day_key,
)
from .engine import build_schedule, consume_merged_days, planned_day_for_date, reschedule_forward
from .reconciler import ScheduleReconciler

logger = logging.getLogger(__name__)


def start_program(
    program: TrainingProgram,
    start_date: Optional[date] = None,
    preferred_days: Optional[Iterable[int]] = None
) -> ActiveProgramState:
    """
    Fresh state for a program, scheduled when preferred days are given.

    Args:
        program: Generated program
        start_date: First training date (default: date.today())
        preferred_days: Training weekdays; None keeps the legacy pointer mode

    Returns:
        New ActiveProgramState
    """
    start_date = start_date or date.today()
    schedule = None
    if preferred_days is not None:
        schedule = build_schedule(program, preferred_days, start_date)

    return ActiveProgramState(
        program_id=program.id,
        start_date=start_date,
        schedule=schedule,
    )


def _advance_pointer(program: TrainingProgram, state: ActiveProgramState) -> Tuple[int, int]:
    week = program.week(state.current_week)
    if week is None:
        return state.current_week, state.current_day_index

    next_day = state.current_day_index + 1
    if next_day < len(week.days):
        return state.current_week, next_day
    if state.current_week < program.total_weeks:
        return state.current_week + 1, 0
    # Last day of the last week: stay put
    return state.current_week, state.current_day_index


def mark_day_completed(
    program: TrainingProgram,
    state: ActiveProgramState,
    week_number: int,
    day_index: int,
    completed_on: Optional[date] = None
) -> ActiveProgramState:
    """
    Record a completed day. Marking the same day twice is a no-op.

    Reschedules later days forward from the day after completion, marks
    pending merged days as carried into this session and advances the
    week/day pointers by one.
    """
    key = day_key(week_number, day_index)
    if key in state.completed_days:
        return state

    completed_on = completed_on or date.today()
    schedule = state.schedule
    if schedule is not None:
        schedule = reschedule_forward(schedule, week_number, day_index, completed_on)
        schedule = consume_merged_days(schedule, key)

    week, day = _advance_pointer(program, state)

    return replace(
        state,
        completed_days=state.completed_days | {key},
        last_completed_at=completed_on,
        schedule=schedule,
        current_week=week,
        current_day_index=day,
    )


def today_workout(state: ActiveProgramState, today: Optional[date] = None) -> Optional[Tuple[int, int]]:
    """
    (week, day_index) to train today.

    With a schedule, only a day planned for today and not yet completed;
    without one, the legacy pointers.
    """
    if state.schedule is not None:
        planned = planned_day_for_date(state.schedule, today or date.today())
        if planned is not None and not planned.is_done:
            return planned.week_number, planned.day_index
        return None

    return state.current_week, state.current_day_index


def is_program_complete(program: TrainingProgram, state: ActiveProgramState) -> bool:
    total_days = sum(len(w.days) for w in program.weeks)
    return len(state.completed_days) >= total_days


def reconcile(
    program: TrainingProgram,
    state: ActiveProgramState,
    history: Sequence[WorkoutSession],
    reconciler: Optional[ScheduleReconciler] = None,
    today: Optional[date] = None
) -> ActiveProgramState:
    """
    Recompute the pending resolution (None when the schedule is clean).

    Idempotent: an unchanged schedule and history give the same resolution.
    """
    reconciler = reconciler or ScheduleReconciler()
    resolution = reconciler.compute_resolution(program, state, history, today)
    return replace(state, pending_resolution=resolution)


def apply_resolution(
    state: ActiveProgramState,
    action: ResolutionAction,
    reconciler: Optional[ScheduleReconciler] = None,
    today: Optional[date] = None
) -> ActiveProgramState:
    """
    Execute the user's choice on the pending resolution.

    Replaces the schedule, moves the pointers when the action names a day
    and clears the pending resolution. Without a pending resolution the
    state is returned unchanged.
    """
    if state.pending_resolution is None:
        logger.debug("No pending resolution to apply")
        return state

    reconciler = reconciler or ScheduleReconciler()
    result = reconciler.execute(action, state.pending_resolution, state, today)

    week = result.advance_to_week if result.advance_to_week is not None else state.current_week
    day = result.advance_to_day_index if result.advance_to_day_index is not None else state.current_day_index

    return replace(
        state,
        schedule=result.schedule,
        current_week=week,
        current_day_index=day,
        pending_resolution=None,
    )
