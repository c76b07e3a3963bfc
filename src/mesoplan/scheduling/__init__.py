"""
Scheduling and Reconciliation

Maps program days onto calendar dates and keeps that mapping valid as
real-world adherence drifts:
- Initial schedule from preferred weekdays
- Forward rescheduling after each completed session
- Missed-day detection, resolution options and execution
- Session flattening (with merged-day carry-over) and readiness scaling
"""

from .engine import (
    build_schedule,
    default_preferred_days,
    format_schedule_text,
    next_scheduled_day,
    planned_day_for_date,
    reschedule_forward,
)
from .reconciler import ScheduleReconciler, detect_missed_days
from .readiness import ReadinessLevel, apply_readiness, readiness_score, session_adjustments
from .session import flatten_program_day
from .state import (
    apply_resolution,
    is_program_complete,
    mark_day_completed,
    reconcile,
    start_program,
    today_workout,
)

__all__ = [
    'build_schedule',
    'default_preferred_days',
    'format_schedule_text',
    'next_scheduled_day',
    'planned_day_for_date',
    'reschedule_forward',
    'ScheduleReconciler',
    'detect_missed_days',
    'ReadinessLevel',
    'apply_readiness',
    'readiness_score',
    'session_adjustments',
    'flatten_program_day',
    'apply_resolution',
    'is_program_complete',
    'mark_day_completed',
    'reconcile',
    'start_program',
    'today_workout',
]
