"""
Feedback Adaptation

Turns a week's post-session feedback into per-muscle set deltas for the
following week. The program itself is never rewritten: deltas are handed
back as tagged adjustments and applied when the session is built.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from ..catalog import DEFAULT_CATALOG, ExerciseCatalog
from ..models import ProgramDay, SessionFeedback, TrainingProgram, day_key

logger = logging.getLogger(__name__)

MIN_FEEDBACK_COVERAGE = 0.5


@dataclass(frozen=True)
class VolumeAdjustment:
    muscle: str
    delta_sets: int
    reason_key: str


def compute_feedback_adjustments(
    feedbacks: Sequence[SessionFeedback],
    muscles: Sequence[str]
) -> List[VolumeAdjustment]:
    """
    Set deltas from averaged pump, soreness and performance scores.

    - soreness >= 2.5 and performance <= 1.5: over-reached, -2 sets
    - soreness >= 2.5 and performance <= 2: lingering fatigue, -1 set
    - pump <= 1.5, soreness <= 1.5 and performance >= 2.5: under-stimulated, +1 set
    - anything else is the sweet spot: no change

    Args:
        feedbacks: The week's session feedback
        muscles: Muscles trained on the days the feedback covers

    Returns:
        One adjustment per muscle with a non-zero delta
    """
    if not feedbacks:
        return []

    n = len(feedbacks)
    pump = sum(f.pump for f in feedbacks) / n
    soreness = sum(f.soreness for f in feedbacks) / n
    performance = sum(f.performance for f in feedbacks) / n

    if soreness >= 2.5 and performance <= 1.5:
        delta, reason = -2, 'feedback.overreached'
    elif soreness >= 2.5 and performance <= 2:
        delta, reason = -1, 'feedback.fatigue'
    elif pump <= 1.5 and soreness <= 1.5 and performance >= 2.5:
        delta, reason = 1, 'feedback.understimulated'
    else:
        return []

    return [VolumeAdjustment(m, delta, reason) for m in dict.fromkeys(muscles)]


def week_feedback(
    program: TrainingProgram,
    week_number: int,
    feedback: Mapping[str, SessionFeedback]
) -> Dict[int, SessionFeedback]:
    """Feedback recorded for a program week, by day index."""
    week = program.week(week_number)
    if week is None:
        return {}
    return {
        day.day_index: feedback[day_key(week_number, day.day_index)]
        for day in week.days
        if day_key(week_number, day.day_index) in feedback
    }


def week_feedback_adjustments(
    program: TrainingProgram,
    week_number: int,
    feedback: Mapping[str, SessionFeedback]
) -> List[VolumeAdjustment]:
    """
    Adjustments for the week after week_number.

    Needs feedback on at least half of the week's days; otherwise empty.
    """
    week = program.week(week_number)
    if week is None:
        return []

    recorded = week_feedback(program, week_number, feedback)
    if len(recorded) < len(week.days) * MIN_FEEDBACK_COVERAGE:
        logger.debug(f"Week {week_number}: feedback on {len(recorded)}/{len(week.days)} days, not enough")
        return []

    muscles: List[str] = []
    for day_index in sorted(recorded):
        for m in week.days[day_index].muscle_targets:
            if m not in muscles:
                muscles.append(m)

    adjustments = compute_feedback_adjustments([recorded[i] for i in sorted(recorded)], muscles)
    logger.info(f"Week {week_number} feedback: {len(adjustments)} muscle adjustment(s)")
    return adjustments


def day_set_deltas(
    day: ProgramDay,
    adjustments: Sequence[VolumeAdjustment],
    catalog: Optional[ExerciseCatalog] = None
) -> Dict[str, int]:
    """
    Per-exercise set deltas for a day.

    Each adjusted muscle's delta lands once per day, on the first exercise
    that trains it, and never takes that exercise below one set.
    """
    catalog = catalog if catalog is not None else DEFAULT_CATALOG
    by_muscle = {a.muscle: a.delta_sets for a in adjustments}
    deltas: Dict[str, int] = {}

    for muscle in day.muscle_targets:
        delta = by_muscle.get(muscle)
        if not delta:
            continue
        for ex in day.exercises:
            if ex.exercise_id in deltas or catalog.muscle_for(ex.exercise_id) != muscle:
                continue
            applied = max(1, ex.sets + delta) - ex.sets
            if applied:
                deltas[ex.exercise_id] = applied
                break

    return deltas
