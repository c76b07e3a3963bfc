"""
Session building: flatten a program day into the exercise list a live
workout consumes.
"""

from typing import Dict, List, Optional, Sequence

from ..catalog import DEFAULT_CATALOG, ExerciseCatalog
from ..models import ProgramDay, ProgramExercise


def flatten_program_day(
    day: ProgramDay,
    catalog: Optional[ExerciseCatalog] = None,
    weight_overrides: Optional[Dict[str, float]] = None,
    merged: Sequence[ProgramExercise] = (),
    set_deltas: Optional[Dict[str, int]] = None
) -> List[Dict]:
    """
    Flat exercise list for a session.

    Args:
        day: Program day to train
        catalog: Exercise catalog for names and flags
        weight_overrides: exercise_id -> weight, e.g. from overload suggestions
        merged: Extra exercises carried over from merged days
        set_deltas: exercise_id -> set change for the day's own exercises,
            e.g. from feedback adjustments

    Returns:
        List of exercise dicts, day exercises first then merged ones
    """
    catalog = catalog if catalog is not None else DEFAULT_CATALOG
    overrides = weight_overrides or {}
    deltas = set_deltas or {}
    flat = []

    own = [(pex, deltas.get(pex.exercise_id, 0)) for pex in day.exercises]
    for pex, delta in own + [(pex, 0) for pex in merged]:
        ex = catalog.get(pex.exercise_id)
        max_reps = pex.max_reps or pex.reps
        weight = overrides.get(pex.exercise_id, pex.suggested_weight or 0)

        flat.append({
            'exercise_id': pex.exercise_id,
            'name': ex.name if ex else '',
            'sets': max(1, pex.sets + delta),
            'reps': max_reps,
            'min_reps': pex.min_reps or max_reps,
            'max_reps': max_reps,
            'target_rir': pex.target_rir,
            'weight': max(0, weight),
            'rest_time': pex.rest_time,
            'body_part': ex.body_part if ex else '',
            'is_unilateral': ex.is_unilateral if ex else False,
            'overridden': pex.exercise_id in overrides,
        })

    return flat
