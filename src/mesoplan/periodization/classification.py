"""
Exercise Classification

Six-tier category used to look up rep range and rest time,
plus the target RIR ramp across a mesocycle.
"""

from ..catalog import ExerciseCatalog
from .templates import is_compound
from .volume import round_half_up


HEAVY_BARBELL_COMPOUND = 'heavy_barbell_compound'
DUMBBELL_COMPOUND = 'dumbbell_compound'
MACHINE_COMPOUND = 'machine_compound'
ISOLATION = 'isolation'
MACHINE_ISOLATION = 'machine_isolation'
ABS_CALVES = 'abs_calves'

ABS_CALVES_TARGETS = frozenset([
    'abs', 'lower abs', 'core stability', 'obliques',
    'gastrocnemius', 'soleus', 'calves',
])

HEAVY_BARBELL_EQUIPMENT = frozenset(['barbell', 'ez bar', 'trap bar', 'smith machine'])
MACHINE_EQUIPMENT = frozenset(['machine', 'cable'])


def exercise_category(exercise_id: str, catalog: ExerciseCatalog) -> str:
    """
    Classify an exercise for rep/rest lookup.

    Unknown ids fall back to plain isolation.
    """
    ex = catalog.get(exercise_id)
    if ex is None:
        return ISOLATION

    if ex.target in ABS_CALVES_TARGETS:
        return ABS_CALVES

    if is_compound(exercise_id):
        if ex.equipment in HEAVY_BARBELL_EQUIPMENT:
            return HEAVY_BARBELL_COMPOUND
        if ex.equipment in MACHINE_EQUIPMENT:
            return MACHINE_COMPOUND
        return DUMBBELL_COMPOUND

    if ex.equipment in MACHINE_EQUIPMENT:
        return MACHINE_ISOLATION
    return ISOLATION


def target_rir(week_index: int, total_weeks: int, is_deload: bool) -> int:
    """
    Reps in reserve for a week: 4 in week one down to 0 in the last
    training week. Deload resets to 4.
    """
    if is_deload:
        return 4
    training_weeks = total_weeks - 1
    if training_weeks <= 1:
        return 3
    return max(0, round_half_up(4 - (week_index / (training_weeks - 1)) * 4))
