"""Flattening a program day for a live workout."""

from mesoplan.models import ProgramDay, ProgramExercise
from mesoplan.scheduling import flatten_program_day


def _day():
    return ProgramDay(
        day_index=0, label='Lower A', label_key='lowerA', focus='lower',
        muscle_targets=('quads', 'hamstrings'),
        exercises=(
            ProgramExercise('ex_051', sets=3, min_reps=6, max_reps=10, target_rir=3,
                            rest_time=150, suggested_weight=60.0),
            ProgramExercise('ex_059', sets=2, min_reps=8, max_reps=12, target_rir=3,
                            rest_time=120, suggested_weight=14.0),
        ),
    )


def test_flatten_fields():
    flat = flatten_program_day(_day())
    assert [e['exercise_id'] for e in flat] == ['ex_051', 'ex_059']

    squat = flat[0]
    assert squat['name'] == 'Barbell Squat'
    assert squat['sets'] == 3
    assert squat['reps'] == 10
    assert (squat['min_reps'], squat['max_reps']) == (6, 10)
    assert squat['target_rir'] == 3
    assert squat['weight'] == 60.0
    assert squat['rest_time'] == 150
    assert squat['body_part'] == 'upper legs'
    assert not squat['is_unilateral']
    assert not squat['overridden']

    assert flat[1]['is_unilateral']


def test_weight_overrides():
    flat = flatten_program_day(_day(), weight_overrides={'ex_051': 62.5})
    assert flat[0]['weight'] == 62.5
    assert flat[0]['overridden']
    assert flat[1]['weight'] == 14.0


def test_merged_exercises_appended():
    merged = [ProgramExercise('ex_023', sets=2, min_reps=6, max_reps=10, rest_time=150)]
    flat = flatten_program_day(_day(), merged=merged)
    assert [e['exercise_id'] for e in flat] == ['ex_051', 'ex_059', 'ex_023']
    assert flat[-1]['sets'] == 2


def test_unknown_exercise_degrades():
    day = ProgramDay(
        day_index=0, label='X', label_key='x', focus='x', muscle_targets=(),
        exercises=(ProgramExercise('ex_999', sets=1, max_reps=8),),
    )
    flat = flatten_program_day(day)
    assert flat[0]['name'] == ''
    assert flat[0]['min_reps'] == 8
    assert flat[0]['weight'] == 0


def test_set_deltas_apply_to_own_exercises_only():
    merged = [ProgramExercise('ex_051', sets=2, min_reps=6, max_reps=10, rest_time=150)]
    flat = flatten_program_day(_day(), merged=merged, set_deltas={'ex_051': 1, 'ex_059': -5})
    assert [e['sets'] for e in flat] == [4, 1, 2]
