"""Readiness scoring and session scaling."""

import pytest

from mesoplan.models import ReadinessCheck
from mesoplan.scheduling import ReadinessLevel, apply_readiness, readiness_score, session_adjustments
from mesoplan.scheduling.readiness import readiness_level


def _exercise(**overrides):
    ex = {
        'exercise_id': 'ex_051', 'name': 'Barbell Squat', 'sets': 4,
        'reps': 10, 'min_reps': 6, 'max_reps': 10, 'target_rir': 2,
        'weight': 100.0, 'rest_time': 150, 'body_part': 'upper legs',
        'is_unilateral': False, 'overridden': False,
    }
    ex.update(overrides)
    return ex


@pytest.mark.parametrize("check, score", [
    (ReadinessCheck(3, 3, 3, 3), 100),
    (ReadinessCheck(3, 3, 2, 2), 83),
    (ReadinessCheck(2, 2, 2, 2), 67),
    (ReadinessCheck(1, 2, 2, 1), 50),
    (ReadinessCheck(1, 1, 1, 1), 33),
])
def test_score(check, score):
    assert readiness_score(check) == score


@pytest.mark.parametrize("score, level", [
    (100, ReadinessLevel.PEAK),
    (86, ReadinessLevel.PEAK),
    (85, ReadinessLevel.GOOD),
    (66, ReadinessLevel.GOOD),
    (65, ReadinessLevel.MODERATE),
    (42, ReadinessLevel.MODERATE),
    (41, ReadinessLevel.LOW),
    (0, ReadinessLevel.LOW),
])
def test_level_boundaries(score, level):
    assert readiness_level(score) is level


@pytest.mark.parametrize("score", [100, 70])
def test_good_days_leave_session_alone(score):
    exercises = [_exercise()]
    assert apply_readiness(exercises, session_adjustments(score)) is exercises


def test_moderate():
    ex = apply_readiness([_exercise()], session_adjustments(50))[0]
    # 4 x 0.85 = 3.4, 100 x 0.95, 150 x 1.2
    assert ex['sets'] == 3
    assert ex['weight'] == 95.0
    assert ex['rest_time'] == 180
    assert ex['target_rir'] == 3


def test_low():
    ex = apply_readiness([_exercise(weight=61.0)], session_adjustments(33))[0]
    # 4 x 0.7 = 2.8, 61 x 0.9 = 54.9 -> 55.0, 150 x 1.3 = 195
    assert ex['sets'] == 3
    assert ex['weight'] == 55.0
    assert ex['rest_time'] == 195
    assert ex['target_rir'] == 4


def test_floors():
    low = session_adjustments(33)
    ex = apply_readiness(
        [_exercise(sets=1, weight=0, rest_time=10, target_rir=4)], low, min_rest_seconds=15
    )[0]
    assert ex['sets'] == 1
    assert ex['weight'] == 0
    assert ex['rest_time'] == 15
    assert ex['target_rir'] == 4


def test_missing_rir_uses_default():
    ex = apply_readiness([_exercise(target_rir=None)], session_adjustments(50))[0]
    assert ex['target_rir'] == 3


def test_input_not_mutated():
    original = _exercise()
    apply_readiness([original], session_adjustments(33))
    assert original['sets'] == 4
    assert original['weight'] == 100.0
