"""Double-progression suggestions and weight estimation."""

from datetime import datetime

import pytest

from mesoplan.models import Experience, ProgramDay, ProgramExercise, Sex
from mesoplan.periodization import OverloadAdvisor, OverloadKind
from mesoplan.periodization.weights import (
    equipment_increment,
    estimate_e1rm,
    estimate_weight,
    last_logged_weight,
    last_session_e1rm,
    round_to_increment,
)


def _day(*exercises):
    return ProgramDay(
        day_index=0, label='Upper A', label_key='upperA', focus='upper',
        muscle_targets=('chest', 'biceps'), exercises=exercises,
    )


BENCH = ProgramExercise('ex_023', sets=3, min_reps=6, max_reps=10)
CURL = ProgramExercise('ex_034', sets=3, min_reps=10, max_reps=15)


class TestOverloadAdvisor:

    def test_no_history_no_suggestion(self):
        assert OverloadAdvisor().suggest([], _day(BENCH)) == {}

    def test_decrease_when_most_sets_fall_short(self, make_session):
        history = [make_session('s1', datetime(2025, 3, 3, 18), {'ex_023': [(4, 60), (5, 60), (8, 60)]})]
        result = OverloadAdvisor().suggest(history, _day(BENCH))
        assert result['ex_023'].kind is OverloadKind.DECREASE_WEIGHT
        assert result['ex_023'].params == {'weight': 57.5}

    def test_increase_after_two_sessions_at_top(self, make_session):
        history = [
            make_session('s2', datetime(2025, 3, 5, 18), {'ex_023': [(10, 60)] * 3}),
            make_session('s1', datetime(2025, 3, 3, 18), {'ex_023': [(11, 60)] * 3}),
        ]
        result = OverloadAdvisor().suggest(history, _day(BENCH))
        assert result['ex_023'].kind is OverloadKind.INCREASE_WEIGHT
        assert result['ex_023'].params == {'weight': 62.5, 'reps': 6}

    def test_one_session_at_top_is_not_enough(self, make_session):
        history = [make_session('s1', datetime(2025, 3, 3, 18), {'ex_023': [(10, 60)] * 3})]
        assert OverloadAdvisor().suggest(history, _day(BENCH)) == {}

    def test_add_rep_inside_range(self, make_session):
        history = [make_session('s1', datetime(2025, 3, 3, 18), {'ex_034': [(12, 14), (11, 14), (10, 14)]})]
        result = OverloadAdvisor().suggest(history, _day(CURL))
        assert result['ex_034'].kind is OverloadKind.ADD_REP
        assert result['ex_034'].params == {'target': 15}

    def test_dumbbell_increment(self, make_session):
        history = [
            make_session('s2', datetime(2025, 3, 5, 18), {'ex_034': [(15, 14)] * 3}),
            make_session('s1', datetime(2025, 3, 3, 18), {'ex_034': [(15, 14)] * 3}),
        ]
        result = OverloadAdvisor().suggest(history, _day(CURL))
        assert result['ex_034'].params['weight'] == 16

    def test_only_last_two_sessions_count(self, make_session):
        history = [
            make_session('s3', datetime(2025, 3, 7, 18), {'ex_023': [(10, 60)] * 3}),
            make_session('s2', datetime(2025, 3, 5, 18), {'ex_023': [(7, 60)] * 3}),
            make_session('s1', datetime(2025, 3, 3, 18), {'ex_023': [(10, 60)] * 3}),
        ]
        result = OverloadAdvisor().suggest(history, _day(BENCH))
        assert 'ex_023' not in result

    def test_unknown_exercise_skipped(self, make_session):
        history = [make_session('s1', datetime(2025, 3, 3, 18), {'ex_999': [(4, 60)] * 3})]
        day = _day(ProgramExercise('ex_999', sets=3, min_reps=8, max_reps=12))
        assert OverloadAdvisor().suggest(history, day) == {}

    def test_recent_logs_most_recent_first(self, make_session):
        history = [
            make_session('s2', datetime(2025, 3, 5, 18), {'ex_023': [(8, 62.5)]}),
            make_session('s1', datetime(2025, 3, 3, 18), {'ex_023': [(8, 60)], 'ex_034': [(12, 14)]}),
        ]
        logs = OverloadAdvisor.recent_logs('ex_034', history)
        assert len(logs) == 1
        assert logs[0].sets[0].weight == 14


class TestWeights:

    def test_bench_male_beginner(self):
        assert estimate_weight('ex_023', 'barbell', 'pecs', 80, Sex.MALE, Experience.BEGINNER) == 35.0

    def test_female_upper_body_modifier(self):
        # 80 * 0.45 * 0.55 = 19.8 -> 20
        assert estimate_weight('ex_023', 'barbell', 'pecs', 80, Sex.FEMALE, Experience.BEGINNER) == 20.0

    def test_no_history_reduction(self):
        # 80 * 0.45 * 0.85 = 30.6 -> 30
        weight = estimate_weight(
            'ex_023', 'barbell', 'pecs', 80, Sex.MALE, Experience.BEGINNER, has_history=False
        )
        assert weight == 30.0

    def test_fallback_ratio(self):
        # Pec Deck: chest:machine intermediate 0.35 -> 28 -> 30 on 5kg stack steps
        assert estimate_weight('ex_093', 'machine', 'pecs', 80, Sex.MALE, Experience.INTERMEDIATE) == 30.0

    def test_bodyweight_is_zero(self):
        assert estimate_weight('ex_030', 'body weight', 'pecs', 80, Sex.MALE, Experience.ADVANCED) == 0

    @pytest.mark.parametrize("equipment,inc", [
        ('barbell', 2.5), ('dumbbell', 2.0), ('cable', 5.0), ('other', 2.5),
    ])
    def test_increments(self, equipment, inc):
        assert equipment_increment(equipment) == inc

    def test_round_never_below_one_increment(self):
        assert round_to_increment(1, 'barbell') == 2.5
        assert round_to_increment(0, 'barbell') == 0
        assert round_to_increment(-3, 'barbell') == 0

    def test_e1rm(self):
        assert estimate_e1rm(100, 1) == 100
        assert estimate_e1rm(100, 5) == pytest.approx(112.5)
        assert estimate_e1rm(100, 15) == pytest.approx(150)
        assert estimate_e1rm(0, 5) == 0

    def test_last_logged_weight_median(self, make_session):
        history = [
            make_session('s2', datetime(2025, 3, 5, 18), {'ex_034': [(10, 0)]}),
            make_session('s1', datetime(2025, 3, 3, 18), {'ex_034': [(10, 12), (10, 14), (8, 16), (8, 18)]}),
        ]
        assert last_logged_weight('ex_034', history) == 15
        assert last_logged_weight('ex_023', history) is None

    def test_last_session_e1rm(self, make_session):
        history = [
            make_session('s3', datetime(2025, 3, 7, 18), {'ex_023': [(10, 0)]}),
            make_session('s2', datetime(2025, 3, 5, 18), {'ex_023': [(5, 100), (8, 90)]}),
            make_session('s1', datetime(2025, 3, 3, 18), {'ex_023': [(1, 140)]}),
        ]
        assert last_session_e1rm('ex_023', history) == pytest.approx(112.5)
        assert last_session_e1rm('ex_034', history) is None
