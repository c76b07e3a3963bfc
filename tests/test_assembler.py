"""Program generation end to end."""

from dataclasses import replace
from datetime import datetime

import pytest

from mesoplan.catalog import DEFAULT_CATALOG, ExerciseCatalog
from mesoplan.landmarks import VOLUME_LANDMARKS
from mesoplan.models import (
    EquipmentSetup,
    Experience,
    Goal,
    Limitation,
    ProgramDay,
    ProgramExercise,
    Sex,
    SplitType,
    UserProfile,
)
from mesoplan.periodization import (
    ExercisePicker,
    ProgramAssembler,
    derive_modifiers,
    estimate_duration,
    format_program_text,
)
from mesoplan.periodization.assembler import allowed_equipment, muscle_frequency
from mesoplan.periodization.modifiers import RISKY_EXERCISES
from mesoplan.periodization.templates import MESO_LENGTH, day_templates, is_compound
from mesoplan.periodization.volume import round_half_up

NOW = datetime(2025, 3, 3, 9, 0)


def _all_exercises(program):
    for week in program.weeks:
        for day in week.days:
            for ex in day.exercises:
                yield week, day, ex


class TestBeginnerFullBody:

    def test_shape(self, full_body_program):
        program = full_body_program
        assert program.split_type is SplitType.FULL_BODY
        assert program.total_weeks == MESO_LENGTH[Experience.BEGINNER] == 4
        assert len(program.weeks) == 4
        assert all(len(w.days) == 3 for w in program.weeks)
        assert program.name == "Full Body – 4 weeks"
        assert program.id.startswith("prog_")
        assert program.weeks[-1].is_deload
        assert not any(w.is_deload for w in program.weeks[:-1])

    def test_targets_between_mev_and_mav_low(self, full_body_program):
        for week in full_body_program.weeks[:-1]:
            for muscle, sets in week.volume_targets.items():
                lm = VOLUME_LANDMARKS[muscle]
                assert lm.mev <= sets <= lm.mav_low, (week.week_number, muscle)

    def test_deload_week_is_maintenance(self, full_body_program):
        deload = full_body_program.weeks[-1]
        for muscle, sets in deload.volume_targets.items():
            assert sets == VOLUME_LANDMARKS[muscle].mv

    def test_ramp_non_decreasing(self, full_body_program):
        training = full_body_program.weeks[:-1]
        for muscle in training[0].volume_targets:
            series = [w.volume_targets[muscle] for w in training]
            assert series == sorted(series), muscle

    def test_rir_ramps_down_then_resets(self, full_body_program):
        rirs = [w.days[0].exercises[0].target_rir for w in full_body_program.weeks]
        assert rirs == [4, 2, 0, 4]

    def test_compound_weight_progresses_and_resets(self, full_body_program):
        bench = []
        for week in full_body_program.weeks:
            ex = next(e for e in week.days[0].exercises if e.exercise_id == 'ex_023')
            bench.append(ex.suggested_weight)
        assert bench[0] == 35.0
        assert bench[2] > bench[0]
        assert bench[3] == bench[0]

    def test_no_history_starts_lighter(self, assembler, beginner_profile):
        program = assembler.generate(beginner_profile, now=NOW, has_history=False)
        bench = next(e for e in program.weeks[0].days[0].exercises if e.exercise_id == 'ex_023')
        assert bench.suggested_weight == 30.0

    def test_day_sets_match_allocation(self, full_body_program, beginner_profile):
        templates = day_templates(full_body_program.split_type, beginner_profile.days_per_week)
        for week in full_body_program.weeks:
            for day, template in zip(week.days, templates):
                expected = sum(
                    max(round_half_up(week.volume_targets[m] / muscle_frequency(templates, m)), 0)
                    for m in template.muscles
                )
                assert day.total_sets == expected


class TestKneeLimitation:

    def test_quads_and_glutes_collapse(self, assembler, knee_profile):
        program = assembler.generate(knee_profile, now=NOW)
        for week in program.weeks:
            assert 6 <= week.volume_targets['quads'] <= 8
            assert 0 <= week.volume_targets['glutes'] <= 2
        assert program.weeks[-1].volume_targets['quads'] == 6

    def test_risky_only_after_preferred_exhausted(self, assembler, knee_profile):
        program = assembler.generate(knee_profile, now=NOW)
        risky = RISKY_EXERCISES[Limitation.KNEE]
        preferred, _ = ExercisePicker().candidates(
            'quads', allowed_equipment(knee_profile), derive_modifiers(knee_profile)
        )

        for week in program.weeks:
            for day in week.days:
                ids = {ex.exercise_id for ex in day.exercises}
                if ids & risky:
                    assert set(preferred) <= ids

    def test_machines_preferred(self, assembler, knee_profile):
        program = assembler.generate(knee_profile, now=NOW)
        quads = [
            ex.exercise_id for ex in program.weeks[0].days[0].exercises
            if DEFAULT_CATALOG.muscle_for(ex.exercise_id) == 'quads'
        ]
        assert quads == ['ex_053']


@pytest.mark.parametrize("days", [3, 4, 5, 6])
@pytest.mark.parametrize("goal,experience", [
    (Goal.HYPERTROPHY, Experience.BEGINNER),
    (Goal.STRENGTH, Experience.INTERMEDIATE),
    (Goal.RECOMPOSITION, Experience.ADVANCED),
])
def test_program_invariants(assembler, days, goal, experience):
    profile = UserProfile(
        goal=goal,
        experience=experience,
        days_per_week=days,
        sex=Sex.FEMALE,
        weight=62,
        age=52,
        training_years=4,
    )
    program = assembler.generate(profile, now=NOW)

    assert len(program.weeks) == MESO_LENGTH[experience]
    for week in program.weeks:
        assert len(week.days) == days
        for muscle, sets in week.volume_targets.items():
            lm = VOLUME_LANDMARKS[muscle]
            assert lm.mv <= sets <= lm.mrv
            if week.is_deload:
                assert sets == lm.mv

    for week, day, ex in _all_exercises(program):
        assert ex.sets >= 1
        assert 1 <= ex.min_reps <= ex.max_reps
        assert ex.target_rir >= 0
        assert ex.rest_time >= 15
        assert ex.suggested_weight >= 0

    for week in program.weeks:
        for day in week.days:
            ids = [ex.exercise_id for ex in day.exercises]
            assert len(ids) == len(set(ids))
            order = [0 if is_compound(i) else 1 for i in ids]
            assert order == sorted(order)


def test_bodyweight_setup_has_no_load(assembler):
    profile = UserProfile(
        goal=Goal.HYPERTROPHY,
        experience=Experience.BEGINNER,
        days_per_week=3,
        sex=Sex.MALE,
        weight=80,
        equipment=EquipmentSetup.BODYWEIGHT,
    )
    program = assembler.generate(profile, now=NOW)
    for _, _, ex in _all_exercises(program):
        assert DEFAULT_CATALOG.get(ex.exercise_id).equipment in ('body weight', 'resistance band')
        assert ex.suggested_weight == 0


def test_owned_equipment_overrides_setup(assembler, beginner_profile):
    profile = replace(beginner_profile, owned_equipment=('dumbbell',))
    program = assembler.generate(profile, now=NOW)
    for _, _, ex in _all_exercises(program):
        assert DEFAULT_CATALOG.get(ex.exercise_id).equipment == 'dumbbell'


def test_catalog_without_entry_skips_it(beginner_profile):
    catalog = ExerciseCatalog([e for e in DEFAULT_CATALOG if e.id != 'ex_023'])
    program = ProgramAssembler(catalog=catalog).generate(beginner_profile, now=NOW)
    assert all(ex.exercise_id != 'ex_023' for _, _, ex in _all_exercises(program))


def test_age_scales_rest(assembler, beginner_profile):
    young = assembler.generate(beginner_profile, now=NOW)
    older = assembler.generate(replace(beginner_profile, age=55), now=NOW)

    young_rest = {ex.exercise_id: ex.rest_time for ex in young.weeks[0].days[0].exercises}
    older_rest = {ex.exercise_id: ex.rest_time for ex in older.weeks[0].days[0].exercises}
    common = set(young_rest) & set(older_rest)

    assert common
    for ex_id in common:
        assert older_rest[ex_id] == round_half_up(young_rest[ex_id] * 1.2)


def test_derive_modifiers():
    base = dict(goal=Goal.HYPERTROPHY, experience=Experience.BEGINNER, days_per_week=3, weight=70)

    young = derive_modifiers(UserProfile(sex=Sex.MALE, age=25, **base))
    assert (young.rest_scale, young.overload_scale, young.prefers_machines) == (1.0, 1.0, False)

    forties = derive_modifiers(UserProfile(sex=Sex.FEMALE, age=45, **base))
    assert forties.rest_scale == pytest.approx(0.99)
    assert forties.overload_scale == 0.85

    older = derive_modifiers(UserProfile(sex=Sex.MALE, age=60, **base))
    assert older.prefers_machines
    assert older.overload_scale == 0.7


def test_estimate_duration():
    day = ProgramDay(
        day_index=0, label='Full Body A', label_key='fullBodyA', focus='full_body',
        muscle_targets=('chest', 'shoulders'),
        exercises=(
            ProgramExercise('ex_023', sets=3, min_reps=6, max_reps=10, rest_time=150),
            ProgramExercise('ex_013', sets=3, min_reps=10, max_reps=15, rest_time=90),
        ),
    )
    # 3 * (50 + 150) + 3 * (35 + 90) = 975 s
    assert estimate_duration(day) == 16


def test_format_program_text(full_body_program):
    text = format_program_text(full_body_program)
    assert full_body_program.name in text
    assert "WEEK 4 (DELOAD)" in text
    assert "Bench Press" in text
