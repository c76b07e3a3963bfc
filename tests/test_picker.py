"""Exercise picking: slot count, rotation, dedupe and limitation ordering."""

from mesoplan.models import Experience, Goal, Limitation, Sex, UserProfile
from mesoplan.periodization import ExercisePicker, derive_modifiers
from mesoplan.periodization.modifiers import RISKY_EXERCISES, ProfileModifiers
from mesoplan.periodization.templates import EQUIPMENT_BY_SETUP
from mesoplan.models import EquipmentSetup

FULL_GYM = EQUIPMENT_BY_SETUP[EquipmentSetup.FULL_GYM]


def _knee_modifiers():
    profile = UserProfile(
        goal=Goal.STRENGTH,
        experience=Experience.BEGINNER,
        days_per_week=3,
        sex=Sex.MALE,
        weight=80,
        limitations=frozenset([Limitation.KNEE]),
    )
    return derive_modifiers(profile)


class TestSlots:

    def test_four_sets_single_exercise(self):
        picked, used = ExercisePicker().pick('chest', 4, 0, 0, FULL_GYM, frozenset())
        assert len(picked) == 1
        assert picked[0].sets == 4
        assert used == {picked[0].exercise_id}

    def test_five_sets_split_across_two(self):
        picked, used = ExercisePicker().pick('chest', 5, 0, 0, FULL_GYM, frozenset())
        assert [p.sets for p in picked] == [3, 2]
        assert len(used) == 2

    def test_zero_sets_picks_nothing(self):
        picked, used = ExercisePicker().pick('chest', 0, 0, 0, FULL_GYM, frozenset({'ex_001'}))
        assert picked == []
        assert used == {'ex_001'}


class TestRotation:

    def test_variant_shifts_start(self):
        picker = ExercisePicker()
        a, _ = picker.pick('chest', 3, 0, 0, FULL_GYM, frozenset())
        b, _ = picker.pick('chest', 3, 1, 0, FULL_GYM, frozenset())
        assert a[0].exercise_id == 'ex_023'
        assert b[0].exercise_id == 'ex_024'

    def test_phase_rotates_only_second_slot(self):
        picker = ExercisePicker()
        first_half, _ = picker.pick('chest', 6, 0, 0, FULL_GYM, frozenset())
        second_half, _ = picker.pick('chest', 6, 0, 1, FULL_GYM, frozenset())
        assert first_half[0].exercise_id == second_half[0].exercise_id == 'ex_023'
        assert first_half[1].exercise_id == 'ex_026'
        assert second_half[1].exercise_id == 'ex_024'

    def test_used_ids_are_skipped(self):
        picked, used = ExercisePicker().pick('chest', 3, 0, 0, FULL_GYM, frozenset({'ex_023'}))
        assert picked[0].exercise_id == 'ex_026'
        assert used == {'ex_023', 'ex_026'}

    def test_exhausted_pool_repeats(self):
        picker = ExercisePicker(pools={'chest': ('ex_023',)})
        picked, used = picker.pick('chest', 6, 0, 0, FULL_GYM, frozenset())
        assert [p.exercise_id for p in picked] == ['ex_023', 'ex_023']
        assert used == {'ex_023'}


class TestFiltering:

    def test_equipment_filter(self):
        bodyweight = EQUIPMENT_BY_SETUP[EquipmentSetup.BODYWEIGHT]
        preferred, risky = ExercisePicker().candidates('chest', bodyweight, ProfileModifiers())
        assert preferred == ['ex_030', 'ex_031', 'ex_095']
        assert risky == []

    def test_empty_pool(self):
        picked, used = ExercisePicker().pick('chest', 4, 0, 0, ['trap bar'], frozenset())
        assert picked == []
        assert used == frozenset()

    def test_unknown_ids_in_pool_are_ignored(self):
        picker = ExercisePicker(pools={'chest': ('ex_999', 'ex_023')})
        preferred, _ = picker.candidates('chest', FULL_GYM, ProfileModifiers())
        assert preferred == ['ex_023']


class TestLimitations:

    def test_knee_risky_moves_to_separate_group(self):
        preferred, risky = ExercisePicker().candidates('quads', FULL_GYM, _knee_modifiers())
        knee = RISKY_EXERCISES[Limitation.KNEE]
        assert not knee & set(preferred)
        assert set(risky) <= knee
        assert 'ex_051' in risky

    def test_machines_first_when_preferred(self):
        preferred, risky = ExercisePicker().candidates('quads', FULL_GYM, _knee_modifiers())
        assert preferred[:2] == ['ex_053', 'ex_109']
        assert risky[:2] == ['ex_054', 'ex_055']

    def test_risky_only_after_preferred_exhausted(self):
        picker = ExercisePicker()
        modifiers = _knee_modifiers()
        preferred, _ = picker.candidates('quads', FULL_GYM, modifiers)

        picked, _ = picker.pick('quads', 6, 2, 1, FULL_GYM, frozenset(), modifiers)
        assert all(p.exercise_id in preferred for p in picked)

        picked, _ = picker.pick('quads', 6, 0, 0, FULL_GYM, frozenset(preferred), modifiers)
        assert all(p.exercise_id in RISKY_EXERCISES[Limitation.KNEE] for p in picked)
