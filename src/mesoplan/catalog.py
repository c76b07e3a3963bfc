"""
Exercise Catalog

Read-only exercise metadata: equipment, target muscle, body part.
The engines only ever look exercises up by id.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional


@dataclass(frozen=True)
class Exercise:
    """A single catalog entry."""
    id: str
    name: str
    equipment: str
    target: str
    body_part: str
    is_unilateral: bool = False


# Exercise `target` strings -> canonical muscle keys used by the landmark table
TARGET_TO_MUSCLE: Dict[str, str] = {
    # Chest
    'pecs': 'chest',
    'upper chest': 'chest',
    'lower chest': 'chest',
    # Back
    'lats': 'lats',
    'upper back': 'upper back',
    'middle back': 'upper back',
    'lower back': 'lower back',
    'rear delts': 'shoulders',
    # Shoulders
    'delts': 'shoulders',
    'front delts': 'shoulders',
    'lateral delts': 'shoulders',
    'traps': 'shoulders',
    # Arms
    'biceps': 'biceps',
    'brachialis': 'biceps',
    'triceps': 'triceps',
    'forearm flexors': 'forearms',
    'forearm extensors': 'forearms',
    'brachioradialis': 'forearms',
    'grip': 'forearms',
    # Legs
    'quads': 'quads',
    'hamstrings': 'hamstrings',
    'glutes': 'glutes',
    'calves': 'calves',
    'gastrocnemius': 'calves',
    'soleus': 'calves',
    # Core
    'abs': 'abs',
    'lower abs': 'abs',
    'core stability': 'abs',
    'obliques': 'obliques',
}


def normalize_muscle(target: str) -> str:
    """Map a raw target string onto its canonical muscle key (identity if unknown)."""
    return TARGET_TO_MUSCLE.get(target, target)


def _ex(id, name, equipment, target, body_part, unilateral=False):
    return Exercise(id, name, equipment, target, body_part, unilateral)


DEFAULT_EXERCISES = [
    # Back
    _ex('ex_001', 'One-Arm Dumbbell Row', 'dumbbell', 'lats', 'back', True),
    _ex('ex_002', 'Dumbbell Pullover', 'dumbbell', 'lats', 'back'),
    _ex('ex_003', 'Incline Dumbbell Row', 'dumbbell', 'upper back', 'back'),
    _ex('ex_005', 'Lat Pulldown', 'cable', 'lats', 'back'),
    _ex('ex_006', 'Seated Cable Row', 'cable', 'middle back', 'back'),
    _ex('ex_007', 'Barbell Row', 'barbell', 'lats', 'back'),
    _ex('ex_008', 'T-Bar Row', 'barbell', 'middle back', 'back'),
    _ex('ex_009', 'Deadlift', 'barbell', 'lower back', 'back'),
    _ex('ex_010', 'Pull-Up', 'body weight', 'lats', 'back'),
    _ex('ex_011', 'Chin-Up', 'body weight', 'lats', 'back'),
    _ex('ex_012', 'Straight Arm Pulldown', 'cable', 'lats', 'back'),
    _ex('ex_085', 'Inverted Row', 'body weight', 'upper back', 'back'),
    _ex('ex_086', 'Band Pull-Apart', 'resistance band', 'upper back', 'back'),
    _ex('ex_087', 'Single Arm Cable Row', 'cable', 'lats', 'back', True),
    _ex('ex_088', 'Pendlay Row', 'barbell', 'upper back', 'back'),
    _ex('ex_121', 'Superman', 'body weight', 'lower back', 'back'),

    # Shoulders
    _ex('ex_013', 'Lateral Raise', 'dumbbell', 'lateral delts', 'shoulders'),
    _ex('ex_015', 'Arnold Press', 'dumbbell', 'delts', 'shoulders'),
    _ex('ex_016', 'Overhead Press', 'barbell', 'delts', 'shoulders'),
    _ex('ex_017', 'Dumbbell Shoulder Press', 'dumbbell', 'delts', 'shoulders'),
    _ex('ex_018', 'Face Pull', 'cable', 'rear delts', 'shoulders'),
    _ex('ex_019', 'Upright Row', 'barbell', 'traps', 'shoulders'),
    _ex('ex_020', 'Dumbbell Shrug', 'dumbbell', 'traps', 'shoulders'),
    _ex('ex_021', 'Barbell Shrug', 'barbell', 'traps', 'shoulders'),
    _ex('ex_022', 'Reverse Pec Deck', 'machine', 'rear delts', 'shoulders'),
    _ex('ex_089', 'Cable Lateral Raise', 'cable', 'lateral delts', 'shoulders', True),
    _ex('ex_090', 'Pike Push-Up', 'body weight', 'delts', 'shoulders'),
    _ex('ex_091', 'Machine Shoulder Press', 'machine', 'delts', 'shoulders'),
    _ex('ex_092', 'Band Overhead Pull-Apart', 'resistance band', 'rear delts', 'shoulders'),

    # Chest
    _ex('ex_023', 'Bench Press', 'barbell', 'pecs', 'chest'),
    _ex('ex_024', 'Incline Bench Press', 'barbell', 'upper chest', 'chest'),
    _ex('ex_025', 'Decline Bench Press', 'barbell', 'lower chest', 'chest'),
    _ex('ex_026', 'Dumbbell Bench Press', 'dumbbell', 'pecs', 'chest'),
    _ex('ex_027', 'Incline Dumbbell Press', 'dumbbell', 'upper chest', 'chest'),
    _ex('ex_028', 'Dumbbell Fly', 'dumbbell', 'pecs', 'chest'),
    _ex('ex_029', 'Cable Crossover', 'cable', 'pecs', 'chest'),
    _ex('ex_030', 'Push-Up', 'body weight', 'pecs', 'chest'),
    _ex('ex_031', 'Dips', 'body weight', 'lower chest', 'chest'),
    _ex('ex_032', 'Machine Chest Press', 'machine', 'pecs', 'chest'),
    _ex('ex_093', 'Pec Deck', 'machine', 'pecs', 'chest'),
    _ex('ex_094', 'Incline Dumbbell Fly', 'dumbbell', 'upper chest', 'chest'),
    _ex('ex_095', 'Band Chest Press', 'resistance band', 'pecs', 'chest'),

    # Upper arms
    _ex('ex_033', 'Barbell Curl', 'barbell', 'biceps', 'upper arms'),
    _ex('ex_034', 'Dumbbell Curl', 'dumbbell', 'biceps', 'upper arms'),
    _ex('ex_035', 'Hammer Curl', 'dumbbell', 'brachialis', 'upper arms'),
    _ex('ex_036', 'Preacher Curl', 'ez bar', 'biceps', 'upper arms'),
    _ex('ex_037', 'Concentration Curl', 'dumbbell', 'biceps', 'upper arms', True),
    _ex('ex_038', 'Incline Dumbbell Curl', 'dumbbell', 'biceps', 'upper arms'),
    _ex('ex_096', 'EZ Bar Curl', 'ez bar', 'biceps', 'upper arms'),
    _ex('ex_097', 'Cable Curl', 'cable', 'biceps', 'upper arms'),
    _ex('ex_098', 'Spider Curl', 'dumbbell', 'biceps', 'upper arms'),
    _ex('ex_100', 'Band Curl', 'resistance band', 'biceps', 'upper arms'),
    _ex('ex_039', 'Triceps Pushdown', 'cable', 'triceps', 'upper arms'),
    _ex('ex_040', 'Skull Crusher', 'barbell', 'triceps', 'upper arms'),
    _ex('ex_041', 'Overhead Triceps Extension', 'dumbbell', 'triceps', 'upper arms'),
    _ex('ex_042', 'Close-Grip Bench Press', 'barbell', 'triceps', 'upper arms'),
    _ex('ex_043', 'Diamond Push-Up', 'body weight', 'triceps', 'upper arms'),
    _ex('ex_044', 'Triceps Dips', 'body weight', 'triceps', 'upper arms'),
    _ex('ex_045', 'Triceps Kickback', 'dumbbell', 'triceps', 'upper arms', True),
    _ex('ex_099', 'Cable Overhead Extension', 'cable', 'triceps', 'upper arms'),
    _ex('ex_101', 'EZ Bar Skull Crusher', 'ez bar', 'triceps', 'upper arms'),

    # Lower arms
    _ex('ex_046', 'Zottman Curl', 'dumbbell', 'brachioradialis', 'lower arms'),
    _ex('ex_047', 'Wrist Curl', 'barbell', 'forearm flexors', 'lower arms'),
    _ex('ex_048', 'Reverse Wrist Curl', 'barbell', 'forearm extensors', 'lower arms'),
    _ex('ex_049', 'Reverse Curl', 'barbell', 'brachioradialis', 'lower arms'),
    _ex('ex_050', 'Farmer Walk', 'dumbbell', 'grip', 'lower arms'),

    # Upper legs
    _ex('ex_051', 'Barbell Squat', 'barbell', 'quads', 'upper legs'),
    _ex('ex_052', 'Front Squat', 'barbell', 'quads', 'upper legs'),
    _ex('ex_053', 'Leg Press', 'machine', 'quads', 'upper legs'),
    _ex('ex_054', 'Hack Squat', 'machine', 'quads', 'upper legs'),
    _ex('ex_055', 'Leg Extension', 'machine', 'quads', 'upper legs'),
    _ex('ex_056', 'Romanian Deadlift', 'barbell', 'hamstrings', 'upper legs'),
    _ex('ex_057', 'Leg Curl', 'machine', 'hamstrings', 'upper legs'),
    _ex('ex_058', 'Stiff-Leg Deadlift', 'barbell', 'hamstrings', 'upper legs'),
    _ex('ex_059', 'Bulgarian Split Squat', 'dumbbell', 'quads', 'upper legs', True),
    _ex('ex_060', 'Walking Lunge', 'dumbbell', 'quads', 'upper legs', True),
    _ex('ex_061', 'Hip Thrust', 'barbell', 'glutes', 'upper legs'),
    _ex('ex_062', 'Goblet Squat', 'dumbbell', 'quads', 'upper legs'),
    _ex('ex_102', 'Sumo Deadlift', 'barbell', 'glutes', 'upper legs'),
    _ex('ex_103', 'Dumbbell Lunge', 'dumbbell', 'quads', 'upper legs', True),
    _ex('ex_104', 'Step-Up', 'dumbbell', 'quads', 'upper legs', True),
    _ex('ex_105', 'Glute Bridge', 'body weight', 'glutes', 'upper legs'),
    _ex('ex_106', 'Cable Pull-Through', 'cable', 'glutes', 'upper legs'),
    _ex('ex_107', 'Good Morning', 'barbell', 'hamstrings', 'upper legs'),
    _ex('ex_108', 'Nordic Curl', 'body weight', 'hamstrings', 'upper legs'),
    _ex('ex_109', 'Smith Machine Squat', 'smith machine', 'quads', 'upper legs'),
    _ex('ex_110', 'Trap Bar Deadlift', 'trap bar', 'quads', 'upper legs'),
    _ex('ex_111', 'Kettlebell Swing', 'kettlebell', 'glutes', 'upper legs'),
    _ex('ex_112', 'Pistol Squat', 'body weight', 'quads', 'upper legs', True),
    _ex('ex_113', 'Wall Sit', 'body weight', 'quads', 'upper legs'),
    _ex('ex_114', 'Band Squat', 'resistance band', 'quads', 'upper legs'),
    _ex('ex_127', 'Bodyweight Squat', 'body weight', 'quads', 'upper legs'),
    _ex('ex_128', 'Reverse Lunge', 'body weight', 'quads', 'upper legs', True),
    _ex('ex_129', 'Bodyweight Bulgarian Split Squat', 'body weight', 'quads', 'upper legs', True),
    _ex('ex_130', 'Jump Squat', 'body weight', 'quads', 'upper legs'),
    _ex('ex_131', 'Single-Leg Glute Bridge', 'body weight', 'glutes', 'upper legs', True),
    _ex('ex_132', 'Sliding Leg Curl', 'body weight', 'hamstrings', 'upper legs'),

    # Lower legs
    _ex('ex_063', 'Standing Calf Raise', 'machine', 'calves', 'lower legs'),
    _ex('ex_064', 'Seated Calf Raise', 'machine', 'soleus', 'lower legs'),
    _ex('ex_065', 'Donkey Calf Raise', 'machine', 'gastrocnemius', 'lower legs'),
    _ex('ex_066', 'Single-Leg Calf Raise', 'body weight', 'calves', 'lower legs', True),
    _ex('ex_115', 'Dumbbell Calf Raise', 'dumbbell', 'calves', 'lower legs'),
    _ex('ex_133', 'Bodyweight Calf Raise', 'body weight', 'calves', 'lower legs'),

    # Waist
    _ex('ex_067', 'Plank', 'body weight', 'core stability', 'waist'),
    _ex('ex_068', 'Crunch', 'body weight', 'abs', 'waist'),
    _ex('ex_069', 'Hanging Leg Raise', 'body weight', 'lower abs', 'waist'),
    _ex('ex_070', 'Cable Crunch', 'cable', 'abs', 'waist'),
    _ex('ex_071', 'Russian Twist', 'body weight', 'obliques', 'waist'),
    _ex('ex_073', 'Dead Bug', 'body weight', 'core stability', 'waist'),
    _ex('ex_074', 'Mountain Climber', 'body weight', 'abs', 'waist'),
    _ex('ex_075', 'Side Plank', 'body weight', 'obliques', 'waist'),
    _ex('ex_076', 'Bicycle Crunch', 'body weight', 'obliques', 'waist'),
    _ex('ex_116', 'Pallof Press', 'cable', 'obliques', 'waist'),
    _ex('ex_117', 'Cable Woodchopper', 'cable', 'obliques', 'waist'),
    _ex('ex_118', 'V-Up', 'body weight', 'abs', 'waist'),
    _ex('ex_119', 'Flutter Kicks', 'body weight', 'lower abs', 'waist'),
    _ex('ex_120', 'Lying Leg Raise', 'body weight', 'lower abs', 'waist'),
    _ex('ex_122', 'Hollow Body Hold', 'body weight', 'core stability', 'waist'),
]


class ExerciseCatalog:
    """
    Lookup table over exercise metadata.

    Wraps a fixed id -> Exercise mapping. Lookups of unknown ids return None
    rather than raising, so callers can skip the exercise.
    """

    def __init__(self, exercises: Optional[Iterable[Exercise]] = None):
        """
        Args:
            exercises: Catalog entries (default: built-in catalog)
        """
        if exercises is None:
            exercises = DEFAULT_EXERCISES
        self._by_id: Dict[str, Exercise] = {e.id: e for e in exercises}

    def get(self, exercise_id: str) -> Optional[Exercise]:
        return self._by_id.get(exercise_id)

    def __contains__(self, exercise_id: str) -> bool:
        return exercise_id in self._by_id

    def __iter__(self) -> Iterator[Exercise]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def muscle_for(self, exercise_id: str) -> Optional[str]:
        """Canonical muscle key an exercise trains, or None if unknown."""
        ex = self._by_id.get(exercise_id)
        if ex is None:
            return None
        return TARGET_TO_MUSCLE.get(ex.target)

    def name_for(self, exercise_id: str) -> str:
        ex = self._by_id.get(exercise_id)
        return ex.name if ex else exercise_id


DEFAULT_CATALOG = ExerciseCatalog()
