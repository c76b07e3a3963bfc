"""
Program Templates

Static tables consumed by the program assembler: equipment per setup,
split selection, per-muscle exercise pools, split day templates,
goal x category rep/rest config, mesocycle lengths.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Tuple

from ..models import EquipmentSetup, Experience, Goal, SplitType


EQUIPMENT_BY_SETUP: Dict[EquipmentSetup, Tuple[str, ...]] = {
    EquipmentSetup.FULL_GYM: (
        'barbell', 'dumbbell', 'cable', 'machine', 'body weight',
        'kettlebell', 'resistance band', 'ez bar', 'smith machine', 'trap bar',
    ),
    EquipmentSetup.HOME_DUMBBELL: (
        'dumbbell', 'body weight', 'resistance band', 'kettlebell',
    ),
    EquipmentSetup.BODYWEIGHT: (
        'body weight', 'resistance band',
    ),
}


def split_for_days(days_per_week: int) -> SplitType:
    """3 days -> full body, 4-5 -> upper/lower, 6 -> push/pull/legs."""
    if days_per_week <= 3:
        return SplitType.FULL_BODY
    if days_per_week <= 5:
        return SplitType.UPPER_LOWER
    return SplitType.PPL


# Ordered by priority; the picker walks these in order
EXERCISE_POOLS: Dict[str, Tuple[str, ...]] = {
    'chest': (
        'ex_023',  # Bench Press
        'ex_026',  # DB Bench Press
        'ex_024',  # Incline Bench Press
        'ex_027',  # Incline DB Press
        'ex_028',  # DB Fly
        'ex_029',  # Cable Crossover
        'ex_032',  # Machine Press
        'ex_093',  # Pec Deck
        'ex_094',  # Incline DB Fly
        'ex_030',  # Push-Up
        'ex_031',  # Dips
        'ex_095',  # Band Chest Press
    ),
    'lats': (
        'ex_005',  # Lat Pulldown
        'ex_007',  # Barbell Row
        'ex_001',  # One-Arm DB Row
        'ex_006',  # Seated Cable Row
        'ex_002',  # DB Pullover
        'ex_012',  # Straight Arm Pulldown
        'ex_087',  # Single Arm Cable Row
        'ex_010',  # Pull-Up
        'ex_011',  # Chin-Up
        'ex_085',  # Inverted Row
    ),
    'upper back': (
        'ex_003',  # Incline DB Row
        'ex_008',  # T-Bar Row
        'ex_088',  # Pendlay Row
        'ex_006',  # Seated Cable Row
        'ex_085',  # Inverted Row
        'ex_086',  # Band Pull-Apart
        'ex_018',  # Face Pull
        'ex_019',  # Upright Row
        'ex_020',  # DB Shrug
        'ex_021',  # Barbell Shrug
        'ex_022',  # Reverse Pec Deck
        'ex_092',  # Band Overhead Pull-Apart
    ),
    'lower back': (
        'ex_009',  # Deadlift
        'ex_107',  # Good Morning
        'ex_121',  # Superman
    ),
    'shoulders': (
        'ex_016',  # Overhead Press
        'ex_017',  # DB Shoulder Press
        'ex_013',  # Lateral Raise
        'ex_015',  # Arnold Press
        'ex_089',  # Cable Lateral Raise
        'ex_091',  # Machine Shoulder Press
        'ex_090',  # Pike Push-Up
    ),
    'biceps': (
        'ex_033',  # Barbell Curl
        'ex_034',  # DB Curl
        'ex_035',  # Hammer Curl
        'ex_096',  # EZ Bar Curl
        'ex_097',  # Cable Curl
        'ex_036',  # Preacher Curl
        'ex_038',  # Incline DB Curl
        'ex_098',  # Spider Curl
        'ex_037',  # Concentration Curl
        'ex_100',  # Band Curl
    ),
    'triceps': (
        'ex_039',  # Pushdown
        'ex_040',  # Skull Crusher
        'ex_041',  # Overhead Extension
        'ex_042',  # Close-Grip Bench
        'ex_099',  # Cable Overhead Extension
        'ex_101',  # EZ Skull Crusher
        'ex_045',  # Kickback
        'ex_043',  # Diamond Push-Up
        'ex_044',  # Triceps Dips
    ),
    'forearms': (
        'ex_047',  # Wrist Curl
        'ex_049',  # Reverse Curl
        'ex_048',  # Reverse Wrist Curl
        'ex_046',  # Zottman Curl
        'ex_050',  # Farmer Walk
    ),
    'quads': (
        'ex_051',  # Barbell Squat
        'ex_053',  # Leg Press
        'ex_052',  # Front Squat
        'ex_054',  # Hack Squat
        'ex_055',  # Leg Extension
        'ex_059',  # Bulgarian Split Squat
        'ex_062',  # Goblet Squat
        'ex_060',  # Walking Lunge
        'ex_103',  # DB Lunge
        'ex_104',  # Step-Up
        'ex_109',  # Smith Machine Squat
        'ex_110',  # Trap Bar Deadlift
        'ex_112',  # Pistol Squat
        'ex_113',  # Wall Sit
        'ex_114',  # Band Squat
        'ex_127',  # Bodyweight Squat
        'ex_128',  # Reverse Lunge
        'ex_129',  # Bodyweight Bulgarian Split Squat
        'ex_130',  # Jump Squat
    ),
    'hamstrings': (
        'ex_056',  # Romanian Deadlift
        'ex_057',  # Leg Curl
        'ex_058',  # Stiff-Leg Deadlift
        'ex_107',  # Good Morning
        'ex_108',  # Nordic Curl
        'ex_132',  # Sliding Leg Curl
    ),
    'glutes': (
        'ex_061',  # Hip Thrust
        'ex_102',  # Sumo Deadlift
        'ex_111',  # KB Swing
        'ex_106',  # Cable Pull-Through
        'ex_105',  # Glute Bridge
        'ex_131',  # Single-Leg Glute Bridge
    ),
    'calves': (
        'ex_063',  # Standing Calf Raise
        'ex_064',  # Seated Calf Raise
        'ex_065',  # Donkey Calf Raise
        'ex_115',  # DB Calf Raise
        'ex_066',  # Single-Leg Calf Raise
        'ex_133',  # Bodyweight Calf Raise
    ),
    'abs': (
        'ex_069',  # Hanging Leg Raise
        'ex_070',  # Cable Crunch
        'ex_067',  # Plank
        'ex_068',  # Crunch
        'ex_118',  # V-Up
        'ex_073',  # Dead Bug
        'ex_120',  # Lying Leg Raise
        'ex_122',  # Hollow Body Hold
        'ex_074',  # Mountain Climber
        'ex_119',  # Flutter Kicks
    ),
    'obliques': (
        'ex_071',  # Russian Twist
        'ex_076',  # Bicycle Crunch
        'ex_075',  # Side Plank
        'ex_117',  # Cable Woodchopper
        'ex_116',  # Pallof Press
    ),
}


@dataclass(frozen=True)
class SplitDayTemplate:
    """Which muscles a split day targets."""
    label: str
    label_key: str
    focus: str
    muscles: Tuple[str, ...]

    @property
    def variant(self) -> int:
        """Day variant from the label suffix: A=0, B=1, C=2."""
        if self.label.endswith('B'):
            return 1
        if self.label.endswith('C'):
            return 2
        return 0


def _day(label, label_key, focus, *muscles):
    return SplitDayTemplate(label, label_key, focus, tuple(muscles))


_UPPER_LOWER_4 = (
    _day('Upper A', 'upperA', 'upper', 'chest', 'lats', 'shoulders', 'biceps', 'triceps'),
    _day('Lower A', 'lowerA', 'lower', 'quads', 'hamstrings', 'glutes', 'calves', 'abs'),
    _day('Upper B', 'upperB', 'upper', 'chest', 'upper back', 'shoulders', 'biceps', 'triceps'),
    _day('Lower B', 'lowerB', 'lower', 'quads', 'hamstrings', 'glutes', 'calves', 'obliques'),
)

SPLIT_TEMPLATES: Dict[SplitType, List[Tuple[SplitDayTemplate, ...]]] = {
    SplitType.FULL_BODY: [
        (
            _day('Full Body A', 'fullBodyA', 'full_body',
                 'chest', 'lats', 'shoulders', 'quads', 'hamstrings', 'biceps', 'triceps', 'abs'),
            _day('Full Body B', 'fullBodyB', 'full_body',
                 'chest', 'upper back', 'shoulders', 'quads', 'glutes', 'biceps', 'triceps', 'obliques'),
            _day('Full Body C', 'fullBodyC', 'full_body',
                 'chest', 'lats', 'shoulders', 'hamstrings', 'quads', 'biceps', 'triceps', 'abs'),
        ),
    ],
    SplitType.UPPER_LOWER: [
        _UPPER_LOWER_4,
        _UPPER_LOWER_4 + (
            _day('Full Body Pump', 'fullBodyPump', 'full_body',
                 'chest', 'lats', 'shoulders', 'quads', 'abs'),
        ),
    ],
    SplitType.PPL: [
        (
            _day('Push A', 'pushA', 'push', 'chest', 'shoulders', 'triceps'),
            _day('Pull A', 'pullA', 'pull', 'lats', 'upper back', 'biceps', 'forearms'),
            _day('Legs A', 'legsA', 'legs', 'quads', 'hamstrings', 'glutes', 'calves', 'abs'),
            _day('Push B', 'pushB', 'push', 'chest', 'shoulders', 'triceps'),
            _day('Pull B', 'pullB', 'pull', 'lats', 'upper back', 'biceps', 'forearms'),
            _day('Legs B', 'legsB', 'legs', 'quads', 'hamstrings', 'glutes', 'calves', 'obliques'),
        ),
    ],
}

SPLIT_NAMES: Dict[SplitType, str] = {
    SplitType.FULL_BODY: 'Full Body',
    SplitType.UPPER_LOWER: 'Upper/Lower',
    SplitType.PPL: 'Push/Pull/Legs',
}


def day_templates(split: SplitType, days_per_week: int) -> Tuple[SplitDayTemplate, ...]:
    """Day templates for a split; upper/lower grows a pump day at 5 days/week."""
    variants = SPLIT_TEMPLATES[split]
    if split is SplitType.UPPER_LOWER and days_per_week == 5:
        return variants[1]
    return variants[0]


@dataclass(frozen=True)
class CategoryConfig:
    min_reps: int
    max_reps: int
    rest_time: int   # seconds between sets
    set_time: int    # seconds per set execution


def _cfg(min_reps, max_reps, rest_time, set_time):
    return CategoryConfig(min_reps, max_reps, rest_time, set_time)


# Heavy barbells: lower reps, longer rest. Machine isolations: higher reps,
# shorter rest. Abs/calves: highest reps, minimal rest.
GOAL_CONFIG: Dict[Goal, Dict[str, CategoryConfig]] = {
    Goal.HYPERTROPHY: {
        'heavy_barbell_compound': _cfg(6, 10, 150, 50),
        'dumbbell_compound':      _cfg(8, 12, 120, 45),
        'machine_compound':       _cfg(8, 15, 120, 40),
        'isolation':              _cfg(10, 15, 90, 35),
        'machine_isolation':      _cfg(12, 20, 75, 35),
        'abs_calves':             _cfg(12, 25, 60, 30),
    },
    Goal.STRENGTH: {
        'heavy_barbell_compound': _cfg(3, 6, 180, 50),
        'dumbbell_compound':      _cfg(5, 8, 150, 45),
        'machine_compound':       _cfg(6, 10, 120, 40),
        'isolation':              _cfg(8, 12, 90, 35),
        'machine_isolation':      _cfg(10, 15, 75, 35),
        'abs_calves':             _cfg(12, 20, 60, 30),
    },
    Goal.RECOMPOSITION: {
        'heavy_barbell_compound': _cfg(5, 8, 150, 50),
        'dumbbell_compound':      _cfg(6, 10, 120, 45),
        'machine_compound':       _cfg(8, 12, 120, 40),
        'isolation':              _cfg(8, 12, 90, 35),
        'machine_isolation':      _cfg(10, 15, 75, 35),
        'abs_calves':             _cfg(12, 20, 60, 30),
    },
}

# Weeks per mesocycle, deload included
MESO_LENGTH: Dict[Experience, int] = {
    Experience.BEGINNER: 4,
    Experience.INTERMEDIATE: 5,
    Experience.ADVANCED: 6,
}

# Multi-joint movements; these stay fixed across the meso for overload tracking
COMPOUND_IDS: FrozenSet[str] = frozenset([
    # Chest
    'ex_023', 'ex_024', 'ex_025', 'ex_026', 'ex_027', 'ex_031', 'ex_032',
    # Back
    'ex_005', 'ex_006', 'ex_007', 'ex_008', 'ex_009', 'ex_010', 'ex_011',
    'ex_087', 'ex_088', 'ex_085',
    # Shoulders
    'ex_015', 'ex_016', 'ex_017', 'ex_091',
    # Arms
    'ex_042',
    # Legs
    'ex_051', 'ex_052', 'ex_053', 'ex_054', 'ex_056', 'ex_058', 'ex_059',
    'ex_060', 'ex_061', 'ex_062', 'ex_102', 'ex_103', 'ex_104', 'ex_107',
    'ex_108', 'ex_109', 'ex_110', 'ex_111', 'ex_112',
])

# Big muscles first, small last
MUSCLE_SORT_ORDER: Dict[str, int] = {
    'quads': 0, 'hamstrings': 1, 'glutes': 2, 'chest': 3, 'lats': 4,
    'upper back': 5, 'lower back': 6, 'shoulders': 7,
    'triceps': 8, 'biceps': 9, 'forearms': 10, 'calves': 11,
    'abs': 12, 'obliques': 13,
}


def is_compound(exercise_id: str) -> bool:
    return exercise_id in COMPOUND_IDS
