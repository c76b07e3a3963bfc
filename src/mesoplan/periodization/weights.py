"""
Weight Estimation

Starting weights as a fraction of bodyweight, by exercise or by
muscle:equipment fallback. Ratios are male working weights for the
prescribed rep range, not 1RM. Female upper body ~55% of male,
lower body ~75%.
"""

from typing import Dict, Iterable, Optional, Tuple

from ..catalog import normalize_muscle
from ..models import Experience, Sex, WorkoutSession
from .volume import round_half_up


# (beginner, intermediate, advanced)
EXERCISE_BW_RATIOS: Dict[str, Tuple[float, float, float]] = {
    # Chest
    'ex_023': (0.45, 0.70, 0.95),  # Bench Press
    'ex_024': (0.35, 0.55, 0.75),  # Incline Bench
    'ex_025': (0.40, 0.65, 0.85),  # Decline Bench
    'ex_026': (0.15, 0.25, 0.35),  # DB Bench (per hand)
    'ex_027': (0.12, 0.20, 0.30),  # Incline DB Press (per hand)
    'ex_031': (0.00, 0.00, 0.00),  # Dips
    'ex_032': (0.40, 0.65, 0.90),  # Machine Press
    # Back
    'ex_005': (0.40, 0.65, 0.85),  # Lat Pulldown
    'ex_006': (0.40, 0.60, 0.80),  # Seated Cable Row
    'ex_007': (0.40, 0.65, 0.85),  # Barbell Row
    'ex_008': (0.35, 0.55, 0.75),  # T-Bar Row
    'ex_009': (0.75, 1.20, 1.65),  # Deadlift
    'ex_010': (0.00, 0.00, 0.00),  # Pull-Up
    'ex_011': (0.00, 0.00, 0.00),  # Chin-Up
    'ex_085': (0.00, 0.00, 0.00),  # Inverted Row
    'ex_087': (0.12, 0.20, 0.28),  # Single Arm Cable Row
    'ex_088': (0.40, 0.60, 0.80),  # Pendlay Row
    'ex_001': (0.12, 0.20, 0.30),  # One-Arm DB Row (per hand)
    # Shoulders
    'ex_015': (0.10, 0.17, 0.25),  # Arnold Press (per hand)
    'ex_016': (0.30, 0.48, 0.65),  # Overhead Press
    'ex_017': (0.10, 0.18, 0.27),  # DB Shoulder Press (per hand)
    'ex_091': (0.30, 0.50, 0.70),  # Machine Shoulder Press
    # Legs
    'ex_051': (0.60, 1.00, 1.40),  # Barbell Squat
    'ex_052': (0.50, 0.85, 1.20),  # Front Squat
    'ex_053': (1.00, 1.60, 2.20),  # Leg Press
    'ex_054': (0.55, 0.90, 1.30),  # Hack Squat
    'ex_056': (0.45, 0.75, 1.05),  # Romanian DL
    'ex_058': (0.40, 0.70, 1.00),  # Stiff Leg DL
    'ex_059': (0.10, 0.18, 0.27),  # Bulgarian Split Squat (per hand)
    'ex_060': (0.08, 0.15, 0.22),  # Walking Lunge (per hand)
    'ex_061': (0.50, 0.85, 1.20),  # Hip Thrust
    'ex_062': (0.12, 0.22, 0.32),  # Goblet Squat
    'ex_102': (0.60, 1.00, 1.40),  # Sumo Deadlift
    'ex_103': (0.10, 0.18, 0.27),  # DB Lunge (per hand)
    'ex_104': (0.10, 0.17, 0.25),  # Step-Up (per hand)
    'ex_107': (0.30, 0.50, 0.70),  # Good Morning
    'ex_108': (0.00, 0.00, 0.00),  # Nordic Curl
    'ex_109': (0.55, 0.90, 1.30),  # Smith Machine Squat
    'ex_110': (0.65, 1.05, 1.50),  # Trap Bar DL
    'ex_111': (0.15, 0.25, 0.35),  # KB Swing
    'ex_112': (0.00, 0.00, 0.00),  # Pistol Squat
    # Arms
    'ex_042': (0.40, 0.60, 0.80),  # Close-Grip Bench
}

# "muscle:equipment", then "*:equipment"
FALLBACK_RATIOS: Dict[str, Tuple[float, float, float]] = {
    'chest:dumbbell':      (0.08, 0.13, 0.18),
    'chest:cable':         (0.12, 0.20, 0.28),
    'chest:machine':       (0.20, 0.35, 0.50),
    'lats:cable':          (0.15, 0.25, 0.35),
    'lats:dumbbell':       (0.10, 0.17, 0.25),
    'upper back:dumbbell': (0.10, 0.17, 0.25),
    'upper back:cable':    (0.12, 0.20, 0.28),
    'shoulders:dumbbell':  (0.05, 0.08, 0.12),
    'shoulders:cable':     (0.06, 0.10, 0.15),
    'shoulders:machine':   (0.15, 0.25, 0.35),
    'biceps:barbell':      (0.15, 0.25, 0.35),
    'biceps:dumbbell':     (0.06, 0.10, 0.15),
    'biceps:cable':        (0.10, 0.18, 0.25),
    'biceps:ez bar':       (0.13, 0.22, 0.30),
    'triceps:cable':       (0.12, 0.20, 0.28),
    'triceps:barbell':     (0.18, 0.30, 0.42),
    'triceps:dumbbell':    (0.06, 0.10, 0.15),
    'triceps:ez bar':      (0.15, 0.25, 0.35),
    'forearms:dumbbell':   (0.05, 0.08, 0.12),
    'forearms:barbell':    (0.10, 0.17, 0.25),
    'quads:machine':       (0.25, 0.40, 0.55),
    'hamstrings:machine':  (0.20, 0.35, 0.50),
    'calves:machine':      (0.40, 0.65, 0.90),
    'calves:dumbbell':     (0.12, 0.20, 0.30),
    'glutes:cable':        (0.15, 0.25, 0.35),
    '*:barbell':           (0.25, 0.40, 0.55),
    '*:dumbbell':          (0.08, 0.13, 0.20),
    '*:cable':             (0.12, 0.20, 0.28),
    '*:machine':           (0.25, 0.40, 0.55),
    '*:kettlebell':        (0.10, 0.17, 0.25),
    '*:ez bar':            (0.15, 0.25, 0.35),
    '*:smith machine':     (0.35, 0.55, 0.75),
    '*:trap bar':          (0.55, 0.90, 1.25),
}

_TIER_INDEX = {
    Experience.BEGINNER: 0,
    Experience.INTERMEDIATE: 1,
    Experience.ADVANCED: 2,
}

FEMALE_UPPER_MODIFIER = 0.55
FEMALE_LOWER_MODIFIER = 0.75
NO_HISTORY_MODIFIER = 0.85

LOWER_BODY_MUSCLES = frozenset(['quads', 'hamstrings', 'glutes', 'calves', 'lower back'])
UNLOADED_EQUIPMENT = frozenset(['body weight', 'resistance band'])


def equipment_increment(equipment: str) -> float:
    """Smallest practical plate/stack jump for rounding suggested weights."""
    if equipment in ('barbell', 'ez bar', 'smith machine', 'trap bar'):
        return 2.5
    if equipment in ('dumbbell', 'kettlebell'):
        return 2.0
    if equipment in ('cable', 'machine'):
        return 5.0
    return 2.5


def overload_increment(equipment: str) -> float:
    """Load jump suggested by the overload advisor (cable/machine stays at 2.5)."""
    if equipment in ('dumbbell', 'kettlebell'):
        return 2.0
    return 2.5


def round_to_increment(weight: float, equipment: str) -> float:
    """Round to the equipment increment, never below one increment when positive."""
    if weight <= 0:
        return 0
    inc = equipment_increment(equipment)
    return max(inc, round_half_up(weight / inc) * inc)


def estimate_weight(
    exercise_id: str,
    equipment: str,
    target: str,
    bodyweight: float,
    sex: Sex,
    experience: Experience,
    has_history: Optional[bool] = None
) -> float:
    """
    Estimate a starting weight from the profile.

    Args:
        exercise_id: Catalog id
        equipment: Exercise equipment
        target: Raw target muscle string
        bodyweight: kg
        sex: Lifter sex
        experience: Experience tier
        has_history: False applies a conservative first-meso reduction

    Returns:
        Weight in kg, 0 for bodyweight or band exercises
    """
    if equipment in UNLOADED_EQUIPMENT:
        return 0

    muscle = normalize_muscle(target)
    ratios = EXERCISE_BW_RATIOS.get(exercise_id)
    if ratios is None:
        ratios = FALLBACK_RATIOS.get(f"{muscle}:{equipment}") or FALLBACK_RATIOS.get(f"*:{equipment}")
    if ratios is None:
        return 0

    weight = bodyweight * ratios[_TIER_INDEX[experience]]

    if sex is Sex.FEMALE:
        weight *= FEMALE_LOWER_MODIFIER if muscle in LOWER_BODY_MUSCLES else FEMALE_UPPER_MODIFIER

    if has_history is False:
        weight *= NO_HISTORY_MODIFIER

    return round_to_increment(weight, equipment)


def estimate_e1rm(weight: float, reps: int) -> float:
    """Estimated one-rep max: Brzycki up to 12 reps, Epley above."""
    if weight <= 0 or reps <= 0:
        return 0
    if reps == 1:
        return weight
    if reps > 12:
        return weight * (1 + reps / 30)
    return weight * (36 / (37 - reps))


def last_logged_weight(exercise_id: str, history: Iterable[WorkoutSession]) -> Optional[float]:
    """
    Median completed weight from the most recent session that logged
    the exercise with a load. History is most recent first.
    """
    for session in history:
        ex = session.exercise(exercise_id)
        if ex is None:
            continue

        weights = sorted(
            s.weight for s in ex.sets
            if s.completed and s.weight and s.weight > 0
        )
        if not weights:
            continue

        mid = len(weights) // 2
        if len(weights) % 2 == 0:
            return (weights[mid - 1] + weights[mid]) / 2
        return weights[mid]

    return None


def last_session_e1rm(exercise_id: str, history: Iterable[WorkoutSession]) -> Optional[float]:
    """Best estimated 1RM among completed loaded sets of the most recent session with one."""
    for session in history:
        ex = session.exercise(exercise_id)
        if ex is None:
            continue

        estimates = [
            estimate_e1rm(s.weight, s.reps) for s in ex.sets
            if s.completed and s.weight and s.weight > 0 and s.reps > 0
        ]
        if estimates:
            return max(estimates)

    return None
