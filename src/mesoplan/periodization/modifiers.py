"""
Profile Modifiers

Derives age/sex/limitation adjustments from a user profile:
rest-time scaling, overload-rate scaling, machine preference and the set of
exercises to push to the back of every pool.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Set

from ..models import Limitation, Sex, UserProfile


# Muscles whose volume range collapses to maintenance under a limitation
LIMITATION_MUSCLES: Dict[Limitation, FrozenSet[str]] = {
    Limitation.KNEE: frozenset(['quads', 'glutes']),
    Limitation.SHOULDER: frozenset(['chest', 'shoulders']),
    Limitation.LOWER_BACK: frozenset(['lower back', 'hamstrings']),
    Limitation.ELBOW: frozenset(['biceps', 'triceps']),
    Limitation.WRIST: frozenset(['forearms']),
    Limitation.HIP: frozenset(['glutes', 'quads']),
}

# Exercises that load the limited joint; deprioritized, never removed
RISKY_EXERCISES: Dict[Limitation, FrozenSet[str]] = {
    Limitation.KNEE: frozenset([
        'ex_051',  # Barbell Squat
        'ex_052',  # Front Squat
        'ex_054',  # Hack Squat
        'ex_055',  # Leg Extension
        'ex_060',  # Walking Lunge
        'ex_112',  # Pistol Squat
        'ex_130',  # Jump Squat
    ]),
    Limitation.SHOULDER: frozenset([
        'ex_015',  # Arnold Press
        'ex_016',  # Overhead Press
        'ex_019',  # Upright Row
        'ex_031',  # Dips
        'ex_044',  # Triceps Dips
        'ex_090',  # Pike Push-Up
    ]),
    Limitation.LOWER_BACK: frozenset([
        'ex_007',  # Barbell Row
        'ex_008',  # T-Bar Row
        'ex_009',  # Deadlift
        'ex_058',  # Stiff-Leg Deadlift
        'ex_088',  # Pendlay Row
        'ex_102',  # Sumo Deadlift
        'ex_107',  # Good Morning
    ]),
    Limitation.ELBOW: frozenset([
        'ex_036',  # Preacher Curl
        'ex_040',  # Skull Crusher
        'ex_041',  # Overhead Extension
        'ex_042',  # Close-Grip Bench
        'ex_101',  # EZ Skull Crusher
    ]),
    Limitation.WRIST: frozenset([
        'ex_030',  # Push-Up
        'ex_043',  # Diamond Push-Up
        'ex_047',  # Wrist Curl
        'ex_048',  # Reverse Wrist Curl
    ]),
    Limitation.HIP: frozenset([
        'ex_059',  # Bulgarian Split Squat
        'ex_102',  # Sumo Deadlift
        'ex_111',  # KB Swing
        'ex_129',  # Bodyweight Bulgarian Split Squat
    ]),
}

MACHINE_LIKE_EQUIPMENT = frozenset(['cable', 'machine', 'smith machine'])


@dataclass(frozen=True)
class ProfileModifiers:
    """Multipliers and flags applied throughout program assembly."""
    rest_scale: float = 1.0
    overload_scale: float = 1.0
    prefers_machines: bool = False
    deprioritized: FrozenSet[str] = frozenset()


def affected_muscles(limitations) -> Set[str]:
    """Union of muscles affected by any of the given limitations."""
    muscles: Set[str] = set()
    for lim in limitations:
        muscles |= LIMITATION_MUSCLES.get(lim, frozenset())
    return muscles


def derive_modifiers(profile: UserProfile) -> ProfileModifiers:
    """
    Compute the profile modifiers.

    Older lifters get longer rests and slower overload; 50+ or any limitation
    flips machine preference on.

    Args:
        profile: User profile

    Returns:
        ProfileModifiers for this profile
    """
    age = profile.age or 0

    if age >= 50:
        rest_scale, overload_scale = 1.2, 0.7
    elif age >= 40:
        rest_scale, overload_scale = 1.1, 0.85
    else:
        rest_scale, overload_scale = 1.0, 1.0

    if profile.sex is Sex.FEMALE:
        rest_scale *= 0.9

    deprioritized: Set[str] = set()
    for lim in profile.limitations:
        deprioritized |= RISKY_EXERCISES.get(lim, frozenset())

    return ProfileModifiers(
        rest_scale=rest_scale,
        overload_scale=overload_scale,
        prefers_machines=age >= 50 or bool(profile.limitations),
        deprioritized=frozenset(deprioritized),
    )
