"""
Readiness Adjustment

Scores a pre-session check-in and scales the flattened session to match:
fewer sets, a lighter load, longer rest and an easier RIR target on poor
days. Peak and good days leave the session untouched.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from ..models import ReadinessCheck
from ..periodization.volume import round_half_up

logger = logging.getLogger(__name__)

MAX_RIR = 4
DEFAULT_RIR = 2


class ReadinessLevel(Enum):
    PEAK = "peak"
    GOOD = "good"
    MODERATE = "moderate"
    LOW = "low"


@dataclass(frozen=True)
class SessionAdjustments:
    """Multipliers on sets, weight and rest plus an RIR delta."""
    level: ReadinessLevel
    volume_multiplier: float = 1.0
    weight_multiplier: float = 1.0
    rest_multiplier: float = 1.0
    rir_delta: int = 0

    @property
    def changes_session(self) -> bool:
        return self.level in (ReadinessLevel.MODERATE, ReadinessLevel.LOW)


ADJUSTMENTS: Dict[ReadinessLevel, SessionAdjustments] = {
    ReadinessLevel.PEAK: SessionAdjustments(ReadinessLevel.PEAK),
    ReadinessLevel.GOOD: SessionAdjustments(ReadinessLevel.GOOD),
    ReadinessLevel.MODERATE: SessionAdjustments(ReadinessLevel.MODERATE, 0.85, 0.95, 1.2, 1),
    ReadinessLevel.LOW: SessionAdjustments(ReadinessLevel.LOW, 0.70, 0.90, 1.3, 2),
}


def readiness_score(check: ReadinessCheck) -> int:
    """0-100 from four 1-3 metrics (12 points max)."""
    raw = check.sleep + check.energy + check.stress + check.soreness
    return round_half_up(raw / 12 * 100)


def readiness_level(score: int) -> ReadinessLevel:
    if score >= 86:
        return ReadinessLevel.PEAK
    if score >= 66:
        return ReadinessLevel.GOOD
    if score >= 42:
        return ReadinessLevel.MODERATE
    return ReadinessLevel.LOW


def session_adjustments(score: int) -> SessionAdjustments:
    return ADJUSTMENTS[readiness_level(score)]


def apply_readiness(
    exercises: List[Dict],
    adjustments: SessionAdjustments,
    min_rest_seconds: int = 15
) -> List[Dict]:
    """
    Scale a flattened session for the day's readiness.

    Args:
        exercises: Output of flatten_program_day
        adjustments: From session_adjustments
        min_rest_seconds: Rest floor

    Returns:
        New exercise dicts; the input list is returned as is on peak/good days
    """
    if not adjustments.changes_session:
        return exercises

    adjusted = []
    for ex in exercises:
        weight = ex['weight']
        if weight > 0:
            # 0.5 kg steps
            weight = round_half_up(weight * adjustments.weight_multiplier * 2) / 2
        rir = ex['target_rir'] if ex['target_rir'] is not None else DEFAULT_RIR

        adjusted.append(dict(
            ex,
            sets=max(1, round_half_up(ex['sets'] * adjustments.volume_multiplier)),
            weight=max(0, weight),
            rest_time=max(min_rest_seconds, round_half_up(ex['rest_time'] * adjustments.rest_multiplier)),
            target_rir=min(MAX_RIR, rir + adjustments.rir_delta),
        ))

    logger.debug(f"Readiness {adjustments.level.value}: adjusted {len(adjusted)} exercises")
    return adjusted
