"""
Volume Range Calculator and Weekly Volume Scheduler

Per-muscle weekly set ranges from experience tier, priority bonus,
training-years ramp and joint limitations, then linear interpolation
across the mesocycle with a deload floor in the final week.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional

from ..config import MesoplanConfig
from ..landmarks import VOLUME_LANDMARKS, VolumeLandmarks
from ..models import Experience, UserProfile
from .modifiers import affected_muscles

logger = logging.getLogger(__name__)


def round_half_up(x: float) -> int:
    """Round to nearest integer, halves going up (2.5 -> 3, not banker's 2)."""
    return int(math.floor(x + 0.5))


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


@dataclass(frozen=True)
class VolumeRange:
    """Weekly set counts: first training week, last training week, deload."""
    start: int
    end: int
    deload: int


EMPTY_RANGE = VolumeRange(0, 0, 0)


class VolumeCalculator:
    """
    Computes volume ranges and weekly targets.

    Landmarks and config are injected; the calculator holds no other state.
    """

    def __init__(
        self,
        landmarks: Optional[Dict[str, VolumeLandmarks]] = None,
        config: Optional[MesoplanConfig] = None
    ):
        """
        Args:
            landmarks: muscle -> VolumeLandmarks (default: built-in table)
            config: Engine config (default: MesoplanConfig())
        """
        self.landmarks = landmarks if landmarks is not None else VOLUME_LANDMARKS
        self.config = config or MesoplanConfig()

    def training_years_bonus(self, experience: Experience, years: Optional[float]) -> int:
        """
        Micro-adjustment inside a tier.

        Beginners ramp 0..+1 over their first 2 years, intermediates +1 over
        years 2-5, advanced 0..+2 over years 5-9.
        """
        if not years:
            return 0
        if experience is Experience.BEGINNER:
            return round_half_up(min(years, 2) / 2)
        if experience is Experience.INTERMEDIATE:
            return round_half_up(clamp((years - 2) / 3, 0, 1))
        return round_half_up(clamp((years - 5) / 4, 0, 1) * 2)

    def volume_range(self, muscle: str, profile: UserProfile) -> VolumeRange:
        """
        Weekly set range for one muscle.

        Args:
            muscle: Canonical muscle key
            profile: User profile

        Returns:
            VolumeRange, all zeros for a muscle without landmarks
        """
        lm = self.landmarks.get(muscle)
        if lm is None:
            logger.debug(f"No landmarks for {muscle}, volume range is empty")
            return EMPTY_RANGE

        if muscle in affected_muscles(profile.limitations):
            start = lm.mv
            end = min(lm.mv + self.config.limitation_cap_sets, lm.mav_low)
            return VolumeRange(start, end, lm.mv)

        if profile.experience is Experience.BEGINNER:
            start, end = lm.mev, lm.mav_low
        elif profile.experience is Experience.INTERMEDIATE:
            start = round_half_up((lm.mev + lm.mav_low) / 2)
            end = round_half_up((lm.mav_low + lm.mav_high) / 2)
        else:
            start, end = lm.mav_low, lm.mav_high

        bonus = self.config.priority_bonus_sets if muscle in profile.priority_muscles else 0
        bonus += self.training_years_bonus(profile.experience, profile.training_years)

        start = int(clamp(start + bonus, lm.mev, lm.mrv))
        end = int(clamp(end + bonus, lm.mev, lm.mrv))

        return VolumeRange(start, end, lm.mv)

    @staticmethod
    def week_volume(
        rng: VolumeRange,
        week_index: int,
        total_weeks: int,
        is_deload: bool
    ) -> int:
        """
        Target sets for one week.

        Args:
            rng: The muscle's VolumeRange
            week_index: 0-based week index
            total_weeks: Weeks in the meso, deload included
            is_deload: Whether this is the deload week

        Returns:
            Whole-set weekly target
        """
        if is_deload:
            return rng.deload
        training_weeks = total_weeks - 1
        if training_weeks <= 1:
            return rng.start
        t = week_index / (training_weeks - 1)
        return round_half_up(rng.start + t * (rng.end - rng.start))


def meso_half(week_index: int, total_weeks: int, is_deload: bool) -> int:
    """0 for the first half of the training weeks (and deload), 1 after."""
    if is_deload:
        return 0
    midpoint = math.ceil((total_weeks - 1) / 2)
    return 0 if week_index < midpoint else 1
