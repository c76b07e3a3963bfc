"""
Program Assembler

Builds the full week/day/exercise tree for a profile:
volume ranges -> weekly targets -> per-day allocation -> exercise picks,
then rep range, rest, RIR and suggested weight per exercise.
"""

import logging
import random
import string
from dataclasses import replace
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional, Sequence

from ..catalog import DEFAULT_CATALOG, ExerciseCatalog, normalize_muscle
from ..config import MesoplanConfig
from ..landmarks import VolumeLandmarks
from ..models import (
    ProgramDay,
    ProgramExercise,
    ProgramWeek,
    TrainingProgram,
    UserProfile,
)
from .classification import exercise_category, target_rir
from .modifiers import ProfileModifiers, derive_modifiers
from .picker import ExercisePicker
from .templates import (
    EQUIPMENT_BY_SETUP,
    GOAL_CONFIG,
    MESO_LENGTH,
    MUSCLE_SORT_ORDER,
    SPLIT_NAMES,
    SplitDayTemplate,
    day_templates,
    is_compound,
    split_for_days,
)
from .volume import VolumeCalculator, meso_half, round_half_up
from .weights import estimate_weight, round_to_increment

logger = logging.getLogger(__name__)


def generate_program_id(now: Optional[datetime] = None) -> str:
    """prog_<epoch ms>_<9 random base36 chars>"""
    now = now or datetime.now()
    suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"prog_{int(now.timestamp() * 1000)}_{suffix}"


def allowed_equipment(profile: UserProfile) -> Sequence[str]:
    """Owned equipment list when given, else the setup's table."""
    if profile.owned_equipment:
        return profile.owned_equipment
    return EQUIPMENT_BY_SETUP[profile.equipment]


def muscle_frequency(templates: Sequence[SplitDayTemplate], muscle: str) -> int:
    """Number of days in the week that train a muscle."""
    return sum(1 for t in templates if muscle in t.muscles)


class ProgramAssembler:
    """
    Generates complete training programs.

    Integrates:
    - Volume ranges and weekly ramp
    - Exercise selection (variant, phase, equipment, limitations)
    - Rep/rest/RIR assignment by exercise category
    - Suggested weight with week-over-week progression
    """

    def __init__(
        self,
        catalog: Optional[ExerciseCatalog] = None,
        landmarks: Optional[Dict[str, VolumeLandmarks]] = None,
        config: Optional[MesoplanConfig] = None,
        pools: Optional[Dict[str, Sequence[str]]] = None
    ):
        """
        Initialize program assembler.

        Args:
            catalog: Exercise catalog
            landmarks: Volume landmark table
            config: Engine config
            pools: Per-muscle exercise pools
        """
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG
        self.config = config or MesoplanConfig()
        self.volume = VolumeCalculator(landmarks, self.config)
        self.picker = ExercisePicker(self.catalog, pools)

    def generate(
        self,
        profile: UserProfile,
        now: Optional[datetime] = None,
        has_history: Optional[bool] = None
    ) -> TrainingProgram:
        """
        Generate a full mesocycle for a profile.

        Args:
            profile: User profile
            now: Creation timestamp (default: datetime.now())
            has_history: False starts suggested weights conservatively
                (no logged sessions to anchor them)

        Returns:
            TrainingProgram with one ProgramWeek per meso week, deload last
        """
        now = now or datetime.now()
        split = split_for_days(profile.days_per_week)
        total_weeks = MESO_LENGTH[profile.experience]
        templates = day_templates(split, profile.days_per_week)
        modifiers = derive_modifiers(profile)
        equipment = allowed_equipment(profile)

        muscles: List[str] = []
        for t in templates:
            for m in t.muscles:
                if m not in muscles:
                    muscles.append(m)

        ranges = {m: self.volume.volume_range(m, profile) for m in muscles}

        weeks = []
        for week_idx in range(total_weeks):
            is_deload = week_idx == total_weeks - 1
            targets = {
                m: self.volume.week_volume(ranges[m], week_idx, total_weeks, is_deload)
                for m in muscles
            }

            days = tuple(
                self._build_day(
                    day_idx, template, templates, targets, week_idx, total_weeks,
                    is_deload, profile, modifiers, equipment, has_history
                )
                for day_idx, template in enumerate(templates)
            )

            weeks.append(ProgramWeek(
                week_number=week_idx + 1,
                is_deload=is_deload,
                volume_targets=targets,
                days=days,
            ))

        program = TrainingProgram(
            id=generate_program_id(now),
            name=f"{SPLIT_NAMES[split]} – {total_weeks} weeks",
            split_type=split,
            total_weeks=total_weeks,
            weeks=tuple(weeks),
            profile=profile,
            created_at=now,
        )

        logger.info(
            f"Generated {program.name} ({profile.experience.value}, "
            f"{profile.days_per_week} days/week, goal {profile.goal.value})"
        )
        return program

    def _build_day(
        self,
        day_idx: int,
        template: SplitDayTemplate,
        templates: Sequence[SplitDayTemplate],
        targets: Dict[str, int],
        week_idx: int,
        total_weeks: int,
        is_deload: bool,
        profile: UserProfile,
        modifiers: ProfileModifiers,
        equipment: Sequence[str],
        has_history: Optional[bool] = None
    ) -> ProgramDay:
        phase = meso_half(week_idx, total_weeks, is_deload)
        rir = target_rir(week_idx, total_weeks, is_deload)
        used: FrozenSet[str] = frozenset()
        exercises: List[ProgramExercise] = []

        for muscle in template.muscles:
            freq = muscle_frequency(templates, muscle)
            sets_today = max(round_half_up(targets.get(muscle, 0) / freq), 0)
            if sets_today <= 0:
                continue

            picked, used = self.picker.pick(
                muscle, sets_today, template.variant, phase,
                equipment, used, modifiers
            )

            for ex in picked:
                prescribed = self._prescribe(ex, rir, week_idx, is_deload, profile, modifiers, has_history)
                if prescribed is not None:
                    exercises.append(prescribed)

        exercises.sort(key=self._sort_key)

        return ProgramDay(
            day_index=day_idx,
            label=template.label,
            label_key=template.label_key,
            focus=template.focus,
            muscle_targets=template.muscles,
            exercises=tuple(exercises),
        )

    def _prescribe(
        self,
        ex: ProgramExercise,
        rir: int,
        week_idx: int,
        is_deload: bool,
        profile: UserProfile,
        modifiers: ProfileModifiers,
        has_history: Optional[bool] = None
    ) -> Optional[ProgramExercise]:
        """Fill reps, rest, RIR and weight; None if the id is not in the catalog."""
        data = self.catalog.get(ex.exercise_id)
        if data is None:
            logger.debug(f"Unknown exercise {ex.exercise_id}, skipping")
            return None

        cat = GOAL_CONFIG[profile.goal][exercise_category(ex.exercise_id, self.catalog)]
        rest = max(self.config.min_rest_seconds, round_half_up(cat.rest_time * modifiers.rest_scale))

        base = estimate_weight(
            ex.exercise_id, data.equipment, data.target,
            profile.weight, profile.sex, profile.experience, has_history
        )

        # Deload resets to the unscaled base
        if base > 0 and not is_deload and week_idx > 0:
            if is_compound(ex.exercise_id):
                rate = self.config.compound_weekly_rate
            else:
                rate = self.config.isolation_weekly_rate
            weight = round_to_increment(
                base * (1 + rate * modifiers.overload_scale * week_idx),
                data.equipment
            )
        else:
            weight = base

        return replace(
            ex,
            min_reps=cat.min_reps,
            max_reps=cat.max_reps,
            target_rir=rir,
            rest_time=rest,
            suggested_weight=weight,
        )

    def _sort_key(self, ex: ProgramExercise):
        data = self.catalog.get(ex.exercise_id)
        muscle = normalize_muscle(data.target) if data else ''
        return (0 if is_compound(ex.exercise_id) else 1, MUSCLE_SORT_ORDER.get(muscle, 99))


def estimate_duration(day: ProgramDay) -> int:
    """Session length in whole minutes: sets x (set time + rest)."""
    total_seconds = 0
    for ex in day.exercises:
        set_time = 50 if is_compound(ex.exercise_id) else 35
        total_seconds += ex.sets * (set_time + ex.rest_time)
    return round_half_up(total_seconds / 60)


def format_program_text(program: TrainingProgram, catalog: Optional[ExerciseCatalog] = None) -> str:
    """
    Format a program as readable text.

    Args:
        program: Generated program
        catalog: Catalog for exercise names

    Returns:
        Formatted text string
    """
    catalog = catalog if catalog is not None else DEFAULT_CATALOG
    lines = []

    lines.append("=" * 60)
    lines.append(program.name)
    lines.append("=" * 60)
    lines.append(f"Split: {program.split_type.value}")
    lines.append(f"Weeks: {program.total_weeks}")

    for week in program.weeks:
        title = f"WEEK {week.week_number}" + (" (DELOAD)" if week.is_deload else "")
        lines.append(f"\n{'─' * 60}")
        lines.append(title)
        lines.append('─' * 60)
        targets = ", ".join(f"{m} {s}" for m, s in week.volume_targets.items())
        lines.append(f"Weekly sets: {targets}")

        for day in week.days:
            lines.append(f"\n{day.label} (~{estimate_duration(day)} min)")
            for i, ex in enumerate(day.exercises, 1):
                weight = f" @ {ex.suggested_weight:g}kg" if ex.suggested_weight else ""
                lines.append(
                    f"  {i}. {catalog.name_for(ex.exercise_id)}: "
                    f"{ex.sets} x {ex.min_reps}-{ex.max_reps}{weight}, "
                    f"RIR {ex.target_rir}, rest {ex.rest_time}s"
                )

    lines.append("\n" + "=" * 60)
    return "\n".join(lines)
