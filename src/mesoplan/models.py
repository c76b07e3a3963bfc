"""
Domain Models

Profile, program tree, schedule, workout history and reconciliation records.
Everything here is plain data; the engines never mutate an instance in place,
they build replacements with dataclasses.replace.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


class Experience(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Goal(Enum):
    HYPERTROPHY = "hypertrophy"
    STRENGTH = "strength"
    RECOMPOSITION = "recomposition"


class EquipmentSetup(Enum):
    FULL_GYM = "full_gym"
    HOME_DUMBBELL = "home_dumbbell"
    BODYWEIGHT = "bodyweight"


class Sex(Enum):
    MALE = "male"
    FEMALE = "female"


class SplitType(Enum):
    FULL_BODY = "full_body"
    UPPER_LOWER = "upper_lower"
    PPL = "ppl"


class Limitation(Enum):
    """Joint limitations a profile can declare."""
    KNEE = "knee"
    SHOULDER = "shoulder"
    LOWER_BACK = "lower_back"
    ELBOW = "elbow"
    WRIST = "wrist"
    HIP = "hip"


class SkipReason(Enum):
    USER_SKIP = "user_skip"
    MERGED = "merged"


class ResolutionAction(Enum):
    DO_MISSED = "do_missed"
    SKIP_CONTINUE = "skip_continue"
    MERGE = "merge"
    RESCHEDULE_WEEK = "reschedule_week"


class WeekContext(Enum):
    EARLY = "early"
    MID = "mid"
    LATE = "late"


class MesocyclePhase(Enum):
    RAMP = "ramp"
    PEAK = "peak"
    DELOAD = "deload"


class Severity(Enum):
    INFO = "info"
    WARNING = "warning"
    URGENT = "urgent"


class RecoveryStatus(Enum):
    FATIGUED = "fatigued"
    FRESH = "fresh"
    UNDERTRAINED = "undertrained"


# ─── Profile ───

@dataclass(frozen=True)
class UserProfile:
    """Immutable input to program generation."""
    goal: Goal
    experience: Experience
    days_per_week: int                 # 3..6
    sex: Sex
    weight: float                      # kg
    equipment: EquipmentSetup = EquipmentSetup.FULL_GYM
    owned_equipment: Tuple[str, ...] = ()  # overrides the setup table when set
    priority_muscles: Tuple[str, ...] = ()
    limitations: FrozenSet[Limitation] = frozenset()
    age: Optional[int] = None
    height: Optional[float] = None     # cm
    training_years: Optional[float] = None


# ─── Program tree ───

@dataclass(frozen=True)
class ProgramExercise:
    exercise_id: str
    sets: int
    min_reps: int = 0
    max_reps: int = 0
    target_rir: int = 0
    rest_time: int = 0                 # seconds
    suggested_weight: float = 0.0      # kg, 0 for bodyweight work

    @property
    def reps(self) -> int:
        """Single rep target for consumers that ignore the range."""
        return self.max_reps


@dataclass(frozen=True)
class ProgramDay:
    day_index: int
    label: str
    label_key: str
    focus: str
    muscle_targets: Tuple[str, ...]
    exercises: Tuple[ProgramExercise, ...] = ()

    @property
    def total_sets(self) -> int:
        return sum(ex.sets for ex in self.exercises)


@dataclass(frozen=True)
class ProgramWeek:
    week_number: int                   # 1-based
    is_deload: bool
    volume_targets: Dict[str, int]
    days: Tuple[ProgramDay, ...]


@dataclass(frozen=True)
class TrainingProgram:
    id: str
    name: str
    split_type: SplitType
    total_weeks: int
    weeks: Tuple[ProgramWeek, ...]
    profile: UserProfile
    created_at: datetime

    def week(self, week_number: int) -> Optional[ProgramWeek]:
        for w in self.weeks:
            if w.week_number == week_number:
                return w
        return None

    def day(self, week_number: int, day_index: int) -> Optional[ProgramDay]:
        w = self.week(week_number)
        if w is None or not 0 <= day_index < len(w.days):
            return None
        return w.days[day_index]


# ─── Schedule ───

def day_key(week_number: int, day_index: int) -> str:
    """Key used for the completed-day set: "week-day"."""
    return f"{week_number}-{day_index}"


@dataclass(frozen=True)
class ScheduledDay:
    week_number: int
    day_index: int
    planned_date: date
    completed_date: Optional[date] = None
    skipped_date: Optional[date] = None
    skipped_reason: Optional[SkipReason] = None
    carried_into: Optional[str] = None  # key of the session that absorbed a merged day

    @property
    def key(self) -> str:
        return day_key(self.week_number, self.day_index)

    @property
    def is_done(self) -> bool:
        """Completed or skipped; either way the walk no longer moves it."""
        return self.completed_date is not None or self.skipped_date is not None

    def is_missed(self, today: date) -> bool:
        return self.planned_date < today and not self.is_done


@dataclass(frozen=True)
class ProgramSchedule:
    preferred_days: Tuple[int, ...]    # 0=Mon..6=Sun
    start_date: date
    scheduled_days: Tuple[ScheduledDay, ...] = ()


# ─── Workout history ───

@dataclass(frozen=True)
class CompletedSet:
    reps: int
    weight: Optional[float] = None
    completed: bool = True


@dataclass(frozen=True)
class CompletedExercise:
    exercise_id: str
    sets: Tuple[CompletedSet, ...]


@dataclass(frozen=True)
class WorkoutSession:
    id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    completed_exercises: Tuple[CompletedExercise, ...] = ()

    def exercise(self, exercise_id: str) -> Optional[CompletedExercise]:
        for ex in self.completed_exercises:
            if ex.exercise_id == exercise_id:
                return ex
        return None


# ─── Check-ins ───

@dataclass(frozen=True)
class ReadinessCheck:
    """Pre-session check-in, each metric 1 (poor) to 3 (good)."""
    sleep: int
    energy: int
    stress: int
    soreness: int


@dataclass(frozen=True)
class SessionFeedback:
    """Post-session feedback, each score 1 (low) to 3 (high)."""
    pump: int
    soreness: int
    performance: int
    joint_pain: bool = False


# ─── Reconciliation ───

@dataclass(frozen=True)
class MuscleRecovery:
    muscle: str
    hours_since_training: float        # 999 when never trained
    status: RecoveryStatus
    can_train_today: bool


@dataclass(frozen=True)
class ResolutionOption:
    action: ResolutionAction
    label_key: str
    description_key: str
    recommended: bool = False
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MissedDayResolution:
    missed_days: Tuple[ScheduledDay, ...]
    days_since_last: int
    week_context: WeekContext
    mesocycle_phase: MesocyclePhase
    severity: Severity
    options: Tuple[ResolutionOption, ...]
    nudge_key: str
    muscle_recovery: Tuple[MuscleRecovery, ...] = ()

    @property
    def recommended(self) -> Optional[ResolutionOption]:
        for opt in self.options:
            if opt.recommended:
                return opt
        return None


@dataclass(frozen=True)
class ResolutionResult:
    """Output of executing a resolution; the caller writes it back."""
    schedule: Optional[ProgramSchedule]
    advance_to_week: Optional[int] = None
    advance_to_day_index: Optional[int] = None


@dataclass(frozen=True)
class ActiveProgramState:
    program_id: str
    start_date: date
    current_week: int = 1
    current_day_index: int = 0
    completed_days: FrozenSet[str] = frozenset()
    last_completed_at: Optional[date] = None
    schedule: Optional[ProgramSchedule] = None
    pending_resolution: Optional[MissedDayResolution] = None
