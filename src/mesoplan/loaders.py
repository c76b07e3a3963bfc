"""
YAML Loaders

Turns profile and snapshot documents into domain models.

A snapshot carries everything the reconciler needs to run offline:
profile, schedule start and weekdays, completed days, applied
resolutions, logged sessions, check-ins and the reference date.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

import yaml

from .models import (
    CompletedExercise,
    CompletedSet,
    EquipmentSetup,
    Experience,
    Goal,
    Limitation,
    ReadinessCheck,
    ResolutionAction,
    SessionFeedback,
    Sex,
    UserProfile,
    WorkoutSession,
    day_key,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletedDayRecord:
    week_number: int
    day_index: int
    completed_on: date


@dataclass(frozen=True)
class ResolutionRecord:
    """A resolution the user applied, replayed on the day it was chosen."""
    action: ResolutionAction
    applied_on: date


@dataclass(frozen=True)
class Snapshot:
    """Profile, schedule inputs and history at a point in time."""
    profile: UserProfile
    start_date: date
    today: date
    preferred_days: Optional[Tuple[int, ...]] = None
    completed: Tuple[CompletedDayRecord, ...] = ()
    resolutions: Tuple[ResolutionRecord, ...] = ()
    history: Tuple[WorkoutSession, ...] = ()
    readiness: Optional[ReadinessCheck] = None
    feedback: Dict[str, SessionFeedback] = field(default_factory=dict)


def load_yaml(path: Path) -> Dict[str, Any]:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def _require(data: Any, keys: Iterable[str], what: str) -> Dict[str, Any]:
    """The mapping itself; ValueError if it is not one or lacks a key."""
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a mapping, got {data!r}")
    for key in keys:
        if data.get(key) is None:
            raise ValueError(f"{what} is missing '{key}'")
    return data


def _int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}")


def _score(data: Dict[str, Any], key: str, what: str) -> int:
    """A 1-3 check-in score."""
    value = _int(data[key], f"{what} {key}")
    if not 1 <= value <= 3:
        raise ValueError(f"{what} {key} must be between 1 and 3, got {value}")
    return value


def _enum(enum_cls: Type, value: Any, name: str):
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValueError(f"Unknown {name} '{value}' (expected one of: {allowed})")


def parse_date(value: Any) -> date:
    """ISO date, or the date part of a datetime."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValueError(f"Invalid date '{value}'")


def parse_datetime(value: Any) -> datetime:
    """ISO datetime; aware values are converted to naive local time."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        text = str(value).replace('Z', '+00:00')
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid datetime '{value}'")

    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def profile_from_dict(data: Dict[str, Any]) -> UserProfile:
    """
    Build a UserProfile from a mapping.

    Args:
        data: Profile mapping (goal, experience, days_per_week, sex, weight, ...)

    Returns:
        UserProfile

    Raises:
        ValueError: Missing field, unknown enum value, non-numeric number
            or days_per_week outside 3-6
    """
    _require(data, ('goal', 'experience', 'days_per_week', 'sex', 'weight'), "Profile")

    days = _int(data['days_per_week'], "days_per_week")
    if not 3 <= days <= 6:
        raise ValueError(f"days_per_week must be between 3 and 6, got {days}")

    weight = _float(data['weight'], "weight")
    if weight <= 0:
        raise ValueError(f"weight must be positive, got {weight}")

    limitations = frozenset(
        _enum(Limitation, lim, 'limitation') for lim in data.get('limitations') or []
    )

    age = data.get('age')
    height = data.get('height')
    training_years = data.get('training_years')

    return UserProfile(
        goal=_enum(Goal, data['goal'], 'goal'),
        experience=_enum(Experience, data['experience'], 'experience'),
        days_per_week=days,
        sex=_enum(Sex, data['sex'], 'sex'),
        weight=weight,
        equipment=_enum(EquipmentSetup, data.get('equipment', 'full_gym'), 'equipment'),
        owned_equipment=tuple(str(e).lower() for e in data.get('owned_equipment') or []),
        priority_muscles=tuple(str(m).lower() for m in data.get('priority_muscles') or []),
        limitations=limitations,
        age=_int(age, "age") if age is not None else None,
        height=_float(height, "height") if height is not None else None,
        training_years=_float(training_years, "training_years") if training_years is not None else None,
    )


def session_from_dict(data: Dict[str, Any]) -> WorkoutSession:
    _require(data, ('start_time',), "Session")

    exercises = []
    for ex in data.get('exercises') or []:
        _require(ex, ('id',), "Logged exercise")
        sets = []
        for s in ex.get('sets') or []:
            _require(s, (), f"Set of {ex['id']}")
            sets.append(CompletedSet(
                reps=_int(s.get('reps', 0), "reps"),
                weight=_float(s['weight'], "weight") if s.get('weight') is not None else None,
                completed=bool(s.get('completed', True)),
            ))
        exercises.append(CompletedExercise(exercise_id=str(ex['id']), sets=tuple(sets)))

    end_time = data.get('end_time')
    return WorkoutSession(
        id=str(data.get('id', '')),
        start_time=parse_datetime(data['start_time']),
        end_time=parse_datetime(end_time) if end_time is not None else None,
        completed_exercises=tuple(exercises),
    )


def sessions_from_list(items: List[Dict[str, Any]]) -> List[WorkoutSession]:
    """Sessions sorted most recent first."""
    sessions = [session_from_dict(item) for item in items or []]
    sessions.sort(key=lambda s: s.start_time, reverse=True)
    return sessions


def readiness_from_dict(data: Dict[str, Any]) -> ReadinessCheck:
    keys = ('sleep', 'energy', 'stress', 'soreness')
    _require(data, keys, "Readiness")
    return ReadinessCheck(*(_score(data, k, "readiness") for k in keys))


def feedback_from_list(items: List[Dict[str, Any]]) -> Dict[str, SessionFeedback]:
    """Session feedback keyed by "week-day"."""
    feedback = {}
    for item in items or []:
        _require(item, ('week', 'day', 'pump', 'soreness', 'performance'), "Feedback entry")
        key = day_key(_int(item['week'], "week"), _int(item['day'], "day"))
        feedback[key] = SessionFeedback(
            pump=_score(item, 'pump', "feedback"),
            soreness=_score(item, 'soreness', "feedback"),
            performance=_score(item, 'performance', "feedback"),
            joint_pain=bool(item.get('joint_pain', False)),
        )
    return feedback


def snapshot_from_dict(data: Dict[str, Any]) -> Snapshot:
    """
    Build a Snapshot from a mapping.

    Expected layout:
        today: 2025-03-13
        profile: {...}
        schedule: {start_date: 2025-03-03, preferred_days: [0, 2, 4]}
        completed: [{week: 1, day: 0, date: 2025-03-03}]
        resolutions: [{action: merge, date: 2025-03-06}]
        history: [{id, start_time, end_time, exercises: [{id, sets: [{reps, weight}]}]}]
        readiness: {sleep: 2, energy: 2, stress: 3, soreness: 1}
        feedback: [{week: 1, day: 0, pump: 2, soreness: 2, performance: 3}]
    """
    _require(data, ('profile',), "Snapshot")

    profile = profile_from_dict(data['profile'])
    schedule = _require(data.get('schedule') or {}, (), "schedule")
    today = parse_date(data['today']) if data.get('today') is not None else date.today()
    start_date = parse_date(schedule['start_date']) if schedule.get('start_date') is not None else today

    preferred = schedule.get('preferred_days')
    if preferred is not None:
        preferred = tuple(_int(d, "preferred_days") for d in preferred)
        if any(not 0 <= d <= 6 for d in preferred):
            raise ValueError(f"preferred_days must be weekdays 0-6, got {list(preferred)}")

    completed = []
    for item in data.get('completed') or []:
        _require(item, ('week', 'day', 'date'), "Completed day")
        completed.append(CompletedDayRecord(
            week_number=_int(item['week'], "week"),
            day_index=_int(item['day'], "day"),
            completed_on=parse_date(item['date']),
        ))
    completed.sort(key=lambda c: (c.completed_on, c.week_number, c.day_index))

    resolutions = []
    for item in data.get('resolutions') or []:
        _require(item, ('action', 'date'), "Resolution")
        resolutions.append(ResolutionRecord(
            action=_enum(ResolutionAction, item['action'], 'action'),
            applied_on=parse_date(item['date']),
        ))
    resolutions.sort(key=lambda r: r.applied_on)

    history = tuple(sessions_from_list(data.get('history') or []))
    readiness = readiness_from_dict(data['readiness']) if data.get('readiness') is not None else None
    feedback = feedback_from_list(data.get('feedback') or [])

    logger.debug(
        f"Loaded snapshot: {len(completed)} completed days, {len(resolutions)} resolutions, "
        f"{len(history)} sessions"
    )

    return Snapshot(
        profile=profile,
        start_date=start_date,
        today=today,
        preferred_days=preferred,
        completed=tuple(completed),
        resolutions=tuple(resolutions),
        history=history,
        readiness=readiness,
        feedback=feedback,
    )


def load_profile(path: Path) -> UserProfile:
    data = load_yaml(path)
    return profile_from_dict(data.get('profile', data))


def load_snapshot(path: Path) -> Snapshot:
    return snapshot_from_dict(load_yaml(path))


def append_resolution(path: Path, action: ResolutionAction, applied_on: date):
    """Record an applied resolution in the snapshot file so later runs replay it."""
    data = load_yaml(path)
    data['resolutions'] = list(data.get('resolutions') or [])
    data['resolutions'].append({'action': action.value, 'date': applied_on})
    with open(path, 'w') as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
    logger.info(f"Recorded {action.value} on {applied_on.isoformat()} in {path}")
