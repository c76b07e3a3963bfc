"""Shared fixtures: profiles, generated programs and session builders."""

from datetime import date, datetime

import pytest

from mesoplan.models import (
    CompletedExercise,
    CompletedSet,
    Experience,
    Goal,
    Limitation,
    Sex,
    UserProfile,
    WorkoutSession,
)
from mesoplan.periodization import ProgramAssembler
from mesoplan.scheduling import ScheduleReconciler

# Monday
START = date(2025, 3, 3)
CREATED = datetime(2025, 3, 3, 9, 0)


@pytest.fixture
def beginner_profile():
    return UserProfile(
        goal=Goal.HYPERTROPHY,
        experience=Experience.BEGINNER,
        days_per_week=3,
        sex=Sex.MALE,
        weight=80,
    )


@pytest.fixture
def knee_profile():
    return UserProfile(
        goal=Goal.HYPERTROPHY,
        experience=Experience.INTERMEDIATE,
        days_per_week=3,
        sex=Sex.MALE,
        weight=80,
        limitations=frozenset([Limitation.KNEE]),
    )


@pytest.fixture
def ppl_profile():
    return UserProfile(
        goal=Goal.HYPERTROPHY,
        experience=Experience.BEGINNER,
        days_per_week=6,
        sex=Sex.MALE,
        weight=80,
    )


@pytest.fixture
def assembler():
    return ProgramAssembler()


@pytest.fixture
def reconciler():
    return ScheduleReconciler()


@pytest.fixture
def full_body_program(assembler, beginner_profile):
    return assembler.generate(beginner_profile, now=CREATED)


@pytest.fixture
def ppl_program(assembler, ppl_profile):
    return assembler.generate(ppl_profile, now=CREATED)


@pytest.fixture
def make_session():
    """
    Build a finished WorkoutSession.

    exercises maps exercise_id -> list of (reps, weight) tuples.
    """
    def _make(session_id, start_time, exercises):
        completed = tuple(
            CompletedExercise(
                exercise_id=ex_id,
                sets=tuple(CompletedSet(reps=r, weight=w) for r, w in sets),
            )
            for ex_id, sets in exercises.items()
        )
        return WorkoutSession(
            id=session_id,
            start_time=start_time,
            end_time=start_time.replace(hour=start_time.hour + 1),
            completed_exercises=completed,
        )
    return _make
