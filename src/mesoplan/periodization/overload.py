"""
Overload Advisor (double progression)

Reads the two most recent logged sessions of each program exercise and
proposes the next step:
- more than half the sets under the rep floor -> drop one increment
- two sessions with every set at the rep ceiling -> add one increment,
  reset reps to the floor
- every set inside the range -> add a rep
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ..catalog import DEFAULT_CATALOG, ExerciseCatalog
from ..models import CompletedExercise, ProgramDay, WorkoutSession
from .weights import overload_increment

logger = logging.getLogger(__name__)


class OverloadKind(Enum):
    DECREASE_WEIGHT = "decrease_weight"
    INCREASE_WEIGHT = "increase_weight"
    ADD_REP = "add_rep"


@dataclass(frozen=True)
class OverloadSuggestion:
    """Decision only; messages.overload_message turns it into text."""
    kind: OverloadKind
    params: Dict[str, Any] = field(default_factory=dict)


class OverloadAdvisor:
    """Double-progression suggestions for a program day."""

    def __init__(self, catalog: Optional[ExerciseCatalog] = None):
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG

    @staticmethod
    def recent_logs(exercise_id: str, history: Iterable[WorkoutSession], limit: int = 2) -> List[CompletedExercise]:
        """Most recent logs of an exercise; history is most recent first."""
        logs = []
        for session in history:
            ex = session.exercise(exercise_id)
            if ex is not None:
                logs.append(ex)
                if len(logs) >= limit:
                    break
        return logs

    def suggest(self, history: List[WorkoutSession], day: ProgramDay) -> Dict[str, OverloadSuggestion]:
        """
        Suggest the next progression step for each exercise in a day.

        Args:
            history: Workout sessions, most recent first
            day: Program day about to be trained

        Returns:
            exercise_id -> OverloadSuggestion; exercises without history or
            without a clear signal are absent
        """
        suggestions: Dict[str, OverloadSuggestion] = {}

        for pex in day.exercises:
            logs = self.recent_logs(pex.exercise_id, history)
            if not logs:
                continue

            data = self.catalog.get(pex.exercise_id)
            if data is None:
                logger.debug(f"Unknown exercise {pex.exercise_id}, no suggestion")
                continue

            suggestion = self._evaluate(logs, pex.min_reps, pex.max_reps, data.equipment)
            if suggestion is not None:
                suggestions[pex.exercise_id] = suggestion

        return suggestions

    @staticmethod
    def _evaluate(
        logs: List[CompletedExercise],
        min_reps: int,
        max_reps: int,
        equipment: str
    ) -> Optional[OverloadSuggestion]:
        min_reps = min_reps or max_reps
        last = [s for s in logs[0].sets if s.completed]
        if not last:
            return None

        last_weight = last[0].weight or 0
        increment = overload_increment(equipment)

        below = sum(1 for s in last if s.reps < min_reps)
        if below > len(last) * 0.5 and last_weight > 0:
            return OverloadSuggestion(
                OverloadKind.DECREASE_WEIGHT,
                {'weight': max(0, last_weight - increment)},
            )

        if len(logs) >= 2 and last_weight > 0:
            at_max = True
            for log in logs[:2]:
                done = [s for s in log.sets if s.completed]
                if not done or any(s.reps < max_reps for s in done):
                    at_max = False
                    break
            if at_max:
                return OverloadSuggestion(
                    OverloadKind.INCREASE_WEIGHT,
                    {'weight': last_weight + increment, 'reps': min_reps},
                )

        if all(min_reps <= s.reps < max_reps for s in last):
            return OverloadSuggestion(OverloadKind.ADD_REP, {'target': max_reps})

        return None
