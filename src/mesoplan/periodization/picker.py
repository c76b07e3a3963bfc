"""
Exercise Picker

Selects 1-2 concrete exercises for a muscle on a given day.

Rotation:
- day variant (A/B/C) shifts the starting point in the pool
- meso half shifts only the second (isolation) slot, so the compound stays
  stable for overload tracking while the isolation rotates mid-meso

Limitation-risky exercises are only reached once every other candidate
is already used that day.
"""

import logging
import math
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..catalog import DEFAULT_CATALOG, ExerciseCatalog
from ..models import ProgramExercise
from .modifiers import MACHINE_LIKE_EQUIPMENT, ProfileModifiers
from .templates import EXERCISE_POOLS

logger = logging.getLogger(__name__)


class ExercisePicker:
    """Picks exercises from per-muscle pools."""

    def __init__(
        self,
        catalog: Optional[ExerciseCatalog] = None,
        pools: Optional[Dict[str, Sequence[str]]] = None
    ):
        """
        Args:
            catalog: Exercise catalog (default: built-in catalog)
            pools: muscle -> ordered exercise ids (default: built-in pools)
        """
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG
        self.pools = pools if pools is not None else EXERCISE_POOLS

    def candidates(
        self,
        muscle: str,
        allowed_equipment: Iterable[str],
        modifiers: ProfileModifiers
    ) -> Tuple[List[str], List[str]]:
        """
        Filter and reorder a muscle's pool.

        Returns:
            Tuple of (preferred, deprioritized) id lists, each in pick order
        """
        allowed = set(allowed_equipment)
        available = []
        for ex_id in self.pools.get(muscle, ()):
            ex = self.catalog.get(ex_id)
            if ex is not None and ex.equipment in allowed:
                available.append(ex_id)

        preferred = [e for e in available if e not in modifiers.deprioritized]
        risky = [e for e in available if e in modifiers.deprioritized]

        if modifiers.prefers_machines:
            preferred = self._machines_first(preferred)
            risky = self._machines_first(risky)

        return preferred, risky

    def _machines_first(self, ids: List[str]) -> List[str]:
        # sorted() is stable; pool priority holds within each group
        return sorted(ids, key=lambda e: 0 if self.catalog.get(e).equipment in MACHINE_LIKE_EQUIPMENT else 1)

    @staticmethod
    def _step(group: List[str], offset: int, used: FrozenSet[str]) -> Optional[str]:
        for j in range(len(group)):
            ex_id = group[(offset + j) % len(group)]
            if ex_id not in used:
                return ex_id
        return None

    def pick(
        self,
        muscle: str,
        sets: int,
        variant: int,
        phase: int,
        allowed_equipment: Iterable[str],
        used: FrozenSet[str],
        modifiers: Optional[ProfileModifiers] = None
    ) -> Tuple[List[ProgramExercise], FrozenSet[str]]:
        """
        Pick exercises for one muscle on one day.

        Args:
            muscle: Canonical muscle key
            sets: Sets allocated to the muscle this day
            variant: Day variant, 0=A 1=B 2=C
            phase: Meso half, 0 or 1 (0 during deload)
            allowed_equipment: Equipment the user can use
            used: Exercise ids already picked this day
            modifiers: Profile modifiers (default: none)

        Returns:
            Tuple of (exercises with sets only, updated used set)
        """
        if sets <= 0:
            return [], used

        modifiers = modifiers or ProfileModifiers()
        preferred, risky = self.candidates(muscle, allowed_equipment, modifiers)
        if not preferred and not risky:
            logger.debug(f"Empty pool for {muscle} with allowed equipment")
            return [], used

        count = 2 if sets > 4 else 1
        picked: List[ProgramExercise] = []

        for i in range(count):
            offset = variant * 2 + i + (phase if i > 0 else 0)

            ex_id = self._step(preferred, offset, used)
            if ex_id is None:
                ex_id = self._step(risky, offset, used)
            if ex_id is None:
                # Whole pool used: repeat rather than leave the muscle untrained
                fallback = preferred or risky
                ex_id = fallback[offset % len(fallback)]
            else:
                used = used | {ex_id}

            if count == 1:
                ex_sets = sets
            elif i == 0:
                ex_sets = math.ceil(sets / 2)
            else:
                ex_sets = sets // 2

            picked.append(ProgramExercise(exercise_id=ex_id, sets=max(ex_sets, 1)))

        return picked, used
