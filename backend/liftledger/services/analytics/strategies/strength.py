"""
Strength Strategy - Weighted set handling.

Strength-specific metrics:
- Volume load (reps × weight, summed over sets)
- Heaviest single set
"""
from typing import Any, Dict, List, Optional, Tuple

from liftledger.models.day import ExerciseEntry, Modality, StrengthSet
from liftledger.models.stats import PRType
from liftledger.services.analytics.strategies.base import MeasurementTotals, ModalityStrategy


class StrengthStrategy(ModalityStrategy):
    """
    Strategy for weighted exercises.

    Weight is the tracked metric; volume feeds totals and leaderboards.
    """

    modality = Modality.STRENGTH

    def parse(
        self,
        raw: Dict[str, Any],
        name: str,
        exercise_id: Optional[str]
    ) -> ExerciseEntry:
        sets = []
        for index, raw_set in enumerate(self._raw_sets(raw, "strengthSets", "sets")):
            if not isinstance(raw_set, dict):
                self._drop("strength_set", "not an object", name, index=index)
                continue

            reps = self._positive_int(raw_set.get("reps"))
            weight = self._finite_number(raw_set.get("weight"))

            if reps is None:
                self._drop("strength_set", "reps missing or not a positive integer", name, index=index)
                continue
            if weight is None or weight < 0:
                self._drop("strength_set", "weight missing, negative or non-finite", name, index=index)
                continue

            sets.append(StrengthSet(reps=reps, weight=weight))

        return ExerciseEntry(
            name=name,
            modality=self.modality,
            exercise_id=exercise_id,
            strength_sets=tuple(sets),
        )

    def totals(self, exercise: ExerciseEntry) -> MeasurementTotals:
        return MeasurementTotals(
            volume=sum(s.volume for s in exercise.strength_sets),
            reps=sum(s.reps for s in exercise.strength_sets),
        )

    def pr_candidates(self, exercise: ExerciseEntry) -> List[Tuple[PRType, float]]:
        # Heaviest weight regardless of reps
        return [(PRType.MAX_WEIGHT, s.weight) for s in exercise.strength_sets]

    def history_value(self, exercise: ExerciseEntry) -> Optional[float]:
        if not exercise.strength_sets:
            return None
        return max(s.weight for s in exercise.strength_sets)

    def has_measurement(self, exercise: ExerciseEntry) -> bool:
        return len(exercise.strength_sets) > 0
