"""
Calisthenics Strategy - Bodyweight sets and holds.
"""
from typing import Any, Dict, List, Optional, Tuple

from liftledger.models.day import CalisthenicsSet, ExerciseEntry, Modality
from liftledger.models.stats import PRType
from liftledger.services.analytics.strategies.base import MeasurementTotals, ModalityStrategy


class CalisthenicsStrategy(ModalityStrategy):
    """Reps are the tracked metric; timed holds also record duration."""

    modality = Modality.CALISTHENICS

    def parse(
        self,
        raw: Dict[str, Any],
        name: str,
        exercise_id: Optional[str]
    ) -> ExerciseEntry:
        sets = []
        for index, raw_set in enumerate(self._raw_sets(raw, "calisthenicsSets", "sets")):
            if not isinstance(raw_set, dict):
                self._drop("calisthenics_set", "not an object", name, index=index)
                continue

            reps = self._positive_int(raw_set.get("reps"))
            if reps is None:
                self._drop("calisthenics_set", "reps missing or not a positive integer", name, index=index)
                continue

            duration = self._positive_number(
                self._first_present(raw_set, "durationSeconds", "duration")
            )
            sets.append(CalisthenicsSet(reps=reps, duration_seconds=duration))

        return ExerciseEntry(
            name=name,
            modality=self.modality,
            exercise_id=exercise_id,
            calisthenics_sets=tuple(sets),
        )

    def totals(self, exercise: ExerciseEntry) -> MeasurementTotals:
        return MeasurementTotals(
            reps=sum(s.reps for s in exercise.calisthenics_sets),
            duration=sum(s.duration_seconds or 0 for s in exercise.calisthenics_sets),
        )

    def pr_candidates(self, exercise: ExerciseEntry) -> List[Tuple[PRType, float]]:
        candidates: List[Tuple[PRType, float]] = []
        for s in exercise.calisthenics_sets:
            candidates.append((PRType.MAX_REPS, s.reps))
            if s.duration_seconds is not None:
                candidates.append((PRType.MAX_DURATION, s.duration_seconds))
        return candidates

    def history_value(self, exercise: ExerciseEntry) -> Optional[float]:
        if not exercise.calisthenics_sets:
            return None
        return max(s.reps for s in exercise.calisthenics_sets)

    def has_measurement(self, exercise: ExerciseEntry) -> bool:
        return len(exercise.calisthenics_sets) > 0
