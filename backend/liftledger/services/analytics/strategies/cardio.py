"""
Cardio Strategy - Timed and distance-based entries.

Cardio-specific metrics:
- Distance and duration
- Pace (seconds per unit distance, lower is better)
"""
from typing import Any, Dict, List, Optional, Tuple

from liftledger.models.day import CardioEntry, ExerciseEntry, Modality
from liftledger.models.stats import PRType
from liftledger.services.analytics.strategies.base import MeasurementTotals, ModalityStrategy


class CardioStrategy(ModalityStrategy):
    """
    Strategy for cardio entries.

    Entries with a distance are judged on pace and distance; entries
    without one (e.g. a timed elliptical session) only on duration.
    """

    modality = Modality.CARDIO

    def parse(
        self,
        raw: Dict[str, Any],
        name: str,
        exercise_id: Optional[str]
    ) -> ExerciseEntry:
        entry = None
        data = self._first_present(raw, "cardioData", "cardio")
        if data is None and self._first_present(raw, "durationSeconds", "duration") is not None:
            # Flat shape: measurement fields directly on the exercise
            data = raw

        if isinstance(data, dict):
            duration = self._positive_number(
                self._first_present(data, "durationSeconds", "duration")
            )
            distance = self._first_present(data, "distance")

            if duration is None:
                self._drop("cardio_entry", "duration missing or not positive", name)
            else:
                # A zero or broken distance means "not measured"; pace is
                # always re-derived, a stored pace is ignored.
                entry = CardioEntry(
                    duration_seconds=duration,
                    distance=self._positive_number(distance),
                )
        elif data is not None:
            self._drop("cardio_entry", "not an object", name)

        return ExerciseEntry(
            name=name,
            modality=self.modality,
            exercise_id=exercise_id,
            cardio=entry,
        )

    def totals(self, exercise: ExerciseEntry) -> MeasurementTotals:
        if exercise.cardio is None:
            return MeasurementTotals()
        return MeasurementTotals(
            distance=exercise.cardio.distance or 0,
            duration=exercise.cardio.duration_seconds,
        )

    def pr_candidates(self, exercise: ExerciseEntry) -> List[Tuple[PRType, float]]:
        entry = exercise.cardio
        if entry is None:
            return []
        if entry.distance:
            return [
                (PRType.BEST_PACE, entry.pace),
                (PRType.MAX_DISTANCE, entry.distance),
            ]
        return [(PRType.MAX_DURATION, entry.duration_seconds)]

    def history_value(self, exercise: ExerciseEntry) -> Optional[float]:
        # Prefer distance, fall back to duration
        entry = exercise.cardio
        if entry is None:
            return None
        return entry.distance or entry.duration_seconds

    def has_measurement(self, exercise: ExerciseEntry) -> bool:
        return exercise.cardio is not None
