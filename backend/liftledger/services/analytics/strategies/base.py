"""
Base Strategy - Abstract interface for modality-specific calculations.
"""
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from liftledger.core.logging import get_logger, log_dropped_record
from liftledger.models.day import ExerciseEntry, Modality
from liftledger.models.stats import PRType

logger = get_logger(__name__)


@dataclass(frozen=True)
class MeasurementTotals:
    """Per-exercise sums. Each modality fills only its own fields."""
    volume: float = 0
    distance: float = 0
    duration: float = 0
    reps: int = 0


class ModalityStrategy(ABC):
    """
    Abstract base class for modality-specific measurement handling.

    Subclasses implement:
    - Parsing: raw persisted exercise fields into canonical sets/entries
    - Totals: the sums each aggregate folds over
    - PR candidates: every value that could set a personal record
    - History value: the single per-day value used for progress tracking
    """

    modality: Modality

    @abstractmethod
    def parse(
        self,
        raw: Dict[str, Any],
        name: str,
        exercise_id: Optional[str]
    ) -> ExerciseEntry:
        """
        Build an exercise entry from a raw persisted exercise.

        Malformed sets are dropped, never raised.

        Args:
            raw: Raw exercise document
            name: Display name already resolved by the adapter
            exercise_id: Catalog id, if any

        Returns:
            ExerciseEntry holding only the valid measurements
        """
        pass

    @abstractmethod
    def totals(self, exercise: ExerciseEntry) -> MeasurementTotals:
        """Sum this exercise's measurements."""
        pass

    @abstractmethod
    def pr_candidates(self, exercise: ExerciseEntry) -> List[Tuple[PRType, float]]:
        """
        List (PR type, value) pairs in logged order.

        Args:
            exercise: Normalized exercise

        Returns:
            Candidate values; the detector keeps the best per type
        """
        pass

    @abstractmethod
    def history_value(self, exercise: ExerciseEntry) -> Optional[float]:
        """Best value of the tracked metric for one logged instance."""
        pass

    @abstractmethod
    def has_measurement(self, exercise: ExerciseEntry) -> bool:
        """Whether any valid measurement survived normalization."""
        pass

    # ========================================
    # Shared Helper Methods
    # ========================================

    @staticmethod
    def _first_present(raw: Dict[str, Any], *keys: str) -> Any:
        """Return the first key present in ``raw`` (persisted shapes vary)."""
        for key in keys:
            if key in raw and raw[key] is not None:
                return raw[key]
        return None

    @staticmethod
    def _finite_number(value: Any) -> Optional[float]:
        """
        Coerce to a finite float.

        Returns:
            The number, or None for missing, non-numeric, NaN or infinite values
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                return None
        if not isinstance(value, (int, float)):
            return None
        number = float(value)
        if not math.isfinite(number):
            return None
        return number

    def _positive_int(self, value: Any) -> Optional[int]:
        """Coerce to an integer > 0, None otherwise."""
        number = self._finite_number(value)
        if number is None or number <= 0 or not number.is_integer():
            return None
        return int(number)

    def _positive_number(self, value: Any) -> Optional[float]:
        number = self._finite_number(value)
        if number is None or number <= 0:
            return None
        return number

    def _raw_sets(self, raw: Dict[str, Any], *keys: str) -> List[Any]:
        sets = self._first_present(raw, *keys)
        if not isinstance(sets, (list, tuple)):
            return []
        return list(sets)

    def _drop(self, kind: str, reason: str, name: str, **extra: Any) -> None:
        log_dropped_record(
            logger,
            kind=kind,
            reason=reason,
            modality=self.modality.value,
            exercise=name,
            **extra
        )
