"""
Record Adapters - Normalize persisted day/workout documents.

Supported sources:
- Day documents (one per user per local calendar day)
- Legacy workout documents (timestamped, possibly several per day)

Normalization is lenient: malformed fields are dropped and reported through
debug logs, never raised, so one bad set cannot take down a whole summary.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from liftledger.core.logging import get_logger, log_dropped_record
from liftledger.models.catalog import ExerciseCatalogEntry, MuscleGroup
from liftledger.models.day import Day, ExerciseEntry, Modality
from liftledger.services.analytics.periods import normalize_date_to_yyyymmdd
from liftledger.services.analytics.strategies import get_strategy

logger = get_logger(__name__)


def _parse_modality(value: Any) -> Optional[Modality]:
    if isinstance(value, Modality):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Modality(value.strip().lower())
    except ValueError:
        return None


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def normalize_exercise(raw: Any) -> Optional[ExerciseEntry]:
    """
    Normalize one persisted exercise.

    Returns:
        ExerciseEntry, or None when modality or identity is unusable
    """
    if not isinstance(raw, dict):
        log_dropped_record(logger, kind="exercise", reason="not an object")
        return None

    exercise_id = _optional_str(raw.get("exerciseId"))
    name = _optional_str(raw.get("name")) or exercise_id
    if name is None:
        log_dropped_record(logger, kind="exercise", reason="no name or exerciseId")
        return None

    modality = _parse_modality(raw.get("modality"))
    if modality is None:
        log_dropped_record(
            logger,
            kind="exercise",
            reason="unknown modality",
            exercise=name,
            modality=str(raw.get("modality")),
        )
        return None

    return get_strategy(modality).parse(raw, name, exercise_id)


def _normalize_exercises(raw_exercises: Any) -> List[ExerciseEntry]:
    if not isinstance(raw_exercises, (list, tuple)):
        return []
    exercises = []
    for raw in raw_exercises:
        exercise = normalize_exercise(raw)
        if exercise is not None:
            exercises.append(exercise)
    return exercises


class RecordAdapter(ABC):
    """Abstract base class for persisted record adapters."""

    source_name: str = "unknown"

    @abstractmethod
    def normalize(self, raw_data: Dict[str, Any]) -> Optional[Day]:
        """
        Normalize a raw document to a Day.

        Args:
            raw_data: Raw document from the persistence layer

        Returns:
            Day, or None if the document has no usable date
        """
        pass

    def _resolve_date(self, raw_data: Dict[str, Any]) -> Optional[str]:
        date_str = normalize_date_to_yyyymmdd(raw_data.get("date"))
        if date_str is None:
            log_dropped_record(
                logger,
                kind="day",
                reason="missing or invalid date",
                source=self.source_name,
                record_id=str(raw_data.get("id", "")),
            )
        return date_str

    @staticmethod
    def _updated_at(raw_data: Dict[str, Any]) -> Optional[str]:
        value = raw_data.get("updatedAt")
        if value is None:
            return None
        if hasattr(value, "isoformat"):
            return value.isoformat()
        return str(value)


class DayDocumentAdapter(RecordAdapter):
    """
    Adapter for day documents.

    Shape: {id, userId, date: "YYYY-MM-DD", isRestDay, exercises, notes, updatedAt}
    """

    source_name = "day"

    def normalize(self, raw_data: Dict[str, Any]) -> Optional[Day]:
        if not isinstance(raw_data, dict):
            log_dropped_record(logger, kind="day", reason="not an object", source=self.source_name)
            return None

        date_str = self._resolve_date(raw_data)
        if date_str is None:
            return None

        exercises = _normalize_exercises(raw_data.get("exercises"))

        return Day(
            date=date_str,
            user_id=str(raw_data.get("userId") or ""),
            id=str(raw_data.get("id") or ""),
            is_rest_day=raw_data.get("isRestDay") is True,
            exercises=tuple(exercises),
            notes=_optional_str(raw_data.get("notes")),
            updated_at=self._updated_at(raw_data),
        )


class WorkoutDocumentAdapter(RecordAdapter):
    """
    Adapter for legacy workout documents.

    Workouts carry a timestamp instead of a local date and an ``ownerId``
    instead of ``userId``. The timestamp is read in the local zone.
    """

    source_name = "workout"

    def normalize(self, raw_data: Dict[str, Any]) -> Optional[Day]:
        if not isinstance(raw_data, dict):
            log_dropped_record(logger, kind="workout", reason="not an object", source=self.source_name)
            return None

        date_str = self._resolve_date(raw_data)
        if date_str is None:
            return None

        user_id = str(raw_data.get("ownerId") or raw_data.get("userId") or "")
        exercises = _normalize_exercises(raw_data.get("exercises"))

        return Day(
            date=date_str,
            user_id=user_id,
            id=str(raw_data.get("id") or ""),
            is_rest_day=False,
            exercises=tuple(exercises),
            updated_at=self._updated_at(raw_data),
        )


# Adapter registry
_ADAPTERS = {
    "day": DayDocumentAdapter,
    "workout": WorkoutDocumentAdapter,
}


def get_adapter(source: str) -> RecordAdapter:
    """
    Get the appropriate adapter for a record source.

    Args:
        source: Record source name (day, workout)

    Returns:
        Adapter instance; unknown sources fall back to day documents
    """
    adapter_class = _ADAPTERS.get((source or "").lower())

    if not adapter_class:
        logger.warning("Unknown record source, falling back to day documents", source=source)
        adapter_class = DayDocumentAdapter

    return adapter_class()


def normalize_days(raw_days: Iterable[Dict[str, Any]], source: str = "day") -> List[Day]:
    """
    Normalize a collection of raw documents, dropping unusable ones.

    Args:
        raw_days: Raw documents in any order
        source: Record source name

    Returns:
        Days in input order
    """
    adapter = get_adapter(source)
    days = []
    dropped = 0

    for raw in raw_days:
        day = adapter.normalize(raw)
        if day is None:
            dropped += 1
            continue
        days.append(day)

    logger.debug(
        "Normalized records",
        source=adapter.source_name,
        days=len(days),
        dropped=dropped,
    )
    return days


def merge_workouts_into_days(raw_workouts: Iterable[Dict[str, Any]]) -> List[Day]:
    """
    Group legacy workouts into one Day per (owner, local date).

    Exercises are concatenated in input order. Workouts without an owner
    are skipped.

    Returns:
        Days ordered by first appearance of each (owner, date)
    """
    adapter = WorkoutDocumentAdapter()
    grouped: Dict[tuple, List[Day]] = {}

    for raw in raw_workouts:
        workout = adapter.normalize(raw)
        if workout is None:
            continue
        if not workout.user_id:
            log_dropped_record(logger, kind="workout", reason="no owner", record_id=workout.id)
            continue
        grouped.setdefault((workout.user_id, workout.date), []).append(workout)

    days = []
    for (user_id, date_str), workouts in grouped.items():
        exercises = tuple(ex for w in workouts for ex in w.exercises)
        updated = [w.updated_at for w in workouts if w.updated_at]
        days.append(Day(
            date=date_str,
            user_id=user_id,
            exercises=exercises,
            updated_at=max(updated) if updated else None,
        ))

    logger.debug("Merged workouts into days", days=len(days))
    return days


def normalize_catalog(raw_entries: Iterable[Dict[str, Any]]) -> Dict[str, ExerciseCatalogEntry]:
    """
    Build a catalog lookup keyed by exercise id.

    Entries without an id or a known modality are skipped; an unknown muscle
    group is kept as "no muscle group".
    """
    catalog: Dict[str, ExerciseCatalogEntry] = {}

    for raw in raw_entries:
        if not isinstance(raw, dict):
            continue
        entry_id = _optional_str(raw.get("id"))
        modality = _parse_modality(raw.get("modality"))
        if entry_id is None or modality is None:
            log_dropped_record(logger, kind="catalog_entry", reason="missing id or modality")
            continue

        muscle_group = None
        raw_group = raw.get("muscleGroup")
        if isinstance(raw_group, str):
            try:
                muscle_group = MuscleGroup(raw_group)
            except ValueError:
                muscle_group = None

        catalog[entry_id] = ExerciseCatalogEntry(
            id=entry_id,
            name=_optional_str(raw.get("name")) or entry_id,
            modality=modality,
            muscle_group=muscle_group,
        )

    return catalog
