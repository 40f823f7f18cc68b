"""
Day record model.
A dated container of logged exercises owned by one user.

Values here are immutable snapshots: every collection is a tuple and every
dataclass is frozen, so analytics can read the same day from several views
without copying it.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional, Tuple


class Modality(str, Enum):
    """How an exercise is measured."""
    STRENGTH = "strength"
    CARDIO = "cardio"
    CALISTHENICS = "calisthenics"


def exercise_key(exercise_id: Optional[str], name: str) -> str:
    """
    Identity used to group an exercise across days.

    A stable catalog id always wins. Entries logged without one are keyed by
    their folded display name in a separate "name:" namespace, so they never
    merge with an id-keyed exercise that happens to share a name.
    """
    if exercise_id and exercise_id.strip():
        return exercise_id.strip()
    return "name:" + (name or "").strip().casefold()


def parse_local_date(value: str) -> Optional[date]:
    """Parse a YYYY-MM-DD local calendar date, None if invalid."""
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class StrengthSet:
    """One weighted set."""
    reps: int
    weight: float

    @property
    def volume(self) -> float:
        return self.reps * self.weight

    def to_dict(self) -> dict:
        return {"reps": self.reps, "weight": self.weight}


@dataclass(frozen=True)
class CardioEntry:
    """Single cardio measurement."""
    duration_seconds: float
    distance: Optional[float] = None

    @property
    def pace(self) -> Optional[float]:
        """Seconds per unit distance, None without a distance."""
        if not self.distance:
            return None
        return self.duration_seconds / self.distance

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"durationSeconds": self.duration_seconds}
        if self.distance is not None:
            data["distance"] = self.distance
            data["pace"] = self.pace
        return data


@dataclass(frozen=True)
class CalisthenicsSet:
    """One bodyweight set, optionally timed (holds)."""
    reps: int
    duration_seconds: Optional[float] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"reps": self.reps}
        if self.duration_seconds is not None:
            data["durationSeconds"] = self.duration_seconds
        return data


@dataclass(frozen=True)
class ExerciseEntry:
    """
    A logged exercise instance.

    Only the measurement matching ``modality`` is populated.
    """
    name: str
    modality: Modality
    exercise_id: Optional[str] = None
    strength_sets: Tuple[StrengthSet, ...] = ()
    cardio: Optional[CardioEntry] = None
    calisthenics_sets: Tuple[CalisthenicsSet, ...] = ()

    @property
    def key(self) -> str:
        return exercise_key(self.exercise_id, self.name)

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "exerciseId": self.exercise_id,
            "name": self.name,
            "modality": self.modality.value,
        }
        if self.modality is Modality.STRENGTH:
            data["strengthSets"] = [s.to_dict() for s in self.strength_sets]
        elif self.modality is Modality.CARDIO:
            data["cardioData"] = self.cardio.to_dict() if self.cardio else None
        else:
            data["calisthenicsSets"] = [s.to_dict() for s in self.calisthenics_sets]
        return data


@dataclass(frozen=True)
class Day:
    """
    One user's log for one local calendar day.

    Identity is (user_id, date). ``date`` is always a local YYYY-MM-DD
    string, never a UTC timestamp.
    """
    date: str
    user_id: str = ""
    id: str = ""
    is_rest_day: bool = False
    exercises: Tuple[ExerciseEntry, ...] = ()
    notes: Optional[str] = None
    updated_at: Optional[str] = None  # ISO format

    def __post_init__(self):
        if not self.id:
            object.__setattr__(self, "id", f"{self.user_id}_{self.date}")

    @property
    def local_date(self) -> Optional[date]:
        return parse_local_date(self.date)

    @property
    def has_exercises(self) -> bool:
        return len(self.exercises) > 0

    @property
    def is_active(self) -> bool:
        """Active days extend streaks: something logged, or a planned rest."""
        return self.has_exercises or self.is_rest_day

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date,
            "isRestDay": self.is_rest_day,
            "exercises": [e.to_dict() for e in self.exercises],
            "notes": self.notes,
            "updatedAt": self.updated_at,
        }
