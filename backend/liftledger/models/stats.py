"""
Derived analytics models.

Everything here is computed fresh from day records on every request and
never persisted. ``to_dict`` produces the camelCase shape served by the API.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from liftledger.models.day import Modality


@dataclass(frozen=True)
class AnalyticsSummary:
    """Overview numbers for a user's history."""
    total_workouts: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    total_volume: float = 0
    total_cardio_distance: float = 0
    total_cardio_duration: float = 0  # seconds
    total_calisthenics_reps: int = 0
    favorite_exercise: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "totalWorkouts": self.total_workouts,
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "totalVolume": self.total_volume,
            "totalCardioDistance": self.total_cardio_distance,
            "totalCardioDuration": self.total_cardio_duration,
            "totalCalisthenicsReps": self.total_calisthenics_reps,
            "favoriteExercise": self.favorite_exercise,
        }


@dataclass(frozen=True)
class VolumeDataPoint:
    date: str
    volume: float
    workout_count: int = 1  # days contributing to the point

    def to_dict(self) -> dict:
        return {"date": self.date, "volume": self.volume, "workoutCount": self.workout_count}


@dataclass(frozen=True)
class DistanceDataPoint:
    date: str
    distance: float
    duration: float

    def to_dict(self) -> dict:
        return {"date": self.date, "distance": self.distance, "duration": self.duration}


@dataclass(frozen=True)
class MuscleGroupStats:
    muscle_group: str
    volume: float
    frequency: int  # distinct days trained
    exercises: int  # distinct exercises

    def to_dict(self) -> dict:
        return {
            "muscleGroup": self.muscle_group,
            "volume": self.volume,
            "frequency": self.frequency,
            "exercises": self.exercises,
        }


@dataclass(frozen=True)
class StrengthExerciseFrequency:
    exercise_key: str
    name: str
    count: int
    max_weight: float

    def to_dict(self) -> dict:
        return {
            "exerciseId": self.exercise_key,
            "name": self.name,
            "count": self.count,
            "maxWeight": self.max_weight,
        }


@dataclass(frozen=True)
class CardioExerciseFrequency:
    exercise_key: str
    name: str
    count: int
    total_distance: float

    def to_dict(self) -> dict:
        return {
            "exerciseId": self.exercise_key,
            "name": self.name,
            "count": self.count,
            "totalDistance": self.total_distance,
        }


@dataclass(frozen=True)
class StrengthAnalytics:
    total_volume: float = 0
    average_volume_per_workout: float = 0
    max_volume_workout: float = 0
    volume_trend: List[VolumeDataPoint] = field(default_factory=list)
    exercises_by_frequency: List[StrengthExerciseFrequency] = field(default_factory=list)
    volume_by_muscle_group: List[MuscleGroupStats] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalVolume": self.total_volume,
            "averageVolumePerWorkout": self.average_volume_per_workout,
            "maxVolumeWorkout": self.max_volume_workout,
            "volumeTrend": [p.to_dict() for p in self.volume_trend],
            "exercisesByFrequency": [e.to_dict() for e in self.exercises_by_frequency],
            "volumeByMuscleGroup": [m.to_dict() for m in self.volume_by_muscle_group],
        }


@dataclass(frozen=True)
class CardioAnalytics:
    total_distance: float = 0
    total_duration: float = 0  # seconds
    average_pace: float = 0  # seconds per unit distance
    best_pace: float = 0  # lower is better, 0 when unknown
    longest_distance: float = 0
    longest_duration: float = 0
    distance_trend: List[DistanceDataPoint] = field(default_factory=list)
    exercises_by_frequency: List[CardioExerciseFrequency] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalDistance": self.total_distance,
            "totalDuration": self.total_duration,
            "averagePace": self.average_pace,
            "bestPace": self.best_pace,
            "longestDistance": self.longest_distance,
            "longestDuration": self.longest_duration,
            "distanceTrend": [p.to_dict() for p in self.distance_trend],
            "exercisesByFrequency": [e.to_dict() for e in self.exercises_by_frequency],
        }


class PRType(str, Enum):
    """Kinds of personal record."""
    MAX_WEIGHT = "maxWeight"
    MAX_DISTANCE = "maxDistance"
    MAX_DURATION = "maxDuration"
    BEST_PACE = "bestPace"
    MAX_REPS = "maxReps"

    @property
    def lower_is_better(self) -> bool:
        return self is PRType.BEST_PACE

    def improves(self, value: float, best: float) -> bool:
        """Strictly better than ``best``; ties never replace a record."""
        if self.lower_is_better:
            return value < best
        return value > best


@dataclass(frozen=True)
class ExercisePR:
    """Best-ever value for one (exercise, PR type)."""
    exercise_key: str
    exercise_name: str
    modality: Modality
    pr_type: PRType
    value: float
    date: str
    source_record_id: str

    def to_dict(self) -> dict:
        return {
            "exerciseId": self.exercise_key,
            "exerciseName": self.exercise_name,
            "modality": self.modality.value,
            "prType": self.pr_type.value,
            "value": self.value,
            "date": self.date,
            "sourceRecordId": self.source_record_id,
        }


@dataclass(frozen=True)
class ProgressPoint:
    """One day's best value for a single exercise metric."""
    date: str
    value: float

    def to_dict(self) -> dict:
        return {"date": self.date, "value": self.value}


@dataclass(frozen=True)
class LeaderboardEntry:
    user_id: str
    value: float
    rank: int

    def to_dict(self) -> dict:
        return {"userId": self.user_id, "value": self.value, "rank": self.rank}
