from liftledger.models.day import (
    Modality,
    StrengthSet,
    CardioEntry,
    CalisthenicsSet,
    ExerciseEntry,
    Day,
    exercise_key,
)
from liftledger.models.catalog import ExerciseCatalog, ExerciseCatalogEntry, MuscleGroup
from liftledger.models.stats import (
    AnalyticsSummary,
    StrengthAnalytics,
    CardioAnalytics,
    VolumeDataPoint,
    DistanceDataPoint,
    MuscleGroupStats,
    StrengthExerciseFrequency,
    CardioExerciseFrequency,
    PRType,
    ExercisePR,
    ProgressPoint,
    LeaderboardEntry,
)

__all__ = [
    "Modality",
    "StrengthSet",
    "CardioEntry",
    "CalisthenicsSet",
    "ExerciseEntry",
    "Day",
    "exercise_key",
    "ExerciseCatalog",
    "ExerciseCatalogEntry",
    "MuscleGroup",
    "AnalyticsSummary",
    "StrengthAnalytics",
    "CardioAnalytics",
    "VolumeDataPoint",
    "DistanceDataPoint",
    "MuscleGroupStats",
    "StrengthExerciseFrequency",
    "CardioExerciseFrequency",
    "PRType",
    "ExercisePR",
    "ProgressPoint",
    "LeaderboardEntry",
]
