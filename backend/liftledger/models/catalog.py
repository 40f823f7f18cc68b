"""
Exercise catalog model.
Static reference data used to enrich aggregation by muscle group.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from liftledger.models.day import Modality


class MuscleGroup(str, Enum):
    """Primary muscle group of a catalog exercise."""
    CHEST = "chest"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    LEGS = "legs"
    BACK = "back"
    GLUTES = "glutes"
    ABS = "abs"
    CALVES = "calves"
    FOREARMS_FLEXORS = "forearms_flexors"
    FOREARMS_EXTENSORS = "forearms_extensors"
    NECK = "neck"
    FULL_BODY = "full_body"


@dataclass(frozen=True)
class ExerciseCatalogEntry:
    """Catalog exercise. Cardio entries usually have no muscle group."""
    id: str
    name: str
    modality: Modality
    muscle_group: Optional[MuscleGroup] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "modality": self.modality.value,
            "muscleGroup": self.muscle_group.value if self.muscle_group else None,
        }


# Catalog lookups are keyed by exercise id
ExerciseCatalog = Mapping[str, ExerciseCatalogEntry]
