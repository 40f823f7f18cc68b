"""
Shared fixtures and raw-document builders.

Builders produce persisted-shape dicts (camelCase, like stored documents)
so tests exercise the normalizer exactly as production input would.
"""
from datetime import date, datetime

import pytest

from liftledger.models.catalog import ExerciseCatalogEntry, MuscleGroup
from liftledger.models.day import Modality
from liftledger.services.analytics.adapter import normalize_days


def strength(name, sets, exercise_id=None):
    """sets: [(reps, weight), ...]"""
    return {
        "name": name,
        "exerciseId": exercise_id,
        "modality": "strength",
        "strengthSets": [{"reps": reps, "weight": weight} for reps, weight in sets],
    }


def cardio(name, duration, distance=None, exercise_id=None):
    data = {"durationSeconds": duration}
    if distance is not None:
        data["distance"] = distance
    return {"name": name, "exerciseId": exercise_id, "modality": "cardio", "cardioData": data}


def calisthenics(name, reps, durations=None, exercise_id=None):
    durations = durations or [None] * len(reps)
    return {
        "name": name,
        "exerciseId": exercise_id,
        "modality": "calisthenics",
        "calisthenicsSets": [
            {"reps": r, "durationSeconds": d} if d is not None else {"reps": r}
            for r, d in zip(reps, durations)
        ],
    }


def day_doc(day_date, *exercises, user_id="userA", rest=False, **extra):
    doc = {
        "userId": user_id,
        "date": day_date,
        "isRestDay": rest,
        "exercises": list(exercises),
    }
    doc.update(extra)
    return doc


def build_days(*docs):
    return normalize_days(list(docs))


@pytest.fixture
def today():
    return date(2024, 1, 2)


@pytest.fixture
def now():
    return datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def example_days():
    """Bench on 2024-01-01, a 5 unit run on 2024-01-02."""
    return build_days(
        day_doc("2024-01-01", {
            "name": "Bench",
            "modality": "strength",
            "sets": [{"reps": 5, "weight": 100}, {"reps": 5, "weight": 100}],
        }),
        day_doc("2024-01-02", {
            "name": "Run",
            "modality": "cardio",
            "durationSeconds": 1800,
            "distance": 5,
        }),
    )


@pytest.fixture
def catalog():
    return {
        "bench-press": ExerciseCatalogEntry(
            id="bench-press",
            name="Bench Press",
            modality=Modality.STRENGTH,
            muscle_group=MuscleGroup.CHEST,
        ),
        "squat": ExerciseCatalogEntry(
            id="squat",
            name="Back Squat",
            modality=Modality.STRENGTH,
            muscle_group=MuscleGroup.LEGS,
        ),
        "run": ExerciseCatalogEntry(id="run", name="Running", modality=Modality.CARDIO),
    }
