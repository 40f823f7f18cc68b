"""
Personal Records - All-time bests and new-PR detection.

PRs are always computed over the full, unfiltered history; a display
window never changes what counts as a record.
"""
import math
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from liftledger.core.config import settings
from liftledger.core.logging import get_logger
from liftledger.models.day import Day, ExerciseEntry, Modality, exercise_key as make_exercise_key
from liftledger.models.stats import ExercisePR, PRType, ProgressPoint
from liftledger.services.analytics.periods import sort_days_chronologically
from liftledger.services.analytics.strategies import get_strategy

logger = get_logger(__name__)


def _usable(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def find_all_prs(
    days: Iterable[Day],
    tracked_exercise_ids: Optional[Sequence[str]] = None
) -> List[ExercisePR]:
    """
    Find the best-ever value per (exercise, modality, PR type).

    History is scanned oldest first and a record is only replaced by a
    strictly better value, so on a tie the earliest date is the PR.

    Args:
        days: Full day history in any order
        tracked_exercise_ids: Optional exercise keys to keep

    Returns:
        PRs ordered by first appearance in history
    """
    best: Dict[Tuple[str, Modality, PRType], ExercisePR] = {}

    for day in sort_days_chronologically(days):
        for exercise in day.exercises:
            strategy = get_strategy(exercise.modality)
            for pr_type, value in strategy.pr_candidates(exercise):
                if not _usable(value):
                    continue

                key = (exercise.key, exercise.modality, pr_type)
                current = best.get(key)
                if current is not None and not pr_type.improves(value, current.value):
                    continue

                best[key] = ExercisePR(
                    exercise_key=exercise.key,
                    exercise_name=exercise.name,
                    modality=exercise.modality,
                    pr_type=pr_type,
                    value=value,
                    date=day.date,
                    source_record_id=day.id,
                )

    prs = list(best.values())

    if tracked_exercise_ids:
        tracked = set(tracked_exercise_ids)
        prs = [pr for pr in prs if pr.exercise_key in tracked]

    logger.debug("Personal records computed", count=len(prs))
    return prs


def extract_exercise_history(
    days: Iterable[Day],
    exercise_key: str,
    modality: Modality
) -> List[ProgressPoint]:
    """
    Per-day best value for one exercise, oldest first.

    Strength tracks max weight, cardio distance (falling back to duration),
    calisthenics max reps. Days without a positive value are skipped.

    Args:
        days: Day history in any order
        exercise_key: Exercise identity (catalog id, or a name key)
        modality: The exercise's modality

    Returns:
        Progress points sorted by date
    """
    modality = Modality(modality)
    strategy = get_strategy(modality)
    history = []

    for day in sort_days_chronologically(days):
        if day.is_rest_day:
            continue
        values = [
            strategy.history_value(ex)
            for ex in day.exercises
            if ex.modality is modality and ex.key == exercise_key
        ]
        values = [v for v in values if _usable(v)]
        if values:
            history.append(ProgressPoint(date=day.date, value=max(values)))

    return history


def is_new_pr(history: Sequence[ProgressPoint], lower_is_better: bool = False) -> bool:
    """
    Whether the latest point matches or beats every earlier point.

    The latest point is compared only against history *before* it, so it
    cannot tie with itself; a tie with the previous best does count as a
    new PR.

    Args:
        history: Progress points for one exercise metric
        lower_is_better: True for pace-like metrics

    Returns:
        False when there are fewer than two points
    """
    points = sorted(history, key=lambda p: p.date)
    if len(points) < 2:
        return False

    latest = points[-1].value
    previous = [p.value for p in points[:-1]]

    if lower_is_better:
        return latest <= min(previous)
    return latest >= max(previous)


def should_fetch_insight(history: Sequence[ProgressPoint]) -> bool:
    """
    Whether a history is long enough to be worth an insight.

    Requires a minimum number of sessions spanning a minimum number of days.
    """
    if len(history) < settings.INSIGHT_MIN_SESSIONS:
        return False

    points = sorted(history, key=lambda p: p.date)
    try:
        first = date.fromisoformat(points[0].date)
        latest = date.fromisoformat(points[-1].date)
    except ValueError:
        return False

    return (latest - first).days >= settings.INSIGHT_MIN_DURATION_DAYS


def get_metric_name(modality: Modality, has_distance: bool = False) -> str:
    """Name of the tracked metric for a modality."""
    modality = Modality(modality)
    if modality is Modality.STRENGTH:
        return "weight"
    if modality is Modality.CARDIO:
        return "distance" if has_distance else "duration"
    return "reps"


def exercise_history_for(
    days: Iterable[Day],
    exercise_id: Optional[str],
    name: str,
    modality: Modality
) -> List[ProgressPoint]:
    """Convenience wrapper resolving identity from a freshly logged exercise."""
    return extract_exercise_history(days, make_exercise_key(exercise_id, name), modality)


def get_last_exercise(
    days: Iterable[Day],
    exercise_id: Optional[str],
    name: str
) -> Optional[ExerciseEntry]:
    """
    Most recently logged instance of an exercise.

    Used to prefill a new log with the previous session's sets. Identity
    follows ``exercise_key``; within one day the first match wins.

    Returns:
        ExerciseEntry, or None if the exercise was never logged
    """
    key = make_exercise_key(exercise_id, name)
    for day in reversed(sort_days_chronologically(days)):
        for exercise in day.exercises:
            if exercise.key == key:
                return exercise
    return None
