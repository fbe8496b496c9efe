"""Personal records and progress tracking across a workout history."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Iterable, Mapping

from app.models.schemas import E1RMEstimate, LiftObservation
from app.services.strength_metrics import (
    calculate_e1rm,
    get_best_e1rm,
    is_valid_for_e1rm,
    round_half_up,
)


logger = logging.getLogger(__name__)

# Checked in order: overhead press comes before bench so that
# "shoulder press" is never read as a bench variant.
MAIN_LIFT_PATTERNS: dict[str, list[str]] = {
    "overhead_press": ["overhead press", "military press", "shoulder press", "ohp"],
    "bench": ["bench press", "bench", "barbell bench"],
    "deadlift": ["deadlift", "conventional deadlift", "sumo deadlift"],
    "squat": ["squat", "back squat", "front squat"],
}

MAIN_LIFT_NAMES = {
    "squat": "Squat",
    "bench": "Bench Press",
    "deadlift": "Deadlift",
    "overhead_press": "Overhead Press",
}


def _to_observation(item: LiftObservation | Mapping[str, Any]) -> LiftObservation:
    if isinstance(item, LiftObservation):
        return item
    return LiftObservation.model_validate(item)


def classify_lift(exercise_name: str | None) -> str | None:
    """
    Map a free-text exercise name onto one of the main lifts.

    Example:
        >>> classify_lift("Barbell Bench Press")
        'bench'
        >>> classify_lift("Bicep Curl") is None
        True
    """
    if not exercise_name:
        return None

    name = exercise_name.strip().lower()
    for lift, patterns in MAIN_LIFT_PATTERNS.items():
        if any(pattern in name for pattern in patterns):
            return lift
    return None


def workouts_for_lift(
    workouts: Iterable[LiftObservation | Mapping[str, Any]],
    lift: str,
) -> list[LiftObservation]:
    """Return the sets whose exercise name classifies as ``lift``."""
    return [
        workout
        for workout in map(_to_observation, workouts)
        if classify_lift(workout.exercise_name) == lift
    ]


def best_e1rm_by_exercise(
    workouts: Iterable[LiftObservation | Mapping[str, Any]],
) -> dict[str, float]:
    """
    Best raw e1RM for every exercise in a history.

    Exercise names are compared case-insensitively. Sets without a name or
    that fail ``is_valid_for_e1rm`` are skipped.

    Returns:
        Mapping of lower-cased exercise name to its highest e1RM
    """
    best: dict[str, float] = {}

    for item in workouts:
        workout = _to_observation(item)
        if not workout.exercise_name or not is_valid_for_e1rm(workout.weight, workout.reps):
            continue

        exercise = workout.exercise_name.strip().lower()
        e1rm = calculate_e1rm(workout.weight, workout.reps)
        if exercise not in best or best[exercise] < e1rm:
            best[exercise] = e1rm

    return best


def get_personal_records(
    workouts: Iterable[LiftObservation | Mapping[str, Any]],
) -> dict[str, tuple[E1RMEstimate, date | None]]:
    """
    Find the most reliable e1RM for each main lift.

    Each lift's sets are ranked with ``get_best_e1rm``, so confidence beats raw
    magnitude here as well.

    Returns:
        Mapping of lift key to ``(estimate, achieved_at)`` where ``achieved_at``
        is the date of the set the estimate came from (None if undated).
        Lifts without usable sets are omitted.
    """
    by_lift: dict[str, list[LiftObservation]] = {}
    for item in workouts:
        workout = _to_observation(item)
        lift = classify_lift(workout.exercise_name)
        if lift is not None:
            by_lift.setdefault(lift, []).append(workout)

    records: dict[str, tuple[E1RMEstimate, date | None]] = {}
    for lift, rows in by_lift.items():
        estimate = get_best_e1rm(rows)
        if estimate is None:
            logger.debug("No usable sets for %s among %d rows", lift, len(rows))
            continue

        achieved_at = next(
            (
                row.date
                for row in rows
                if row.weight == estimate.source.weight and row.reps == estimate.source.reps
            ),
            None,
        )
        records[lift] = (estimate, achieved_at)

    return records


def calculate_monthly_progress(
    current_e1rm: float,
    workouts: Iterable[LiftObservation | Mapping[str, Any]],
    as_of: date,
    lookback_days: int = 30,
    sample_limit: int = 10,
) -> float:
    """
    Absolute e1RM change against the best lift from a month ago.

    Only dated sets on or before ``as_of - lookback_days`` are considered, and
    of those only the ``sample_limit`` most recent usable ones.

    Args:
        current_e1rm: Today's e1RM for the lift
        workouts: History for that lift
        as_of: Reference date for "now"
        lookback_days: How far back the comparison baseline starts
        sample_limit: Maximum number of baseline sets to inspect

    Returns:
        ``current_e1rm`` minus the best baseline e1RM, rounded to 0.1,
        or 0.0 when there is no baseline
    """
    cutoff = as_of - timedelta(days=lookback_days)

    baseline = [
        workout
        for workout in map(_to_observation, workouts)
        if workout.date is not None
        and workout.date <= cutoff
        and is_valid_for_e1rm(workout.weight, workout.reps)
    ]
    if not baseline:
        return 0.0

    baseline.sort(key=lambda workout: workout.date, reverse=True)
    best_previous = max(
        calculate_e1rm(workout.weight, workout.reps)
        for workout in baseline[:sample_limit]
    )

    return round_half_up(current_e1rm - best_previous, 1)
