"""Estimated one-rep max (e1RM) calculations based on the Brzycki formula."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from app.models.schemas import Confidence, E1RMEstimate, LiftObservation, LiftSource, TrainingPercentages


logger = logging.getLogger(__name__)

# Brzycki accuracy falls off beyond this rep count
MAX_FORMULA_REPS = 12
# Sets above this are too far from a max effort to estimate at all
MAX_VALID_REPS = 20

BRZYCKI_INTERCEPT = 1.0278
BRZYCKI_SLOPE = 0.0278
FALLBACK_MULTIPLIER = 1.5

CONFIDENCE_RANK: dict[str, int] = {"high": 3, "medium": 2, "low": 1}

TRAINING_PERCENTAGES = {
    "light": 0.65,
    "moderate": 0.75,
    "heavy": 0.85,
    "max_effort": 0.95,
}


class StrengthMetricError(ValueError):
    """Base error for invalid strength metric inputs."""


class InvalidWeightError(StrengthMetricError):
    """Raised when a weight is zero or negative."""


class InvalidRepsError(StrengthMetricError):
    """Raised when a rep count is zero or negative."""


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round to ``digits`` places with halves going up (2.5 -> 3, -2.5 -> -2).

    Infinite and NaN values, and values too large to scale, are returned
    unchanged.
    """
    factor = 10 ** digits
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


def calculate_e1rm(weight: float, reps: int) -> float:
    """
    Calculate estimated one-rep max using the Brzycki formula.

    Formula: weight / (1.0278 - 0.0278 * reps), with reps capped at 12.

    Args:
        weight: Weight lifted in any unit (kg or lbs)
        reps: Number of repetitions performed

    Returns:
        Estimated 1RM in the same unit as ``weight``, rounded to 0.1

    Raises:
        InvalidWeightError: If weight is zero or negative
        InvalidRepsError: If reps is zero or negative

    Example:
        >>> calculate_e1rm(100, 5)
        112.5
    """
    if weight <= 0:
        raise InvalidWeightError("Weight must be greater than 0")
    if reps <= 0:
        raise InvalidRepsError("Repetitions must be greater than 0")

    # A single rep is already a measured max
    if reps == 1:
        return weight

    capped_reps = min(reps, MAX_FORMULA_REPS)
    denominator = BRZYCKI_INTERCEPT - BRZYCKI_SLOPE * capped_reps

    if denominator <= 0:
        logger.warning(
            "Non-positive Brzycki denominator (reps=%d) - using %.1fx fallback",
            capped_reps,
            FALLBACK_MULTIPLIER,
        )
        return weight * FALLBACK_MULTIPLIER

    return round_half_up(weight / denominator, 1)


def confidence_for_reps(reps: int) -> Confidence:
    """Return the confidence tier for an e1RM extrapolated from ``reps``."""
    if 1 <= reps <= 3:
        return "high"
    if 4 <= reps <= 8:
        return "medium"
    return "low"


def calculate_e1rm_with_confidence(weight: float, reps: int) -> E1RMEstimate:
    """
    Calculate e1RM and tag it with a confidence tier.

    Lower rep ranges sit closer to a true max, so they are trusted more:
        - 1-3 reps: high
        - 4-8 reps: medium
        - 9+ reps: low

    Raises:
        InvalidWeightError: If weight is zero or negative
        InvalidRepsError: If reps is zero or negative
    """
    e1rm = calculate_e1rm(weight, reps)
    return E1RMEstimate(
        e1rm=e1rm,
        confidence=confidence_for_reps(reps),
        source=LiftSource(weight=weight, reps=reps),
    )


def is_valid_for_e1rm(weight: float, reps: int) -> bool:
    """Return True if a set is usable for e1RM estimation."""
    return weight > 0 and reps > 0 and reps <= MAX_VALID_REPS


def get_training_percentages(e1rm: float) -> TrainingPercentages:
    """
    Derive working weights from an e1RM.

    Tiers:
        - light (65%): 12-15 reps
        - moderate (75%): 8-12 reps
        - heavy (85%): 3-6 reps
        - max effort (95%): 1-3 reps

    Each tier is rounded to the nearest whole unit on its own.

    Example:
        >>> get_training_percentages(100).model_dump(by_alias=True)
        {'light': 65, 'moderate': 75, 'heavy': 85, 'maxEffort': 95}
    """
    return TrainingPercentages(
        **{
            tier: int(round_half_up(e1rm * fraction))
            for tier, fraction in TRAINING_PERCENTAGES.items()
        }
    )


def calculate_improvement(current_e1rm: float, previous_e1rm: float) -> float:
    """
    Percentage change from ``previous_e1rm`` to ``current_e1rm``.

    Returns 0.0 when there is no positive baseline to compare against.
    """
    if previous_e1rm <= 0:
        return 0.0

    improvement = ((current_e1rm - previous_e1rm) / previous_e1rm) * 100
    return round_half_up(improvement, 1)


def _weight_and_reps(item: LiftObservation | Mapping[str, Any]) -> tuple[float, int] | None:
    if isinstance(item, LiftObservation):
        return item.weight, item.reps

    if isinstance(item, Mapping):
        raw = {"weight": item.get("weight"), "reps": item.get("reps")}
    else:
        raw = {"weight": getattr(item, "weight", None), "reps": getattr(item, "reps", None)}

    try:
        observation = LiftObservation.model_validate(raw)
    except ValidationError:
        return None
    return observation.weight, observation.reps


def get_best_e1rm(
    observations: Iterable[LiftObservation | Mapping[str, Any]],
) -> E1RMEstimate | None:
    """
    Pick the most reliable e1RM across a workout history.

    Sets failing ``is_valid_for_e1rm`` are dropped, as are entries whose
    weight or reps are missing, non-numeric or non-finite. The remaining estimates
    are ranked by confidence tier first and by e1RM second, so a verified
    heavy triple beats a bigger number extrapolated from a set of ten.
    Exact ties keep the first estimate encountered.

    Args:
        observations: LiftObservation models or mappings with ``weight`` and
            ``reps`` keys (numeric strings are coerced; other keys such as
            ``date`` are ignored)

    Returns:
        The best E1RMEstimate, or None if no set was usable
    """
    estimates: list[E1RMEstimate] = []
    skipped = 0

    for item in observations:
        pair = _weight_and_reps(item)
        if pair is None or not is_valid_for_e1rm(*pair):
            skipped += 1
            continue
        estimates.append(calculate_e1rm_with_confidence(*pair))

    if skipped:
        logger.debug("Skipped %d sets unsuitable for e1RM estimation", skipped)

    if not estimates:
        return None

    # max() keeps the first of several equal keys
    return max(
        estimates,
        key=lambda estimate: (CONFIDENCE_RANK[estimate.confidence], estimate.e1rm),
    )
