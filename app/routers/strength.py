"""API endpoints for e1RM estimates, training loads and personal records."""
from __future__ import annotations

import logging
import math
from datetime import date

from fastapi import APIRouter, HTTPException, Query

from app.config import get_settings
from app.models.schemas import (
    BestE1RMRequest,
    BestE1RMResponse,
    E1RMResponse,
    ImprovementResponse,
    PersonalRecord,
    PersonalRecordsRequest,
    PersonalRecordsResponse,
    TrainingPercentages,
    WeightUnit,
)
from app.services.strength_history import (
    MAIN_LIFT_NAMES,
    best_e1rm_by_exercise,
    calculate_monthly_progress,
    get_personal_records,
    workouts_for_lift,
)
from app.services.strength_metrics import (
    StrengthMetricError,
    calculate_e1rm_with_confidence,
    calculate_improvement,
    get_best_e1rm,
    get_training_percentages,
    is_valid_for_e1rm,
    round_half_up,
)
from app.services.units import convert_weight


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/strength", tags=["strength"])


@router.get("/e1rm", response_model=E1RMResponse)
async def get_e1rm(
    weight: float = Query(..., allow_inf_nan=False),
    reps: int = Query(...),
    unit: WeightUnit | None = None,
    display_unit: WeightUnit | None = None,
) -> E1RMResponse:
    """
    Estimate a one-rep max from a single set.

    Args:
        weight: Weight lifted (must be > 0)
        reps: Repetitions completed (must be > 0)
        unit: Unit of ``weight`` (defaults to DEFAULT_WEIGHT_UNIT)
        display_unit: Unit for ``display_e1rm`` (defaults to ``unit``)

    Returns:
        E1RMResponse: estimate, confidence tier and converted value
    """
    settings = get_settings()
    unit = unit or settings.default_weight_unit
    display_unit = display_unit or unit

    try:
        estimate = calculate_e1rm_with_confidence(weight, reps)
    except StrengthMetricError as exc:
        logger.warning("Rejected e1RM request weight=%s reps=%s: %s", weight, reps, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    display_e1rm = round_half_up(convert_weight(estimate.e1rm, unit, display_unit), 1)
    if not math.isfinite(display_e1rm):
        raise HTTPException(status_code=400, detail=f"e1RM cannot be expressed in {display_unit}")

    return E1RMResponse(
        **estimate.model_dump(),
        unit=unit,
        display_unit=display_unit,
        display_e1rm=display_e1rm,
    )


@router.get("/percentages", response_model=TrainingPercentages)
async def get_percentages(e1rm: float = Query(..., ge=0, allow_inf_nan=False)) -> TrainingPercentages:
    """Return light/moderate/heavy/max-effort working weights for an e1RM."""
    return get_training_percentages(e1rm)


@router.get("/improvement", response_model=ImprovementResponse)
async def get_improvement(
    current: float = Query(..., allow_inf_nan=False),
    previous: float = Query(..., allow_inf_nan=False),
) -> ImprovementResponse:
    """Percentage change between two e1RM values (0 without a positive baseline)."""
    improvement = calculate_improvement(current, previous)
    if not math.isfinite(improvement):
        raise HTTPException(status_code=400, detail="Improvement is too large to report")

    return ImprovementResponse(
        current_e1rm=current,
        previous_e1rm=previous,
        improvement_percent=improvement,
    )


@router.post("/best", response_model=BestE1RMResponse)
async def post_best_e1rm(payload: BestE1RMRequest) -> BestE1RMResponse:
    """
    Pick the most reliable e1RM from a list of sets.

    Invalid sets (non-positive weight or reps, more than 20 reps) are ignored
    rather than rejected; ``estimate`` is null when none remain.
    """
    observations = payload.observations
    used = sum(1 for obs in observations if is_valid_for_e1rm(obs.weight, obs.reps))

    return BestE1RMResponse(
        estimate=get_best_e1rm(observations),
        observations_received=len(observations),
        observations_used=used,
    )


@router.post("/personal-records", response_model=PersonalRecordsResponse)
async def post_personal_records(payload: PersonalRecordsRequest) -> PersonalRecordsResponse:
    """
    Build main-lift personal records from a workout history.

    Each record carries the best estimate for the lift, the date of the set it
    came from and the change against the best set from a month earlier.
    """
    settings = get_settings()
    as_of = payload.as_of or date.today()
    unit = payload.unit or settings.default_weight_unit
    display_unit = payload.display_unit or unit

    try:
        records = get_personal_records(payload.workouts)

        results: list[PersonalRecord] = []
        for lift in MAIN_LIFT_NAMES:
            if lift not in records:
                continue

            estimate, achieved_at = records[lift]
            progress = calculate_monthly_progress(
                estimate.e1rm,
                workouts_for_lift(payload.workouts, lift),
                as_of,
                lookback_days=settings.progress_lookback_days,
                sample_limit=settings.progress_sample_limit,
            )
            results.append(
                PersonalRecord(
                    lift=MAIN_LIFT_NAMES[lift],
                    estimate=estimate,
                    achieved_at=achieved_at,
                    monthly_progress=progress,
                    unit=unit,
                    display_unit=display_unit,
                    display_e1rm=round_half_up(convert_weight(estimate.e1rm, unit, display_unit), 1),
                    display_monthly_progress=round_half_up(convert_weight(progress, unit, display_unit), 1),
                )
            )

        logger.info(
            "Built %d personal records from %d workouts | as_of=%s",
            len(results),
            len(payload.workouts),
            as_of.isoformat(),
        )
        return PersonalRecordsResponse(
            as_of=as_of,
            records=results,
            exercises_tracked=len(best_e1rm_by_exercise(payload.workouts)),
        )
    except Exception as e:
        logger.exception("Failed to build personal records")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build personal records: {str(e)}"
        ) from e
