"""Pydantic models describing lifting data and API payloads."""
import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


Confidence = Literal["high", "medium", "low"]
WeightUnit = Literal["kg", "lbs"]


class LiftObservation(BaseModel):
    """A single logged set.

    Values are deliberately not range-checked here: historical rows with a
    zero or negative weight must still reach the estimators, which filter
    them out instead of rejecting the whole batch. Only infinite or NaN
    weights are refused, since no estimate can be derived from them.
    """

    weight: float = Field(allow_inf_nan=False)
    reps: int
    date: datetime.date | None = None
    exercise_name: str | None = None


class LiftSource(BaseModel):
    """The weight/reps pair an estimate was derived from."""

    weight: float
    reps: int


class E1RMEstimate(BaseModel):
    """Estimated one-rep max tagged with a confidence tier."""

    e1rm: float
    confidence: Confidence
    source: LiftSource


class TrainingPercentages(BaseModel):
    """Working weights for the four load tiers of an e1RM."""

    model_config = ConfigDict(populate_by_name=True)

    light: int
    moderate: int
    heavy: int
    max_effort: int = Field(alias="maxEffort")


# API payloads
class E1RMResponse(E1RMEstimate):
    """Response for the single-set e1RM calculator."""

    unit: WeightUnit
    display_unit: WeightUnit
    display_e1rm: float


class ImprovementResponse(BaseModel):
    """Relative change between two e1RM values."""

    current_e1rm: float
    previous_e1rm: float
    improvement_percent: float


class BestE1RMRequest(BaseModel):
    """Workout history to pick the most reliable estimate from."""

    observations: list[LiftObservation] = []


class BestE1RMResponse(BaseModel):
    """Best estimate across a history, or null when nothing was usable."""

    estimate: E1RMEstimate | None = None
    observations_received: int
    observations_used: int


class PersonalRecordsRequest(BaseModel):
    """Workout history used to build main-lift personal records."""

    workouts: list[LiftObservation] = []
    as_of: datetime.date | None = None
    unit: WeightUnit | None = None
    display_unit: WeightUnit | None = None


class PersonalRecord(BaseModel):
    """Best main-lift estimate with its month-over-month change."""

    lift: str
    estimate: E1RMEstimate
    achieved_at: datetime.date | None = None
    monthly_progress: float = 0.0
    unit: WeightUnit
    display_unit: WeightUnit
    display_e1rm: float
    display_monthly_progress: float = 0.0


class PersonalRecordsResponse(BaseModel):
    """Personal records keyed by main lift."""

    as_of: datetime.date
    records: list[PersonalRecord] = []
    exercises_tracked: int = Field(ge=0)
