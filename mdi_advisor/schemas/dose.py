"""Dose API schemas.

Requests carry the full snapshot needed for a calculation (profile,
injection history, reference time). Responses return the engine's
structured result next to the messages rendered in the requested language.
"""

from pydantic import Field

from mdi_advisor.core.constants import MAX_DIA_HOURS, MAX_GLUCOSE_MGDL, MIN_DIA_HOURS, MIN_GLUCOSE_MGDL
from mdi_advisor.core.models import (
    BetweenMealCorrectionResult,
    CalculateDoseParams,
    DoseContext,
    DoseResult,
    EngineModel,
    Injection,
    InsulinProfile,
    Meal,
    PreSleepEvaluation,
)
from mdi_advisor.schemas.common import SnapshotRequest


class DoseCalculateRequest(SnapshotRequest):
    """Request schema for a meal or correction dose."""

    profile: InsulinProfile
    params: CalculateDoseParams


class CorrectionDoseRequest(SnapshotRequest):
    """Request schema for a correction dose without a meal."""

    profile: InsulinProfile
    glucose: float = Field(..., ge=MIN_GLUCOSE_MGDL, le=MAX_GLUCOSE_MGDL)
    previous_injections: list[Injection] = Field(default_factory=list)
    context: DoseContext | None = None


class BetweenMealCorrectionRequest(SnapshotRequest):
    """Request schema for the guarded between-meal correction."""

    profile: InsulinProfile
    glucose: float = Field(..., ge=MIN_GLUCOSE_MGDL, le=MAX_GLUCOSE_MGDL)
    previous_injections: list[Injection] = Field(default_factory=list)


class PreSleepRequest(SnapshotRequest):
    """Request schema for the bedtime evaluation."""

    profile: InsulinProfile
    glucose: float = Field(..., ge=MIN_GLUCOSE_MGDL, le=MAX_GLUCOSE_MGDL)
    previous_injections: list[Injection] = Field(default_factory=list)


class OnBoardRequest(SnapshotRequest):
    """Request schema for insulin and carbs on board."""

    dia_hours: float = Field(..., ge=MIN_DIA_HOURS, le=MAX_DIA_HOURS)
    injections: list[Injection] = Field(default_factory=list)
    meals: list[Meal] = Field(default_factory=list)


class DoseResponse(EngineModel):
    """Response schema for dose calculations."""

    result: DoseResult
    warnings: list[str] = Field(default_factory=list, description="Rendered warnings")


class BetweenMealCorrectionResponse(EngineModel):
    """Response schema for the between-meal correction."""

    result: BetweenMealCorrectionResult
    reason: str
    warnings: list[str] = Field(default_factory=list)


class PreSleepResponse(EngineModel):
    """Response schema for the bedtime evaluation."""

    result: PreSleepEvaluation
    reason: str


class OnBoardResponse(EngineModel):
    """Response schema for insulin and carbs on board."""

    iob: float = Field(..., description="Insulin on board (units, 2 decimals)")
    cob: int = Field(..., description="Carbs on board (grams)")
    hours_since_last_injection: float | None = None
    safe_for_new_dose: bool
