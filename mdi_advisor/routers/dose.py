"""Dose calculation router.

Stateless endpoints: each request carries the profile, the injection
history and the reference time, and nothing is stored.
"""

from fastapi import APIRouter

from mdi_advisor.core.cob import calculate_cob
from mdi_advisor.core.correction_guard import (
    calculate_between_meal_correction_for_profile,
    check_3_hour_rule,
)
from mdi_advisor.core.dose import calculate_correction_dose, calculate_dose
from mdi_advisor.core.iob import calculate_iob, hours_since_last_injection
from mdi_advisor.core.pre_sleep import evaluate_pre_sleep_for_profile
from mdi_advisor.core.rounding import round_decimals
from mdi_advisor.i18n import resolver_for
from mdi_advisor.schemas.common import ValidationErrorResponse
from mdi_advisor.schemas.dose import (
    BetweenMealCorrectionRequest,
    BetweenMealCorrectionResponse,
    CorrectionDoseRequest,
    DoseCalculateRequest,
    DoseResponse,
    OnBoardRequest,
    OnBoardResponse,
    PreSleepRequest,
    PreSleepResponse,
)

router = APIRouter(prefix="/api/dose", tags=["dose"])

_RESPONSES = {
    422: {"model": ValidationErrorResponse, "description": "Input out of range"},
}


@router.post(
    "/calculate",
    response_model=DoseResponse,
    responses={200: {"description": "Recommended dose"}, **_RESPONSES},
)
async def calculate(request: DoseCalculateRequest) -> DoseResponse:
    """Calculate a meal or correction dose."""
    result = calculate_dose(
        request.profile, request.params, now=request.now, curve=request.curve
    )
    resolver = resolver_for(request.language)
    return DoseResponse(result=result, warnings=resolver.render_all(result.warnings))


@router.post(
    "/correction",
    response_model=DoseResponse,
    responses={200: {"description": "Correction dose"}, **_RESPONSES},
)
async def correction(request: CorrectionDoseRequest) -> DoseResponse:
    """Calculate a correction dose without a meal (between-meals factor applied)."""
    result = calculate_correction_dose(
        request.profile,
        request.glucose,
        request.previous_injections,
        request.context,
        now=request.now,
        curve=request.curve,
    )
    resolver = resolver_for(request.language)
    return DoseResponse(result=result, warnings=resolver.render_all(result.warnings))


@router.post(
    "/between-meal-correction",
    response_model=BetweenMealCorrectionResponse,
    responses={200: {"description": "Guarded correction"}, **_RESPONSES},
)
async def between_meal_correction(
    request: BetweenMealCorrectionRequest,
) -> BetweenMealCorrectionResponse:
    """Conservative correction, refused within three hours of the last injection."""
    result = calculate_between_meal_correction_for_profile(
        request.glucose,
        request.previous_injections,
        request.profile,
        now=request.now,
        curve=request.curve,
    )
    resolver = resolver_for(request.language)
    return BetweenMealCorrectionResponse(
        result=result,
        reason=resolver.render(result.reason),
        warnings=resolver.render_all(result.warnings),
    )


@router.post(
    "/pre-sleep",
    response_model=PreSleepResponse,
    responses={200: {"description": "Bedtime recommendation"}, **_RESPONSES},
)
async def pre_sleep(request: PreSleepRequest) -> PreSleepResponse:
    """Evaluate glucose and active insulin before sleeping."""
    result = evaluate_pre_sleep_for_profile(
        request.glucose,
        request.previous_injections,
        request.profile,
        now=request.now,
        curve=request.curve,
    )
    resolver = resolver_for(request.language)
    return PreSleepResponse(result=result, reason=resolver.render(result.reason))


@router.post(
    "/iob",
    response_model=OnBoardResponse,
    responses={200: {"description": "Insulin and carbs on board"}, **_RESPONSES},
)
async def on_board(request: OnBoardRequest) -> OnBoardResponse:
    """Insulin and carbohydrates still active at ``now``."""
    iob = calculate_iob(request.injections, request.now, request.dia_hours, request.curve)
    hours_since = hours_since_last_injection(request.injections, request.now)
    return OnBoardResponse(
        iob=round_decimals(iob, 2),
        cob=calculate_cob(request.meals, request.now),
        hours_since_last_injection=(
            round_decimals(hours_since, 1) if hours_since is not None else None
        ),
        safe_for_new_dose=check_3_hour_rule(request.injections, request.now),
    )
