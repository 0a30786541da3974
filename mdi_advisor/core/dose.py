"""Per-meal and correction dose calculator.

    TOTAL = max(0, CARB_DOSE + CORRECTION_DOSE - IOB)

where CARB_DOSE = carbohydrates / IC ratio of the meal slot and
CORRECTION_DOSE = max(0, (glucose - target) / ISF). The result is scaled by
the context adjustments, rounded to 0.5 U and annotated with warnings.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from mdi_advisor.core.adjustments import apply_context_adjustments
from mdi_advisor.core.constants import DEFAULT_DINNER_HOUR
from mdi_advisor.core.enums import DecayCurve, TimeOfDay
from mdi_advisor.core.iob import calculate_iob
from mdi_advisor.core.models import (
    CalculateDoseParams,
    DoseBreakdown,
    DoseContext,
    DoseResult,
    Injection,
    InsulinProfile,
)
from mdi_advisor.core.rounding import round_decimals
from mdi_advisor.core.safety import clamp_dose, generate_warnings
from mdi_advisor.core.validation import (
    validate_dose_calculation_input,
    validate_insulin_profile,
)
from mdi_advisor.logging_config import get_logger

logger = get_logger(__name__)


def calculate_carb_dose(
    profile: InsulinProfile,
    time_of_day: TimeOfDay,
    carbohydrates: float | None,
) -> float:
    """Insulin to cover the carbohydrates; zero for corrections."""
    if time_of_day == TimeOfDay.correction or not carbohydrates:
        return 0.0
    return carbohydrates / profile.ic_ratio.for_time_of_day(time_of_day)


def calculate_correction_insulin(glucose: float, target: float, isf: float) -> float:
    """Insulin to bring glucose back to target; never negative."""
    return max(0.0, (glucose - target) / isf)


def calculate_dose(
    profile: InsulinProfile | Mapping[str, Any],
    params: CalculateDoseParams | Mapping[str, Any],
    *,
    now: int,
    curve: DecayCurve | None = None,
) -> DoseResult:
    """Calculate the recommended dose for one request.

    Args:
        profile: Insulin profile (validated if given as a mapping)
        params: Dose request (validated if given as a mapping)
        now: Reference time for IOB, epoch milliseconds
        curve: IOB decay curve; defaults to ``settings.iob_decay_curve``

    Returns:
        DoseResult with the rounded dose, breakdown and warnings

    Raises:
        InputValidationError: profile or request out of range
    """
    profile = validate_insulin_profile(profile)
    params = validate_dose_calculation_input(params)

    iob = calculate_iob(params.previous_injections, now, profile.dia_hours, curve)
    carbohydrates = (
        0.0 if params.time_of_day == TimeOfDay.correction else params.carbohydrates or 0.0
    )
    carb_dose = calculate_carb_dose(profile, params.time_of_day, carbohydrates)
    correction_dose = calculate_correction_insulin(
        params.glucose, profile.target, profile.isf
    )
    raw_dose = max(0.0, carb_dose + correction_dose - iob)

    outcome = apply_context_adjustments(raw_dose, params.time_of_day, params.context)
    dose = clamp_dose(outcome.adjusted_dose)

    warnings = generate_warnings(
        glucose=params.glucose,
        iob=iob,
        dose=dose,
        carbohydrates=carbohydrates,
        context=params.context,
        raw_dose=raw_dose,
        correction_dose=correction_dose,
        carb_dose=carb_dose,
    )

    breakdown = DoseBreakdown(
        carb_dose=round_decimals(carb_dose, 1),
        correction_dose=round_decimals(correction_dose, 1),
        iob=round_decimals(iob, 1),
        carbohydrates=carbohydrates,
        glucose=params.glucose,
        target_glucose=profile.target,
        raw_dose=round_decimals(raw_dose, 2),
        adjusted_dose=round_decimals(outcome.adjusted_dose, 2),
        safety_reduction=outcome.safety_reduction,
        adjustments=outcome.adjustments,
    )

    logger.debug(
        "Dose calculated",
        time_of_day=params.time_of_day.value,
        raw_dose=breakdown.raw_dose,
        dose=dose,
        warnings=[w.key.value for w in warnings],
    )

    return DoseResult(dose=dose, breakdown=breakdown, warnings=warnings)


def _meal_params(
    time_of_day: TimeOfDay,
    glucose: float,
    carbohydrates: float | None,
    previous_injections: Sequence[Injection | Mapping[str, Any]] | None,
    context: DoseContext | Mapping[str, Any] | None,
) -> dict[str, Any]:
    return {
        "time_of_day": time_of_day,
        "glucose": glucose,
        "carbohydrates": carbohydrates,
        "previous_injections": list(previous_injections or []),
        "context": context,
    }


def calculate_breakfast_dose(
    profile: InsulinProfile | Mapping[str, Any],
    glucose: float,
    carbohydrates: float | None = None,
    previous_injections: Sequence[Injection | Mapping[str, Any]] | None = None,
    context: DoseContext | Mapping[str, Any] | None = None,
    *,
    now: int,
    curve: DecayCurve | None = None,
) -> DoseResult:
    """Dose for breakfast, using the breakfast IC ratio."""
    return calculate_dose(
        profile,
        _meal_params(TimeOfDay.breakfast, glucose, carbohydrates, previous_injections, context),
        now=now,
        curve=curve,
    )


def calculate_lunch_dose(
    profile: InsulinProfile | Mapping[str, Any],
    glucose: float,
    carbohydrates: float | None = None,
    previous_injections: Sequence[Injection | Mapping[str, Any]] | None = None,
    context: DoseContext | Mapping[str, Any] | None = None,
    *,
    now: int,
    curve: DecayCurve | None = None,
) -> DoseResult:
    """Dose for lunch, using the lunch IC ratio."""
    return calculate_dose(
        profile,
        _meal_params(TimeOfDay.lunch, glucose, carbohydrates, previous_injections, context),
        now=now,
        curve=curve,
    )


def calculate_dinner_dose(
    profile: InsulinProfile | Mapping[str, Any],
    glucose: float,
    carbohydrates: float | None = None,
    previous_injections: Sequence[Injection | Mapping[str, Any]] | None = None,
    context: DoseContext | Mapping[str, Any] | None = None,
    *,
    now: int,
    curve: DecayCurve | None = None,
) -> DoseResult:
    """Dose for dinner.

    The nocturnal factor always applies; ``hour_of_day`` defaults to 19:00
    so the night-time warnings can evaluate the dose.
    """
    if context is None:
        context = DoseContext()
    elif not isinstance(context, DoseContext):
        context = DoseContext.model_validate(context)
    if context.hour_of_day is None:
        context = context.model_copy(update={"hour_of_day": DEFAULT_DINNER_HOUR})

    return calculate_dose(
        profile,
        _meal_params(TimeOfDay.dinner, glucose, carbohydrates, previous_injections, context),
        now=now,
        curve=curve,
    )


def calculate_correction_dose(
    profile: InsulinProfile | Mapping[str, Any],
    glucose: float,
    previous_injections: Sequence[Injection | Mapping[str, Any]] | None = None,
    context: DoseContext | Mapping[str, Any] | None = None,
    *,
    now: int,
    curve: DecayCurve | None = None,
) -> DoseResult:
    """Correction without a meal; the between-meals 50% factor applies."""
    return calculate_dose(
        profile,
        _meal_params(TimeOfDay.correction, glucose, 0, previous_injections, context),
        now=now,
        curve=curve,
    )
