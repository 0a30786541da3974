"""Between-meal correction guard.

Corrections outside mealtimes are only offered when the previous dose has
had three hours to act, and then only at half the calculated amount.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from mdi_advisor.core.constants import (
    BETWEEN_MEALS_FACTOR,
    MIN_CORRECTION_UNITS,
    MIN_HOURS_BETWEEN_DOSES,
)
from mdi_advisor.core.enums import DecayCurve, MessageKey
from mdi_advisor.core.iob import (
    calculate_iob,
    hours_since_last_injection,
    is_safe_for_new_dose,
)
from mdi_advisor.core.models import (
    BetweenMealCorrectionResult,
    Injection,
    InsulinProfile,
    Notice,
)
from mdi_advisor.core.rounding import round_decimals, round_dose
from mdi_advisor.core.validation import (
    validate_glucose,
    validate_injections,
    validate_insulin_profile,
)
from mdi_advisor.logging_config import get_logger

logger = get_logger(__name__)


def check_3_hour_rule(
    injections: Sequence[Injection | Mapping[str, Any]],
    now: int,
) -> bool:
    """True when no injection happened in the last three hours."""
    return is_safe_for_new_dose(injections, now, MIN_HOURS_BETWEEN_DOSES)


def calculate_between_meal_correction(
    glucose: float,
    target: float,
    previous_injections: Sequence[Injection | Mapping[str, Any]],
    dia_hours: float,
    isf: float,
    *,
    now: int,
    curve: DecayCurve | None = None,
) -> BetweenMealCorrectionResult:
    """Conservative correction for high glucose between meals.

    Args:
        glucose: Current glucose (mg/dL)
        target: Target glucose (mg/dL)
        previous_injections: Injection history
        dia_hours: Duration of insulin action
        isf: Insulin sensitivity factor
        now: Reference time, epoch milliseconds
        curve: IOB decay curve; defaults to ``settings.iob_decay_curve``

    Returns:
        BetweenMealCorrectionResult. The dose is zero when the last injection
        is too recent or when active insulin already covers the correction.

    Raises:
        InputValidationError: glucose or injection history invalid
    """
    glucose = validate_glucose(glucose)
    previous_injections = validate_injections(previous_injections)
    hours_since = hours_since_last_injection(previous_injections, now)
    elapsed = round_decimals(hours_since, 1) if hours_since is not None else None

    if not check_3_hour_rule(previous_injections, now):
        logger.info(
            "Correction refused, last injection too recent",
            hours_since_last_injection=elapsed,
        )
        return BetweenMealCorrectionResult(
            dose=0,
            reason=Notice(key=MessageKey.correction_wait_3_hours, params={"hours": elapsed}),
            hours_since_last_injection=elapsed,
        )

    iob = calculate_iob(previous_injections, now, dia_hours, curve)
    correction = max(0.0, (glucose - target) / isf)
    uncovered = correction - iob

    if uncovered <= 0:
        return BetweenMealCorrectionResult(
            dose=0,
            reason=Notice(key=MessageKey.correction_not_needed),
            iob=round_decimals(iob, 1),
            hours_since_last_injection=elapsed,
        )

    dose = max(MIN_CORRECTION_UNITS, round_dose(uncovered * BETWEEN_MEALS_FACTOR))

    logger.debug(
        "Between-meal correction calculated",
        glucose=glucose,
        iob=round(iob, 3),
        dose=dose,
    )

    return BetweenMealCorrectionResult(
        dose=dose,
        reason=Notice(
            key=MessageKey.correction_conservative,
            params={"iob": round_decimals(iob, 1)},
        ),
        warnings=[Notice(key=MessageKey.correction_check_glucose)],
        iob=round_decimals(iob, 1),
        hours_since_last_injection=elapsed,
    )


def calculate_between_meal_correction_for_profile(
    glucose: float,
    previous_injections: Sequence[Injection | Mapping[str, Any]],
    profile: InsulinProfile | Mapping[str, Any],
    *,
    now: int,
    curve: DecayCurve | None = None,
) -> BetweenMealCorrectionResult:
    """Same as ``calculate_between_meal_correction`` with values from a profile."""
    profile = validate_insulin_profile(profile)
    return calculate_between_meal_correction(
        glucose,
        profile.target,
        previous_injections,
        profile.dia_hours,
        profile.isf,
        now=now,
        curve=curve,
    )
