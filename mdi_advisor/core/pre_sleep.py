"""Bedtime evaluation.

Projects glucose forward by the remaining insulin and decides between a
snack, a reduced correction or going to sleep. Corrections at bedtime are
deliberately damped (70% of the full correction toward a raised target of
140 mg/dL) because nocturnal hypoglycemia goes unnoticed.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from mdi_advisor.core.constants import (
    PRE_SLEEP_CORRECTION_FACTOR,
    PRE_SLEEP_HIGH_MGDL,
    PRE_SLEEP_LOW_MGDL,
    PRE_SLEEP_SAFE_TARGET_MGDL,
    PRE_SLEEP_SNACK_CARBS_G,
    PRE_SLEEP_VERY_HIGH_MGDL,
)
from mdi_advisor.core.enums import DecayCurve, MessageKey, PreSleepAction
from mdi_advisor.core.iob import calculate_iob
from mdi_advisor.core.models import Injection, InsulinProfile, Notice, PreSleepEvaluation
from mdi_advisor.core.rounding import round_decimals, round_dose
from mdi_advisor.core.validation import validate_glucose, validate_insulin_profile
from mdi_advisor.logging_config import get_logger

logger = get_logger(__name__)


def evaluate_pre_sleep(
    glucose: float,
    iob: float,
    isf: float,
    target: float,
) -> PreSleepEvaluation:
    """Evaluate what to do before going to sleep.

    Args:
        glucose: Current glucose (mg/dL)
        iob: Insulin on board (units)
        isf: Insulin sensitivity factor (mg/dL per unit)
        target: Daytime target glucose (mg/dL)

    Returns:
        PreSleepEvaluation with exactly one action:

        - ``eat_snack`` when glucose, or glucose projected after the
          remaining insulin acts, is below 100 mg/dL
        - ``small_correction`` at 180 mg/dL and above when the damped
          correction is at least one pen increment
        - ``sleep`` otherwise (with a 3 AM recheck when glucose is high but
          the correction rounds to zero)

    Raises:
        InputValidationError: glucose outside 20-600 mg/dL
    """
    glucose = validate_glucose(glucose)
    projected = glucose - iob * isf
    remaining_iob = round_decimals(iob, 1)
    projected_glucose = round_decimals(projected, 0)

    if projected < PRE_SLEEP_LOW_MGDL or glucose < PRE_SLEEP_LOW_MGDL:
        evaluation = PreSleepEvaluation(
            action=PreSleepAction.eat_snack,
            remaining_iob=remaining_iob,
            projected_glucose=projected_glucose,
            reason=Notice(
                key=MessageKey.pre_sleep_risk_nocturnal_hypo,
                params={"carbohydrates": PRE_SLEEP_SNACK_CARBS_G},
            ),
            carbohydrates=PRE_SLEEP_SNACK_CARBS_G,
        )
    elif glucose >= PRE_SLEEP_HIGH_MGDL:
        bedtime_target = max(target, PRE_SLEEP_SAFE_TARGET_MGDL)
        full_correction = max(0.0, (glucose - bedtime_target) / isf - iob)
        correction = round_dose(full_correction * PRE_SLEEP_CORRECTION_FACTOR)

        if correction > 0:
            very_high = glucose > PRE_SLEEP_VERY_HIGH_MGDL
            evaluation = PreSleepEvaluation(
                action=PreSleepAction.small_correction,
                remaining_iob=remaining_iob,
                projected_glucose=projected_glucose,
                reason=Notice(
                    key=(
                        MessageKey.pre_sleep_very_high_glucose
                        if very_high
                        else MessageKey.pre_sleep_moderate_correction
                    ),
                    params={"dose": correction},
                ),
                correction_dose=correction,
                recheck_at_3am=not very_high,
            )
        else:
            evaluation = PreSleepEvaluation(
                action=PreSleepAction.sleep,
                remaining_iob=remaining_iob,
                projected_glucose=projected_glucose,
                reason=Notice(key=MessageKey.pre_sleep_monitor_trend),
                recheck_at_3am=True,
            )
    else:
        evaluation = PreSleepEvaluation(
            action=PreSleepAction.sleep,
            remaining_iob=remaining_iob,
            projected_glucose=projected_glucose,
            reason=Notice(key=MessageKey.pre_sleep_safe_to_sleep),
        )

    logger.debug(
        "Pre-sleep evaluated",
        glucose=glucose,
        iob=remaining_iob,
        projected_glucose=projected_glucose,
        action=evaluation.action.value,
    )
    return evaluation


def evaluate_pre_sleep_for_profile(
    glucose: float,
    previous_injections: Sequence[Injection | Mapping[str, Any]],
    profile: InsulinProfile | Mapping[str, Any],
    *,
    now: int,
    curve: DecayCurve | None = None,
) -> PreSleepEvaluation:
    """Compute IOB from the injection history, then evaluate bedtime.

    Raises:
        InputValidationError: glucose, injections or profile invalid
    """
    glucose = validate_glucose(glucose)
    profile = validate_insulin_profile(profile)
    iob = calculate_iob(previous_injections, now, profile.dia_hours, curve)
    return evaluate_pre_sleep(glucose, iob, profile.isf, profile.target)
