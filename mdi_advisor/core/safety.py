"""Safety clamp, rounding and warning generation.

Warnings are returned as ``Notice`` codes. This module never builds
user-facing text; see ``mdi_advisor.i18n`` for rendering.
"""

from mdi_advisor.core.adjustments import is_night_hour
from mdi_advisor.core.constants import (
    HIGH_DOSE_THRESHOLD_UNITS,
    KETONE_CHECK_GLUCOSE_MGDL,
    LOW_CORRECTION_EFFECT_RATIO,
    LOW_GLUCOSE_THRESHOLD_MGDL,
    NOCTURNAL_DOSE_CEILING_UNITS,
    REDUCED_DOSE_RATIO,
    STACKING_GLUCOSE_MGDL,
    STACKING_IOB_UNITS,
)
from mdi_advisor.core.enums import MessageKey
from mdi_advisor.core.models import DoseContext, Notice
from mdi_advisor.core.rounding import round_dose


def clamp_dose(adjusted_dose: float) -> float:
    """Round to the nearest pen increment and never go below zero."""
    return max(0.0, round_dose(adjusted_dose))


def _little_correction_effect(
    dose: float, correction_dose: float | None, carb_dose: float
) -> bool:
    if correction_dose is None:
        return True
    delivered = max(0.0, dose - carb_dose)
    return delivered < correction_dose * LOW_CORRECTION_EFFECT_RATIO


def generate_warnings(
    glucose: float,
    iob: float,
    dose: float,
    carbohydrates: float,
    context: DoseContext | None = None,
    raw_dose: float | None = None,
    *,
    correction_dose: float | None = None,
    carb_dose: float = 0.0,
) -> list[Notice]:
    """Build the warnings for a calculated dose.

    Args:
        glucose: Current glucose (mg/dL)
        iob: Insulin on board (units)
        dose: Final rounded dose (units)
        carbohydrates: Carbohydrates about to be eaten (g)
        context: Situational flags
        raw_dose: Dose before context adjustment, for the reduction notice
        correction_dose: Correction insulin the glucose reading calls for.
            When given, the ketone warning only fires if the part of the dose
            left after covering carbohydrates is under half of it.
        carb_dose: Insulin covering the carbohydrates (units)

    Returns:
        Warnings in a stable order: glucose safety, dose size, context
    """
    warnings: list[Notice] = []

    if glucose < LOW_GLUCOSE_THRESHOLD_MGDL:
        warnings.append(Notice(key=MessageKey.hypoglycemia))

    if glucose < STACKING_GLUCOSE_MGDL and iob > STACKING_IOB_UNITS:
        warnings.append(Notice(key=MessageKey.high_iob_low_glucose))

    if glucose > KETONE_CHECK_GLUCOSE_MGDL and _little_correction_effect(
        dose, correction_dose, carb_dose
    ):
        warnings.append(Notice(key=MessageKey.very_high_glucose))

    if dose == 0 and carbohydrates > 0:
        warnings.append(Notice(key=MessageKey.carbs_without_insulin))

    hour = context.hour_of_day if context else None
    if is_night_hour(hour) and dose > NOCTURNAL_DOSE_CEILING_UNITS:
        warnings.append(
            Notice(
                key=MessageKey.high_nocturnal_dose,
                params={"ceiling": NOCTURNAL_DOSE_CEILING_UNITS},
            )
        )

    if dose > HIGH_DOSE_THRESHOLD_UNITS:
        warnings.append(
            Notice(
                key=MessageKey.very_high_dose,
                params={"threshold": HIGH_DOSE_THRESHOLD_UNITS},
            )
        )

    if context is not None:
        flags = (
            (context.recent_exercise, MessageKey.recent_exercise),
            (context.alcohol, MessageKey.alcohol),
            (context.high_fat_meal, MessageKey.high_fat_meal),
            (context.illness, MessageKey.illness),
            (context.stress, MessageKey.stress),
            (context.menstruation, MessageKey.menstruation),
        )
        warnings.extend(Notice(key=key) for enabled, key in flags if enabled)

    if raw_dose and dose > 0 and dose / raw_dose < REDUCED_DOSE_RATIO:
        warnings.append(
            Notice(
                key=MessageKey.dose_reduced_by_factors,
                params={"reduction": round((1 - dose / raw_dose) * 100)},
            )
        )

    return warnings
