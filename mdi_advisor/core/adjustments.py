"""Context adjustment module.

Scales a raw dose by situational factors. Factors are multiplied in a fixed
order so combined contexts are reproducible:

1. between-meals correction (x0.5)
2. recent exercise (x0.8)
3. illness (x1.2)
4. stress (x1.1)
5. menstruation (x1.1)
6. nocturnal / evening (x0.95)

Alcohol never changes the dose (warning only). A high-fat meal keeps the
total and records a 60/40 delivery split instead.
"""

from dataclasses import dataclass

from mdi_advisor.core.constants import (
    BETWEEN_MEALS_FACTOR,
    DINNER_START_HOUR,
    EXERCISE_FACTOR,
    HIGH_FAT_IMMEDIATE_SHARE,
    ILLNESS_FACTOR,
    MENSTRUATION_FACTOR,
    NIGHT_END_HOUR,
    NIGHT_START_HOUR,
    NOCTURNAL_FACTOR,
    STRESS_FACTOR,
)
from mdi_advisor.core.enums import TimeOfDay
from mdi_advisor.core.models import DoseAdjustments, DoseContext, DoseSplit
from mdi_advisor.core.rounding import round_decimals, round_dose


@dataclass(frozen=True)
class AdjustmentOutcome:
    """Adjusted dose plus an audit trail of what changed it."""

    adjusted_dose: float
    adjustments: DoseAdjustments
    safety_reduction: float


def _percent(factor: float) -> int:
    return round((factor - 1.0) * 100)


def is_night_hour(hour: int | None) -> bool:
    """Night window, 22:00 through 06:59."""
    if hour is None:
        return False
    return hour >= NIGHT_START_HOUR or hour <= NIGHT_END_HOUR


def is_nocturnal(time_of_day: TimeOfDay, context: DoseContext | None) -> bool:
    """Dinner doses and any dose from 19:00 through 06:59 get the nocturnal factor."""
    if time_of_day == TimeOfDay.dinner:
        return True
    hour = context.hour_of_day if context else None
    if hour is None:
        return False
    return hour >= DINNER_START_HOUR or is_night_hour(hour)


def apply_context_adjustments(
    raw_dose: float,
    time_of_day: TimeOfDay,
    context: DoseContext | None,
) -> AdjustmentOutcome:
    """Apply the context factors to ``raw_dose``.

    Args:
        raw_dose: Dose before adjustment (units, >= 0)
        time_of_day: Request slot; ``correction`` triggers the between-meals factor
        context: Situational flags, or None for no adjustment

    Returns:
        AdjustmentOutcome with the adjusted dose, the percentages applied and
        ``safety_reduction = raw_dose - adjusted_dose`` (negative for increases)
    """
    ctx = context or DoseContext()
    factors: list[tuple[str, float]] = []

    if time_of_day == TimeOfDay.correction:
        factors.append(("between_meals", BETWEEN_MEALS_FACTOR))
    if ctx.recent_exercise:
        factors.append(("exercise", EXERCISE_FACTOR))
    if ctx.illness:
        factors.append(("illness", ILLNESS_FACTOR))
    if ctx.stress:
        factors.append(("stress", STRESS_FACTOR))
    if ctx.menstruation:
        factors.append(("menstruation", MENSTRUATION_FACTOR))
    if is_nocturnal(time_of_day, context):
        factors.append(("nocturnal", NOCTURNAL_FACTOR))

    adjusted = raw_dose
    for _, factor in factors:
        adjusted *= factor

    split = None
    if ctx.high_fat_meal:
        total = max(0.0, round_dose(adjusted))
        immediate = round_dose(total * HIGH_FAT_IMMEDIATE_SHARE)
        split = DoseSplit(
            immediate_units=immediate,
            delayed_units=round_decimals(total - immediate, 1),
        )

    adjustments = DoseAdjustments(
        **{name: _percent(factor) for name, factor in factors},
        split=split,
    )

    return AdjustmentOutcome(
        adjusted_dose=adjusted,
        adjustments=adjustments,
        safety_reduction=round_decimals(raw_dose - adjusted, 2),
    )
