"""Insulin on Board (IoB) decay model.

Sums the insulin still active from previous injections. Each injection
decays from 1.0 at delivery to 0.0 at DIA along one of the curves in
``DecayCurve``; overlapping injections add up linearly.

The reference time is always an explicit ``now`` (epoch milliseconds) so
that every calculation is reproducible.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from mdi_advisor.config import settings
from mdi_advisor.core.constants import (
    INSULIN_PEAK_HOURS,
    MIN_HOURS_BETWEEN_DOSES,
    MS_PER_HOUR,
    PEAK_ABSORBED_FRACTION,
)
from mdi_advisor.core.enums import DecayCurve
from mdi_advisor.core.models import Injection
from mdi_advisor.core.validation import validate_injections
from mdi_advisor.logging_config import get_logger

logger = get_logger(__name__)


def linear_remaining(elapsed_hours: float, dia_hours: float) -> float:
    """Fraction remaining with a straight-line decay: 1 - t/DIA."""
    if elapsed_hours <= 0:
        return 1.0
    if elapsed_hours >= dia_hours:
        return 0.0
    return 1.0 - elapsed_hours / dia_hours


def parabolic_remaining(elapsed_hours: float, dia_hours: float) -> float:
    """Fraction remaining with parabolic decay: 1 - (t/DIA)^2.

    Slow at first, steeper toward the end of the action window.
    """
    if elapsed_hours <= 0:
        return 1.0
    if elapsed_hours >= dia_hours:
        return 0.0
    t_ratio = elapsed_hours / dia_hours
    return max(0.0, min(1.0, 1.0 - (t_ratio * t_ratio)))


def bilinear_remaining(elapsed_hours: float, dia_hours: float) -> float:
    """Walsh-inspired bilinear curve.

    - Slow initial absorption: only 20% lost by the 1-hour peak
    - Remaining 80% lost linearly between the peak and DIA
    """
    if elapsed_hours <= 0:
        return 1.0
    if elapsed_hours >= dia_hours:
        return 0.0

    peak_time = min(INSULIN_PEAK_HOURS, dia_hours / 2)
    peak_remaining = 1.0 - PEAK_ABSORBED_FRACTION

    if elapsed_hours < peak_time:
        fraction = 1.0 - PEAK_ABSORBED_FRACTION * (elapsed_hours / peak_time)
    else:
        fraction = peak_remaining * (dia_hours - elapsed_hours) / (dia_hours - peak_time)

    return max(0.0, min(1.0, fraction))


_CURVES: dict[DecayCurve, Callable[[float, float], float]] = {
    DecayCurve.linear: linear_remaining,
    DecayCurve.parabolic: parabolic_remaining,
    DecayCurve.bilinear: bilinear_remaining,
}


def remaining_fraction(
    elapsed_hours: float,
    dia_hours: float,
    curve: DecayCurve | None = None,
) -> float:
    """Fraction of a dose still active after ``elapsed_hours``.

    Args:
        elapsed_hours: Hours since the injection
        dia_hours: Duration of insulin action
        curve: Decay curve; defaults to ``settings.iob_decay_curve``

    Returns:
        Fraction in [0.0, 1.0]
    """
    return _CURVES[curve or settings.iob_decay_curve](elapsed_hours, dia_hours)


def calculate_remaining_iob(
    units: float,
    hours_since: float,
    dia_hours: float,
    curve: DecayCurve | None = None,
) -> float:
    """Insulin left from a single injection.

    Injections in the future or at/after DIA contribute nothing.
    """
    if hours_since < 0 or hours_since >= dia_hours:
        return 0.0
    return units * remaining_fraction(hours_since, dia_hours, curve)


def calculate_iob(
    injections: Sequence[Injection | Mapping[str, Any]],
    now: int,
    dia_hours: float,
    curve: DecayCurve | None = None,
) -> float:
    """Total insulin on board at ``now``.

    Args:
        injections: Previous injections (any order), models or mappings
        now: Reference time in epoch milliseconds
        dia_hours: Duration of insulin action
        curve: Decay curve; defaults to ``settings.iob_decay_curve``

    Returns:
        Total remaining insulin in units

    Raises:
        InputValidationError: an injection timestamp or dose out of range
    """
    injections = validate_injections(injections)
    total = 0.0
    for injection in injections:
        hours_since = (now - injection.timestamp) / MS_PER_HOUR
        total += calculate_remaining_iob(injection.units, hours_since, dia_hours, curve)

    logger.debug(
        "IOB calculated",
        injections=len(injections),
        dia_hours=dia_hours,
        iob=round(total, 3),
    )
    return total


def hours_since_last_injection(
    injections: Sequence[Injection | Mapping[str, Any]],
    now: int,
) -> float | None:
    """Hours elapsed since the most recent injection, or None without history."""
    injections = validate_injections(injections)
    if not injections:
        return None
    last = max(injection.timestamp for injection in injections)
    return (now - last) / MS_PER_HOUR


def is_safe_for_new_dose(
    injections: Sequence[Injection | Mapping[str, Any]],
    now: int,
    minimum_hours: float = MIN_HOURS_BETWEEN_DOSES,
) -> bool:
    """Whether at least ``minimum_hours`` passed since the most recent injection."""
    hours_since = hours_since_last_injection(injections, now)
    if hours_since is None:
        return True
    return hours_since >= minimum_hours
