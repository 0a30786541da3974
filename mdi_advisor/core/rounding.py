"""Numeric helpers shared by the dose calculators.

Rounding is half-up (``Decimal``), not Python's banker's rounding, so a raw
dose of 2.25 U becomes 2.5 U as it would on a pen dial.
"""

from decimal import ROUND_HALF_UP, Decimal

from mdi_advisor.core.constants import DOSE_INCREMENT_UNITS


def round_dose(value: float, increment: float = DOSE_INCREMENT_UNITS) -> float:
    """Round an insulin dose to the nearest pen increment.

    Examples:
        round_dose(3.7) -> 3.5
        round_dose(3.8) -> 4.0
    """
    if increment <= 0:
        msg = "increment must be positive"
        raise ValueError(msg)
    steps = Decimal(str(value)) / Decimal(str(increment))
    rounded = steps.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(rounded * Decimal(str(increment)))


def round_decimals(value: float, decimals: int = 1) -> float:
    """Round half-up to ``decimals`` places."""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp_value(value: float, minimum: float, maximum: float) -> float:
    """Limit ``value`` to ``[minimum, maximum]``."""
    return max(minimum, min(maximum, value))
