"""Carbs on Board (CoB).

Linear absorption model: a meal's carbohydrates are absorbed evenly over a
duration that depends on how fast the meal is digested (3-6 hours).
"""

from collections.abc import Sequence

from mdi_advisor.core.constants import ABSORPTION_HOURS, MS_PER_HOUR
from mdi_advisor.core.enums import MealType
from mdi_advisor.core.models import Meal


def determine_absorption_duration(meal_type: MealType) -> float:
    """Absorption duration in hours for a meal type."""
    return ABSORPTION_HOURS[MealType(meal_type).value]


def calculate_remaining_cob(
    carbohydrates: float,
    hours_since: float,
    absorption_duration: float,
) -> float:
    """Grams still to be absorbed from a single meal."""
    if hours_since < 0 or hours_since >= absorption_duration:
        return 0.0
    absorbed_fraction = hours_since / absorption_duration
    return max(0.0, carbohydrates * (1 - absorbed_fraction))


def calculate_cob(meals: Sequence[Meal], now: int) -> int:
    """Pending carbohydrates across all meals, rounded to whole grams."""
    total = 0.0
    for meal in meals:
        hours_since = (now - meal.timestamp) / MS_PER_HOUR
        total += calculate_remaining_cob(
            meal.carbohydrates,
            hours_since,
            determine_absorption_duration(meal.type),
        )
    return round(total)


def percentage_absorbed(meal: Meal, now: int) -> int:
    """Share of a meal already absorbed, 0-100."""
    hours_since = (now - meal.timestamp) / MS_PER_HOUR
    duration = determine_absorption_duration(meal.type)

    if hours_since >= duration:
        return 100
    if hours_since <= 0:
        return 0
    return round(hours_since / duration * 100)
