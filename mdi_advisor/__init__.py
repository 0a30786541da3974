"""MDI insulin dose advisory engine.

Deterministic dose, IOB and retrospective-analysis calculations for people
on multiple daily injections. Every calculation takes an explicit ``now``
(epoch milliseconds) and returns immutable pydantic models whose messages
are ``Notice`` codes; render them with ``mdi_advisor.i18n``.
"""

from mdi_advisor.core.cob import calculate_cob, percentage_absorbed
from mdi_advisor.core.correction_guard import (
    calculate_between_meal_correction,
    calculate_between_meal_correction_for_profile,
    check_3_hour_rule,
)
from mdi_advisor.core.dose import (
    calculate_breakfast_dose,
    calculate_correction_dose,
    calculate_dinner_dose,
    calculate_dose,
    calculate_lunch_dose,
)
from mdi_advisor.core.iob import calculate_iob, calculate_remaining_iob
from mdi_advisor.core.patterns import PatternReport, analyze_patterns
from mdi_advisor.core.pre_sleep import evaluate_pre_sleep, evaluate_pre_sleep_for_profile
from mdi_advisor.core.rounding import round_dose
from mdi_advisor.core.tiering import (
    classify_tier,
    generate_adjustment_recommendation,
    validate_weekly_model,
)
from mdi_advisor.core.validation import (
    InputValidationError,
    validate_dose_calculation_input,
    validate_insulin_profile,
    validate_weekly_record,
)
from mdi_advisor.i18n import configure

__version__ = "0.1.0"

__all__ = [
    "InputValidationError",
    "PatternReport",
    "analyze_patterns",
    "calculate_between_meal_correction",
    "calculate_between_meal_correction_for_profile",
    "calculate_breakfast_dose",
    "calculate_cob",
    "calculate_correction_dose",
    "calculate_dinner_dose",
    "calculate_dose",
    "calculate_iob",
    "calculate_lunch_dose",
    "calculate_remaining_iob",
    "check_3_hour_rule",
    "classify_tier",
    "configure",
    "evaluate_pre_sleep",
    "evaluate_pre_sleep_for_profile",
    "generate_adjustment_recommendation",
    "percentage_absorbed",
    "round_dose",
    "validate_dose_calculation_input",
    "validate_insulin_profile",
    "validate_weekly_model",
    "validate_weekly_record",
]
