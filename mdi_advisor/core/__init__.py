"""Dose engine core: value objects and enums.

Calculators live in their own modules (``dose``, ``iob``, ``pre_sleep``,
``correction_guard``, ``patterns``, ``tiering``) and read configuration, so
they are not imported here.
"""

from mdi_advisor.core.enums import (
    DayPeriod,
    DecayCurve,
    Language,
    MealType,
    MessageKey,
    PatternKind,
    PreSleepAction,
    RecommendationTier,
    TimeOfDay,
)
from mdi_advisor.core.models import (
    BetweenMealCorrectionResult,
    CalculateDoseParams,
    DayRecord,
    DoseAdjustments,
    DoseBreakdown,
    DoseContext,
    DoseResult,
    DoseSplit,
    GlucoseMeasurement,
    ICRatio,
    Injection,
    InsulinProfile,
    Meal,
    Notice,
    PatternFinding,
    PatternThresholds,
    PreSleepEvaluation,
    TieringThresholds,
    WeeklyRecord,
    WeeklyValidationResult,
)

__all__ = [
    "BetweenMealCorrectionResult",
    "CalculateDoseParams",
    "DayPeriod",
    "DayRecord",
    "DecayCurve",
    "DoseAdjustments",
    "DoseBreakdown",
    "DoseContext",
    "DoseResult",
    "DoseSplit",
    "GlucoseMeasurement",
    "ICRatio",
    "Injection",
    "InsulinProfile",
    "Language",
    "Meal",
    "MealType",
    "MessageKey",
    "Notice",
    "PatternFinding",
    "PatternKind",
    "PatternThresholds",
    "PreSleepAction",
    "PreSleepEvaluation",
    "RecommendationTier",
    "TieringThresholds",
    "TimeOfDay",
    "WeeklyRecord",
    "WeeklyValidationResult",
]
