"""Weekly validation tiering.

Summarises how well the current dosing parameters performed over a week and
maps the result to a recommendation tier. Hypoglycemia rates are checked
before glycemic control: a week with many lows is never "optimize".
"""

from typing import Any

from mdi_advisor.core.constants import (
    DAY_IN_RANGE_SHARE,
    HIGH_GLUCOSE_THRESHOLD_MGDL,
    LOW_GLUCOSE_THRESHOLD_MGDL,
)
from mdi_advisor.core.enums import MessageKey, RecommendationTier
from mdi_advisor.core.models import (
    Notice,
    TieringThresholds,
    WeeklyRecord,
    WeeklyValidationResult,
)
from mdi_advisor.core.rounding import round_decimals
from mdi_advisor.core.validation import validate_weekly_record
from mdi_advisor.logging_config import get_logger

logger = get_logger(__name__)

_TIER_MESSAGES: dict[RecommendationTier, MessageKey] = {
    RecommendationTier.urgent_adjustment: MessageKey.validation_urgent_adjustment,
    RecommendationTier.caution: MessageKey.validation_caution,
    RecommendationTier.review_poor_control: MessageKey.validation_review_poor_control,
    RecommendationTier.review_poor_control_hyper: MessageKey.validation_review_poor_control_hyper,
    RecommendationTier.optimize: MessageKey.validation_optimize,
    RecommendationTier.continue_current: MessageKey.validation_continue,
    RecommendationTier.continue_monitoring: MessageKey.validation_continue_monitoring,
    RecommendationTier.model_working_well: MessageKey.validation_model_working,
    RecommendationTier.excellent: MessageKey.validation_excellent,
}


def _in_range(value: float) -> bool:
    return LOW_GLUCOSE_THRESHOLD_MGDL <= value <= HIGH_GLUCOSE_THRESHOLD_MGDL


def _percent(rate: float) -> float:
    return round_decimals(rate * 100, 1)


def classify_tier(
    day_in_range: float,
    hypo_rate: float,
    hyper_rate: float,
    thresholds: TieringThresholds | None = None,
) -> RecommendationTier:
    """Pick the recommendation tier, most severe condition first.

    Args:
        day_in_range: Share of days considered in range (0-1)
        hypo_rate: Share of measurements below 70 mg/dL (0-1)
        hyper_rate: Share of measurements above 180 mg/dL (0-1)
        thresholds: Tier cutoffs; defaults from ``core.constants``
    """
    t = thresholds or TieringThresholds()

    if hypo_rate > t.urgent_hypo_rate:
        return RecommendationTier.urgent_adjustment
    if hypo_rate > t.caution_hypo_rate:
        return RecommendationTier.caution
    if day_in_range < t.poor_range:
        if hyper_rate > t.poor_hyper_rate:
            return RecommendationTier.review_poor_control_hyper
        return RecommendationTier.review_poor_control
    if day_in_range < t.moderate_range:
        if hyper_rate > t.moderate_hyper_rate:
            return RecommendationTier.optimize
        return RecommendationTier.continue_current
    if hypo_rate < t.good_hypo_rate:
        if hypo_rate == 0 and hyper_rate < t.excellent_hyper_rate:
            return RecommendationTier.excellent
        return RecommendationTier.model_working_well
    return RecommendationTier.continue_monitoring


def generate_adjustment_recommendation(
    day_in_range: float,
    hypo_rate: float,
    hyper_rate: float,
    thresholds: TieringThresholds | None = None,
) -> Notice:
    """Recommendation notice for the tier, with rates as percentages."""
    tier = classify_tier(day_in_range, hypo_rate, hyper_rate, thresholds)
    return Notice(
        key=_TIER_MESSAGES[tier],
        params={
            "percentage_range": _percent(day_in_range),
            "hypo_rate": _percent(hypo_rate),
            "hyper_rate": _percent(hyper_rate),
        },
    )


def validate_weekly_model(
    weekly_record: WeeklyRecord | list[Any],
    thresholds: TieringThresholds | None = None,
) -> WeeklyValidationResult:
    """Compute weekly control metrics and the resulting recommendation.

    A day counts as "in range" when at least 70% of its analysed values are
    within 70-180 mg/dL. The analysed value is the 3-hour outcome when one
    was recorded.

    Raises:
        InputValidationError: malformed weekly record
    """
    record = validate_weekly_record(weekly_record)

    days_in_range = 0
    total = in_range = hypos = hypers = 0
    for day in record:
        values = [m.outcome_glucose for m in day.measurements]
        day_hits = sum(1 for v in values if _in_range(v))
        if day_hits / len(values) >= DAY_IN_RANGE_SHARE:
            days_in_range += 1

        total += len(values)
        in_range += day_hits
        hypos += sum(1 for v in values if v < LOW_GLUCOSE_THRESHOLD_MGDL)
        hypers += sum(1 for v in values if v > HIGH_GLUCOSE_THRESHOLD_MGDL)

    # Tiers are decided on exact ratios; only the reported metrics are rounded.
    day_in_range = days_in_range / len(record)
    hypo_rate = hypos / total
    hyper_rate = hypers / total

    tier = classify_tier(day_in_range, hypo_rate, hyper_rate, thresholds)
    recommendation = generate_adjustment_recommendation(
        day_in_range, hypo_rate, hyper_rate, thresholds
    )

    logger.info(
        "Weekly model validated",
        days=len(record),
        samples=total,
        day_in_range=round_decimals(day_in_range, 2),
        hypo_rate=round_decimals(hypo_rate, 2),
        hyper_rate=round_decimals(hyper_rate, 2),
        tier=tier.value,
    )

    return WeeklyValidationResult(
        day_in_range_percentage=round_decimals(day_in_range, 2),
        time_in_range=round_decimals(in_range / total, 2),
        hypo_rate=round_decimals(hypo_rate, 2),
        hyper_rate=round_decimals(hyper_rate, 2),
        tier=tier,
        recommendation=recommendation,
    )
