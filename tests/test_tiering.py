"""Tests for weekly validation tiering."""

import pytest

from mdi_advisor.core.enums import MessageKey, RecommendationTier
from mdi_advisor.core.models import TieringThresholds
from mdi_advisor.core.tiering import (
    classify_tier,
    generate_adjustment_recommendation,
    validate_weekly_model,
)
from mdi_advisor.core.validation import InputValidationError

DAY0 = 1_709_251_200_000
DAY_MS = 86_400_000
HOUR_MS = 3_600_000


def _record(days: list[list[float]], later: list[list[float | None]] | None = None) -> list[dict]:
    """Weekly record in wire form; one list of glucose values per day."""
    record = []
    for index, values in enumerate(days):
        measurements = []
        for position, glucose in enumerate(values):
            measurement = {
                "timestamp": DAY0 + index * DAY_MS + (8 + position) * HOUR_MS,
                "glucose": glucose,
            }
            if later and later[index][position] is not None:
                measurement["glucose3hLater"] = later[index][position]
            measurements.append(measurement)
        record.append({"date": f"2024-03-{index + 1:02d}", "measurements": measurements})
    return record


class TestClassifyTier:
    """Tests for the tier decision order."""

    @pytest.mark.parametrize(
        ("day_in_range", "hypo", "hyper", "tier"),
        [
            (0.9, 0.15, 0.0, RecommendationTier.urgent_adjustment),
            (0.9, 0.07, 0.0, RecommendationTier.caution),
            (0.4, 0.0, 0.5, RecommendationTier.review_poor_control_hyper),
            (0.4, 0.0, 0.2, RecommendationTier.review_poor_control),
            (0.6, 0.0, 0.35, RecommendationTier.optimize),
            (0.6, 0.0, 0.2, RecommendationTier.continue_current),
            (0.9, 0.0, 0.05, RecommendationTier.excellent),
            (0.9, 0.0, 0.15, RecommendationTier.model_working_well),
            (0.9, 0.02, 0.05, RecommendationTier.model_working_well),
            (0.9, 0.05, 0.0, RecommendationTier.continue_monitoring),
        ],
    )
    def test_tiers(self, day_in_range, hypo, hyper, tier):
        assert classify_tier(day_in_range, hypo, hyper) == tier

    def test_hypoglycemia_outranks_poor_control(self):
        assert classify_tier(0.1, 0.2, 0.6) == RecommendationTier.urgent_adjustment

    def test_custom_thresholds(self):
        strict = TieringThresholds(urgent_hypo_rate=0.03)
        assert classify_tier(0.9, 0.04, 0.0, strict) == RecommendationTier.urgent_adjustment


class TestRecommendation:
    def test_percent_params(self):
        notice = generate_adjustment_recommendation(0.6, 0.0, 0.35)

        assert notice.key == MessageKey.validation_optimize
        assert notice.params == {
            "percentage_range": 60.0,
            "hypo_rate": 0.0,
            "hyper_rate": 35.0,
        }

    def test_continue_tier_uses_continue_message(self):
        notice = generate_adjustment_recommendation(0.6, 0.0, 0.2)
        assert notice.key == MessageKey.validation_continue


class TestValidateWeeklyModel:
    """Tests for metrics computed from a weekly record."""

    def test_excellent_week(self):
        result = validate_weekly_model(_record([[120, 110, 140]] * 7))

        assert result.day_in_range_percentage == 1.0
        assert result.time_in_range == 1.0
        assert result.hypo_rate == 0.0
        assert result.hyper_rate == 0.0
        assert result.tier == RecommendationTier.excellent
        assert result.recommendation.key == MessageKey.validation_excellent
        assert result.recommendation.params["percentage_range"] == 100.0

    def test_urgent_week(self):
        """One low in every five readings: 20% hypoglycemia."""
        result = validate_weekly_model(_record([[60, 120, 120, 120, 120]] * 7))

        assert result.hypo_rate == 0.2
        assert result.tier == RecommendationTier.urgent_adjustment
        assert result.recommendation.params["hypo_rate"] == 20.0

    def test_tier_uses_unrounded_hypo_rate(self):
        """52 lows in 500 readings is 10.4%: above the 10% urgent cutoff."""
        day = [60] * 13 + [120] * 112
        result = validate_weekly_model(_record([day] * 4))

        assert result.hypo_rate == 0.1
        assert result.tier == RecommendationTier.urgent_adjustment
        assert result.recommendation.key == MessageKey.validation_urgent_adjustment
        assert result.recommendation.params["hypo_rate"] == 10.4

    def test_hypo_rate_just_below_good_cutoff(self):
        """9 lows in 200 readings is 4.5%, which stays under the 5% cutoff."""
        days = [[60] * 3 + [120] * 47] + [[60] * 2 + [120] * 48] * 3
        result = validate_weekly_model(_record(days))

        assert result.hypo_rate == 0.05
        assert result.tier == RecommendationTier.model_working_well

    def test_day_in_range_needs_70_percent_of_readings(self):
        """Two good days and two days with 1 of 3 readings in range."""
        record = _record([[120, 120, 120], [120, 120, 120], [200, 200, 120], [200, 200, 120]])
        result = validate_weekly_model(record)

        assert result.day_in_range_percentage == 0.5
        assert result.time_in_range == 0.67
        assert result.hyper_rate == 0.33
        assert result.tier == RecommendationTier.optimize

    def test_uses_three_hour_outcome(self):
        record = _record([[120, 120]] * 3, later=[[250, None]] * 3)
        result = validate_weekly_model(record)

        assert result.hyper_rate == 0.5
        assert result.day_in_range_percentage == 0.0

    def test_rejects_too_many_days(self):
        with pytest.raises(InputValidationError) as exc_info:
            validate_weekly_model(_record([[120]] * 15))

        assert exc_info.value.model_name == "WeeklyRecord"

    def test_rejects_empty_day(self):
        record = _record([[120]] * 3)
        record[1]["measurements"] = []

        with pytest.raises(InputValidationError):
            validate_weekly_model(record)
