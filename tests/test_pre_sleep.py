"""Tests for the bedtime evaluation."""

import pytest
from pydantic import ValidationError

from conftest import NOW, hours_ago, injection
from mdi_advisor.core.enums import DecayCurve, MessageKey, PreSleepAction
from mdi_advisor.core.models import Notice, PreSleepEvaluation
from mdi_advisor.core.pre_sleep import evaluate_pre_sleep, evaluate_pre_sleep_for_profile
from mdi_advisor.core.validation import InputValidationError


class TestEatSnack:
    """Tests for the hypoglycemia-risk branch."""

    def test_low_glucose(self):
        result = evaluate_pre_sleep(glucose=90, iob=0, isf=50, target=100)

        assert result.action == PreSleepAction.eat_snack
        assert result.carbohydrates == 15
        assert result.correction_dose is None
        assert result.reason.key == MessageKey.pre_sleep_risk_nocturnal_hypo

    def test_projected_glucose_below_100(self):
        """150 - 1.5U x 50 = 75 mg/dL projected."""
        result = evaluate_pre_sleep(glucose=150, iob=1.5, isf=50, target=100)

        assert result.action == PreSleepAction.eat_snack
        assert result.projected_glucose == 75
        assert result.remaining_iob == 1.5


class TestSmallCorrection:
    """Tests for the damped bedtime correction."""

    def test_moderate_correction_with_3am_recheck(self):
        """(220 - 140) / 50 = 1.6U, x0.7 = 1.12U, rounds to 1U."""
        result = evaluate_pre_sleep(glucose=220, iob=0, isf=50, target=100)

        assert result.action == PreSleepAction.small_correction
        assert result.correction_dose == 1.0
        assert result.recheck_at_3am is True
        assert result.reason == Notice(
            key=MessageKey.pre_sleep_moderate_correction, params={"dose": 1.0}
        )

    def test_very_high_glucose(self):
        """(300 - 140) / 50 = 3.2U, x0.7 = 2.24U, rounds to 2U."""
        result = evaluate_pre_sleep(glucose=300, iob=0, isf=50, target=100)

        assert result.action == PreSleepAction.small_correction
        assert result.correction_dose == 2.0
        assert result.recheck_at_3am is False
        assert result.reason.key == MessageKey.pre_sleep_very_high_glucose

    def test_bedtime_target_never_below_140(self):
        low_target = evaluate_pre_sleep(glucose=200, iob=0, isf=50, target=100)
        high_target = evaluate_pre_sleep(glucose=200, iob=0, isf=50, target=170)

        assert low_target.correction_dose == 1.0
        assert high_target.correction_dose == 0.5

    def test_iob_covers_correction(self):
        """(200 - 140) / 50 - 1U = 0.2U, x0.7 rounds to zero: monitor instead."""
        result = evaluate_pre_sleep(glucose=200, iob=1, isf=50, target=100)

        assert result.action == PreSleepAction.sleep
        assert result.correction_dose is None
        assert result.recheck_at_3am is True
        assert result.reason.key == MessageKey.pre_sleep_monitor_trend


class TestSleep:
    def test_in_range(self):
        result = evaluate_pre_sleep(glucose=130, iob=0, isf=50, target=100)

        assert result.action == PreSleepAction.sleep
        assert result.recheck_at_3am is False
        assert result.reason.key == MessageKey.pre_sleep_safe_to_sleep


class TestProfileWrapper:
    def test_computes_iob_from_history(self, profile):
        """2U given 2h ago with DIA 4h leaves 1U."""
        result = evaluate_pre_sleep_for_profile(
            200, [injection(2, 2)], profile, now=NOW
        )

        assert result.remaining_iob == 1.0
        assert result.projected_glucose == 150
        assert result.action == PreSleepAction.sleep

    def test_curve_override(self, profile):
        """On the parabolic curve 1.5U is still active: 150 projects to 75."""
        result = evaluate_pre_sleep_for_profile(
            150, [injection(2, 2)], profile, now=NOW, curve=DecayCurve.parabolic
        )

        assert result.remaining_iob == 1.5
        assert result.action == PreSleepAction.eat_snack

    def test_accepts_injection_mappings(self, profile):
        injections = [{"timestamp": hours_ago(2), "units": 2}]
        result = evaluate_pre_sleep_for_profile(
            200, injections, profile, now=NOW, curve=DecayCurve.linear
        )
        assert result.remaining_iob == 1.0

    def test_rejects_out_of_range_glucose(self, profile):
        with pytest.raises(InputValidationError) as exc_info:
            evaluate_pre_sleep_for_profile(-40, [], profile, now=NOW)

        assert exc_info.value.model_name == "glucose"


class TestInputBounds:
    @pytest.mark.parametrize("glucose", [19, 601])
    def test_rejects_out_of_range_glucose(self, glucose):
        with pytest.raises(InputValidationError):
            evaluate_pre_sleep(glucose=glucose, iob=0, isf=50, target=100)


class TestEvaluationModel:
    def test_snack_requires_carbohydrates(self):
        with pytest.raises(ValidationError):
            PreSleepEvaluation(
                action=PreSleepAction.eat_snack,
                remaining_iob=0,
                projected_glucose=80,
                reason=Notice(key=MessageKey.pre_sleep_risk_nocturnal_hypo),
            )

    def test_correction_only_for_small_correction(self):
        with pytest.raises(ValidationError):
            PreSleepEvaluation(
                action=PreSleepAction.sleep,
                remaining_iob=0,
                projected_glucose=130,
                reason=Notice(key=MessageKey.pre_sleep_safe_to_sleep),
                correction_dose=1.0,
            )
