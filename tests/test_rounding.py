"""Tests for dose rounding helpers."""

import pytest

from mdi_advisor.core.rounding import clamp_value, round_decimals, round_dose


class TestRoundDose:
    """Tests for rounding to pen increments."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(3.7, 3.5), (3.8, 4.0), (2.25, 2.5), (0.2, 0.0), (0.25, 0.5), (0, 0.0)],
    )
    def test_half_unit_increments(self, value, expected):
        assert round_dose(value) == expected

    def test_whole_unit_increment(self):
        assert round_dose(3.5, increment=1) == 4.0

    def test_rejects_non_positive_increment(self):
        with pytest.raises(ValueError):
            round_dose(3.0, increment=0)


class TestRoundDecimals:
    """Tests for half-up decimal rounding."""

    def test_half_up(self):
        assert round_decimals(2.25, 1) == 2.3
        assert round_decimals(0.125, 2) == 0.13

    def test_default_one_decimal(self):
        assert round_decimals(1.66) == 1.7


class TestClampValue:
    def test_clamps(self):
        assert clamp_value(5, 0, 3) == 3
        assert clamp_value(-1, 0, 3) == 0
        assert clamp_value(2, 0, 3) == 2
