"""Dose engine clinical constants.

All clinically significant values are defined here. These are DEFAULTS:
the pattern and tiering cutoffs can be overridden per call through
``PatternThresholds`` / ``TieringThresholds``, and the decay curve through
settings.
"""

from typing import Final

# Validation bounds (mg/dL, g/U, hours, units, grams)
MIN_ISF: Final[float] = 10
MAX_ISF: Final[float] = 200
MIN_IC_RATIO: Final[float] = 3
MAX_IC_RATIO: Final[float] = 30
MIN_DIA_HOURS: Final[float] = 2
MAX_DIA_HOURS: Final[float] = 8
MIN_TARGET_MGDL: Final[float] = 70
MAX_TARGET_MGDL: Final[float] = 180
DEFAULT_TARGET_MGDL: Final[float] = 100
MIN_GLUCOSE_MGDL: Final[float] = 20
MAX_GLUCOSE_MGDL: Final[float] = 600
MAX_INJECTION_UNITS: Final[float] = 50
MAX_CARBOHYDRATES_G: Final[float] = 300
MIN_WEEKLY_DAYS: Final[int] = 3
MAX_WEEKLY_DAYS: Final[int] = 14

# Insulin pen increment (units)
DOSE_INCREMENT_UNITS: Final[float] = 0.5

# Bilinear curve: time to peak activity (hours) and IOB fraction lost by then
INSULIN_PEAK_HOURS: Final[float] = 1.0
PEAK_ABSORBED_FRACTION: Final[float] = 0.2

# Context multipliers, applied in this order
BETWEEN_MEALS_FACTOR: Final[float] = 0.5
EXERCISE_FACTOR: Final[float] = 0.8
ILLNESS_FACTOR: Final[float] = 1.2
STRESS_FACTOR: Final[float] = 1.1
MENSTRUATION_FACTOR: Final[float] = 1.1
NOCTURNAL_FACTOR: Final[float] = 0.95

# High-fat meal delivery split: immediate share, delayed part after 2-3 h
HIGH_FAT_IMMEDIATE_SHARE: Final[float] = 0.6
HIGH_FAT_DELAY_HOURS_MIN: Final[float] = 2
HIGH_FAT_DELAY_HOURS_MAX: Final[float] = 3

# Night window (inclusive hours) and evening/dinner window
NIGHT_START_HOUR: Final[int] = 22
NIGHT_END_HOUR: Final[int] = 6
DINNER_START_HOUR: Final[int] = 19
DEFAULT_DINNER_HOUR: Final[int] = 19

# Warning thresholds
LOW_GLUCOSE_THRESHOLD_MGDL: Final[float] = 70
HIGH_GLUCOSE_THRESHOLD_MGDL: Final[float] = 180
KETONE_CHECK_GLUCOSE_MGDL: Final[float] = 250
# Above the ketone threshold, warn when the dose delivers less than this
# share of the correction insulin the reading calls for
LOW_CORRECTION_EFFECT_RATIO: Final[float] = 0.5
STACKING_GLUCOSE_MGDL: Final[float] = 100
STACKING_IOB_UNITS: Final[float] = 1.0
NOCTURNAL_DOSE_CEILING_UNITS: Final[float] = 5
HIGH_DOSE_THRESHOLD_UNITS: Final[float] = 15
# Warn when adjustments cut the dose below this share of the raw dose
REDUCED_DOSE_RATIO: Final[float] = 0.7

# Between-meal correction guard
MIN_HOURS_BETWEEN_DOSES: Final[float] = 3
MIN_CORRECTION_UNITS: Final[float] = 0.5

# Pre-sleep evaluation
PRE_SLEEP_LOW_MGDL: Final[float] = 100
PRE_SLEEP_HIGH_MGDL: Final[float] = 180
PRE_SLEEP_VERY_HIGH_MGDL: Final[float] = 250
PRE_SLEEP_SAFE_TARGET_MGDL: Final[float] = 140
PRE_SLEEP_CORRECTION_FACTOR: Final[float] = 0.7
PRE_SLEEP_SNACK_CARBS_G: Final[float] = 15

# Pattern analysis
PATTERN_MIN_SAMPLES_PER_HOUR: Final[int] = 2
PATTERN_MIN_DAYS: Final[int] = 2
PATTERN_HYPO_RATE: Final[float] = 0.4
PATTERN_HYPER_RATE: Final[float] = 0.5
PATTERN_VARIABILITY_SD_MGDL: Final[float] = 50

# Weekly tiering
DAY_IN_RANGE_SHARE: Final[float] = 0.7
TIER_URGENT_HYPO_RATE: Final[float] = 0.10
TIER_CAUTION_HYPO_RATE: Final[float] = 0.05
TIER_POOR_RANGE: Final[float] = 0.5
TIER_POOR_HYPER_RATE: Final[float] = 0.4
TIER_MODERATE_RANGE: Final[float] = 0.7
TIER_MODERATE_HYPER_RATE: Final[float] = 0.3
TIER_GOOD_HYPO_RATE: Final[float] = 0.05
TIER_EXCELLENT_HYPER_RATE: Final[float] = 0.1

# Carbohydrate absorption durations (hours) by meal type
ABSORPTION_HOURS: Final[dict[str, float]] = {
    "fast": 3,
    "normal": 4,
    "slow": 5,
    "very_slow": 6,
}

MS_PER_HOUR: Final[int] = 3_600_000
