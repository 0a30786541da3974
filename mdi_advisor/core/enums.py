"""Dose engine enums."""

from enum import StrEnum, auto


class MealType(StrEnum):
    """Meal classification by carbohydrate absorption speed."""

    fast = auto()
    normal = auto()
    slow = auto()
    very_slow = auto()


class TimeOfDay(StrEnum):
    """Dose request slot.

    ``correction`` is an ad-hoc correction outside a meal: no carbohydrate
    dose is computed and the between-meals factor applies.
    """

    breakfast = auto()
    lunch = auto()
    dinner = auto()
    correction = auto()


class PreSleepAction(StrEnum):
    """Terminal recommendation of the bedtime evaluation."""

    eat_snack = auto()
    small_correction = auto()
    sleep = auto()


class PatternKind(StrEnum):
    """Kinds of retrospective pattern findings."""

    recurring_hypoglycemia = auto()
    recurring_hyperglycemia = auto()
    high_variability = auto()
    no_patterns = auto()


class DayPeriod(StrEnum):
    """Coarse time-of-day descriptor for an hour bucket."""

    morning = auto()
    midday = auto()
    afternoon = auto()
    night = auto()


class RecommendationTier(StrEnum):
    """Weekly control classification, most severe first."""

    urgent_adjustment = auto()
    caution = auto()
    review_poor_control = auto()
    review_poor_control_hyper = auto()
    optimize = auto()
    continue_current = "continue"
    continue_monitoring = auto()
    model_working_well = auto()
    excellent = auto()


class DecayCurve(StrEnum):
    """Insulin-on-board decay curve shapes."""

    linear = auto()
    parabolic = auto()
    bilinear = auto()


class Language(StrEnum):
    """Languages supported by the message catalog."""

    en = auto()
    es = auto()


class MessageKey(StrEnum):
    """Catalog keys for every user-facing message the engine can emit.

    The engine only ever produces these codes (plus parameters); turning them
    into text is the message resolver's job.
    """

    # Dose warnings
    hypoglycemia = "warnings.hypoglycemia"
    high_iob_low_glucose = "warnings.highIobLowGlucose"
    very_high_glucose = "warnings.veryHighGlucose"
    carbs_without_insulin = "warnings.carbsWithoutInsulin"
    high_nocturnal_dose = "warnings.highNocturnalDose"
    very_high_dose = "warnings.veryHighDose"
    recent_exercise = "warnings.recentExercise"
    alcohol = "warnings.alcohol"
    high_fat_meal = "warnings.highFatMeal"
    illness = "warnings.illness"
    stress = "warnings.stress"
    menstruation = "warnings.menstruation"
    dose_reduced_by_factors = "dose.reducedByFactors"

    # Pre-sleep evaluation
    pre_sleep_risk_nocturnal_hypo = "preSleep.riskNocturnalHypo"
    pre_sleep_very_high_glucose = "preSleep.veryHighGlucose"
    pre_sleep_moderate_correction = "preSleep.moderateCorrection"
    pre_sleep_monitor_trend = "preSleep.monitorTrend"
    pre_sleep_safe_to_sleep = "preSleep.safeToSleep"

    # Between-meal correction
    correction_wait_3_hours = "correction.wait3Hours"
    correction_conservative = "correction.conservativeCorrection"
    correction_check_glucose = "correction.checkGlucose"
    correction_not_needed = "correction.noCorrectionNeeded"

    # Weekly validation tiers
    validation_urgent_adjustment = "validation.urgentAdjustment"
    validation_caution = "validation.caution"
    validation_review_poor_control = "validation.reviewPoorControl"
    validation_review_poor_control_hyper = "validation.reviewPoorControlHyper"
    validation_optimize = "validation.optimize"
    validation_continue = "validation.continue"
    validation_continue_monitoring = "validation.continueMonitoring"
    validation_model_working = "validation.modelWorking"
    validation_excellent = "validation.excellent"

    # Pattern analysis
    patterns_recurring_hypos = "patterns.recurringHypos"
    patterns_suggest_reduce_dose = "patterns.suggestReduceDose"
    patterns_consistent_hyper = "patterns.consistentHyper"
    patterns_suggest_increase_dose = "patterns.suggestIncreaseDose"
    patterns_high_variability = "patterns.highVariability"
    patterns_suggest_consistency = "patterns.suggestConsistency"
    patterns_no_patterns = "patterns.noPatterns"

    # Time-of-day descriptors
    period_morning = "periods.morning"
    period_midday = "periods.midday"
    period_afternoon = "periods.afternoon"
    period_night = "periods.night"
