"""Dose engine Pydantic models.

Pure, request-scoped value objects. No persistence, no clock. Field
validators carry the clinical bounds from ``constants``; every model
accepts both snake_case names and the camelCase wire names used by the
surrounding application (``icRatio``, ``diaHours``, ``previousInjections``).
"""

from typing import Self, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    model_validator,
)
from pydantic.alias_generators import to_camel

from mdi_advisor.core.constants import (
    DEFAULT_TARGET_MGDL,
    DOSE_INCREMENT_UNITS,
    HIGH_FAT_DELAY_HOURS_MAX,
    HIGH_FAT_DELAY_HOURS_MIN,
    MAX_CARBOHYDRATES_G,
    MAX_DIA_HOURS,
    MAX_GLUCOSE_MGDL,
    MAX_IC_RATIO,
    MAX_INJECTION_UNITS,
    MAX_ISF,
    MAX_TARGET_MGDL,
    MAX_WEEKLY_DAYS,
    MIN_DIA_HOURS,
    MIN_GLUCOSE_MGDL,
    MIN_IC_RATIO,
    MIN_ISF,
    MIN_TARGET_MGDL,
    MIN_WEEKLY_DAYS,
    PATTERN_HYPER_RATE,
    PATTERN_HYPO_RATE,
    PATTERN_MIN_DAYS,
    PATTERN_MIN_SAMPLES_PER_HOUR,
    PATTERN_VARIABILITY_SD_MGDL,
    TIER_CAUTION_HYPO_RATE,
    TIER_EXCELLENT_HYPER_RATE,
    TIER_GOOD_HYPO_RATE,
    TIER_MODERATE_HYPER_RATE,
    TIER_MODERATE_RANGE,
    TIER_POOR_HYPER_RATE,
    TIER_POOR_RANGE,
    TIER_URGENT_HYPO_RATE,
)
from mdi_advisor.core.enums import (
    DayPeriod,
    MealType,
    MessageKey,
    PatternKind,
    PreSleepAction,
    RecommendationTier,
    TimeOfDay,
)


class EngineModel(BaseModel):
    """Base for all engine value objects: immutable, camelCase-aware."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class ICRatio(EngineModel):
    """Grams of carbohydrate covered by one unit, per meal."""

    breakfast: float = Field(ge=MIN_IC_RATIO, le=MAX_IC_RATIO)
    lunch: float = Field(ge=MIN_IC_RATIO, le=MAX_IC_RATIO)
    dinner: float = Field(ge=MIN_IC_RATIO, le=MAX_IC_RATIO)

    def for_time_of_day(self, time_of_day: TimeOfDay) -> float:
        """Ratio for a meal slot; corrections fall back to the lunch ratio."""
        if time_of_day == TimeOfDay.breakfast:
            return self.breakfast
        if time_of_day == TimeOfDay.dinner:
            return self.dinner
        return self.lunch


class InsulinProfile(EngineModel):
    """Patient's personalised dosing parameters."""

    isf: float = Field(
        ge=MIN_ISF,
        le=MAX_ISF,
        description=f"mg/dL drop per unit. Range: {MIN_ISF:g}-{MAX_ISF:g}.",
    )
    ic_ratio: ICRatio
    dia_hours: float = Field(
        ge=MIN_DIA_HOURS,
        le=MAX_DIA_HOURS,
        description=f"Duration of insulin action. Range: {MIN_DIA_HOURS:g}-{MAX_DIA_HOURS:g} h.",
    )
    target: float = Field(
        default=DEFAULT_TARGET_MGDL,
        ge=MIN_TARGET_MGDL,
        le=MAX_TARGET_MGDL,
        description=f"Target glucose (mg/dL). Range: {MIN_TARGET_MGDL:g}-{MAX_TARGET_MGDL:g}.",
    )


class Injection(EngineModel):
    """A past insulin administration."""

    timestamp: int = Field(gt=0, description="Epoch milliseconds.")
    units: float = Field(gt=0, le=MAX_INJECTION_UNITS)


class Meal(EngineModel):
    """A carbohydrate intake event."""

    timestamp: int = Field(gt=0, description="Epoch milliseconds.")
    carbohydrates: float = Field(ge=0, le=MAX_CARBOHYDRATES_G)
    type: MealType = MealType.normal


class DoseContext(EngineModel):
    """Situational modifiers for one calculation. Absent flags mean no adjustment."""

    recent_exercise: bool = False
    alcohol: bool = False
    illness: bool = False
    stress: bool = False
    menstruation: bool = False
    high_fat_meal: bool = False
    hour_of_day: int | None = Field(default=None, ge=0, le=23)


class CalculateDoseParams(EngineModel):
    """One dose request."""

    time_of_day: TimeOfDay
    glucose: float = Field(ge=MIN_GLUCOSE_MGDL, le=MAX_GLUCOSE_MGDL)
    carbohydrates: float | None = Field(default=None, ge=0, le=MAX_CARBOHYDRATES_G)
    previous_injections: list[Injection] = Field(default_factory=list)
    context: DoseContext | None = None


class GlucoseMeasurement(EngineModel):
    """One retrospective sample."""

    timestamp: int = Field(gt=0, description="Epoch milliseconds.")
    glucose: float = Field(ge=MIN_GLUCOSE_MGDL, le=MAX_GLUCOSE_MGDL)
    glucose_3h_later: float | None = Field(
        default=None,
        ge=MIN_GLUCOSE_MGDL,
        le=MAX_GLUCOSE_MGDL,
        alias="glucose3hLater",
    )
    insulin: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)

    @property
    def outcome_glucose(self) -> float:
        """Value used for retrospective analysis: the 3h outcome when recorded."""
        if self.glucose_3h_later is not None:
            return self.glucose_3h_later
        return self.glucose


class DayRecord(EngineModel):
    """One day of measurements."""

    date: str
    measurements: list[GlucoseMeasurement] = Field(min_length=1)


class WeeklyRecord(RootModel[list[DayRecord]]):
    """Multi-day dataset for retrospective analysis."""

    model_config = ConfigDict(frozen=True)

    root: list[DayRecord] = Field(min_length=MIN_WEEKLY_DAYS, max_length=MAX_WEEKLY_DAYS)

    def __iter__(self):
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, item: int) -> DayRecord:
        return self.root[item]


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

NoticeParam = Union[str, int, float, "Notice"]


class Notice(EngineModel):
    """A structured, localisable message: a catalog key plus parameters.

    Parameters may themselves be notices (e.g. a time-of-day descriptor)
    which the resolver renders first.
    """

    key: MessageKey
    params: dict[str, NoticeParam] = Field(default_factory=dict)


Notice.model_rebuild()


class DoseSplit(EngineModel):
    """Delivery split for slowly absorbed (high-fat) meals."""

    immediate_units: float = Field(ge=0)
    delayed_units: float = Field(ge=0)
    delay_hours_min: float = HIGH_FAT_DELAY_HOURS_MIN
    delay_hours_max: float = HIGH_FAT_DELAY_HOURS_MAX


class DoseAdjustments(EngineModel):
    """Context adjustments applied to a dose, as signed percentages."""

    between_meals: int | None = None
    exercise: int | None = None
    illness: int | None = None
    stress: int | None = None
    menstruation: int | None = None
    nocturnal: int | None = None
    split: DoseSplit | None = None


class DoseBreakdown(EngineModel):
    """Itemised derivation of a dose."""

    carb_dose: float = Field(ge=0)
    correction_dose: float = Field(ge=0)
    iob: float = Field(ge=0)
    carbohydrates: float = Field(ge=0)
    glucose: float
    target_glucose: float
    raw_dose: float = Field(ge=0)
    adjusted_dose: float = Field(ge=0)
    safety_reduction: float = Field(
        description="raw_dose - adjusted_dose; negative when context increased the dose.",
    )
    adjustments: DoseAdjustments = Field(default_factory=DoseAdjustments)


class DoseResult(EngineModel):
    """Final engine output for a dose request."""

    dose: float = Field(ge=0)
    breakdown: DoseBreakdown
    warnings: list[Notice] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_increment(self) -> Self:
        """Enforce that the dose is deliverable with a pen."""
        steps = self.dose / DOSE_INCREMENT_UNITS
        if abs(steps - round(steps)) > 1e-9:
            msg = f"dose must be a multiple of {DOSE_INCREMENT_UNITS} units"
            raise ValueError(msg)
        return self


class PreSleepEvaluation(EngineModel):
    """Bedtime recommendation."""

    action: PreSleepAction
    remaining_iob: float = Field(ge=0)
    projected_glucose: float
    reason: Notice
    carbohydrates: float | None = None
    correction_dose: float | None = None
    recheck_at_3am: bool = False

    @model_validator(mode="after")
    def check_action_payload(self) -> Self:
        """The action decides which optional field is populated."""
        if self.action == PreSleepAction.eat_snack and not self.carbohydrates:
            msg = "carbohydrates must be set when the action is eat_snack"
            raise ValueError(msg)
        if self.action == PreSleepAction.small_correction and not self.correction_dose:
            msg = "correction_dose must be set when the action is small_correction"
            raise ValueError(msg)
        if self.action != PreSleepAction.small_correction and self.correction_dose:
            msg = "correction_dose is only valid for small_correction"
            raise ValueError(msg)
        return self


class BetweenMealCorrectionResult(EngineModel):
    """Outcome of an ad-hoc correction request."""

    dose: float = Field(ge=0)
    reason: Notice
    warnings: list[Notice] = Field(default_factory=list)
    iob: float = Field(default=0, ge=0)
    hours_since_last_injection: float | None = None


class PatternFinding(EngineModel):
    """One retrospective pattern detected in a weekly record."""

    kind: PatternKind
    description: Notice
    suggestion: Notice | None = None
    hour: int | None = Field(default=None, ge=0, le=23)
    time_descriptor: DayPeriod | None = None
    occurrences: int = 0
    days: int = 0
    samples: int = 0
    value: float | None = None


class WeeklyValidationResult(EngineModel):
    """Quality metrics and recommendation tier for a weekly record."""

    day_in_range_percentage: float = Field(ge=0, le=1)
    time_in_range: float = Field(ge=0, le=1)
    hypo_rate: float = Field(ge=0, le=1)
    hyper_rate: float = Field(ge=0, le=1)
    tier: RecommendationTier
    recommendation: Notice


# ---------------------------------------------------------------------------
# Tunable cutoffs
# ---------------------------------------------------------------------------


class PatternThresholds(EngineModel):
    """Cutoffs for recurring-pattern detection."""

    min_samples_per_hour: int = Field(default=PATTERN_MIN_SAMPLES_PER_HOUR, ge=1)
    min_days: int = Field(default=PATTERN_MIN_DAYS, ge=1)
    hypo_rate: float = Field(default=PATTERN_HYPO_RATE, ge=0, le=1)
    hyper_rate: float = Field(default=PATTERN_HYPER_RATE, ge=0, le=1)
    variability_sd: float = Field(default=PATTERN_VARIABILITY_SD_MGDL, gt=0)


class TieringThresholds(EngineModel):
    """Cutoffs between weekly recommendation tiers."""

    urgent_hypo_rate: float = TIER_URGENT_HYPO_RATE
    caution_hypo_rate: float = TIER_CAUTION_HYPO_RATE
    poor_range: float = TIER_POOR_RANGE
    poor_hyper_rate: float = TIER_POOR_HYPER_RATE
    moderate_range: float = TIER_MODERATE_RANGE
    moderate_hyper_rate: float = TIER_MODERATE_HYPER_RATE
    good_hypo_rate: float = TIER_GOOD_HYPO_RATE
    excellent_hyper_rate: float = TIER_EXCELLENT_HYPER_RATE
