"""Retrospective pattern analysis over a weekly record.

Measurements are grouped into 24 hour-of-day buckets. A bucket reports a
recurring problem only when it has enough samples and the problem shows up
on more than one day; a single bad evening is noise, not a pattern.
"""

import statistics
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo
from typing import Any

from mdi_advisor.core.constants import (
    HIGH_GLUCOSE_THRESHOLD_MGDL,
    LOW_GLUCOSE_THRESHOLD_MGDL,
)
from mdi_advisor.core.enums import DayPeriod, MessageKey, PatternKind
from mdi_advisor.core.models import (
    Notice,
    PatternFinding,
    PatternThresholds,
    WeeklyRecord,
)
from mdi_advisor.core.rounding import round_decimals
from mdi_advisor.core.validation import validate_weekly_record
from mdi_advisor.logging_config import get_logger

logger = get_logger(__name__)

_PERIOD_KEYS: dict[DayPeriod, MessageKey] = {
    DayPeriod.morning: MessageKey.period_morning,
    DayPeriod.midday: MessageKey.period_midday,
    DayPeriod.afternoon: MessageKey.period_afternoon,
    DayPeriod.night: MessageKey.period_night,
}


def day_period(hour: int) -> DayPeriod:
    """Coarse descriptor for an hour: morning 6-9, midday 10-13, afternoon 14-19."""
    if 6 <= hour <= 9:
        return DayPeriod.morning
    if 10 <= hour <= 13:
        return DayPeriod.midday
    if 14 <= hour <= 19:
        return DayPeriod.afternoon
    return DayPeriod.night


@dataclass
class HourBucket:
    """Analysed values that fell into one hour of the day."""

    hour: int
    values: list[float] = field(default_factory=list)
    hypo_days: set[str] = field(default_factory=set)
    hyper_days: set[str] = field(default_factory=set)
    hypo_count: int = 0
    hyper_count: int = 0

    def add(self, value: float, day: str) -> None:
        self.values.append(value)
        if value < LOW_GLUCOSE_THRESHOLD_MGDL:
            self.hypo_count += 1
            self.hypo_days.add(day)
        elif value > HIGH_GLUCOSE_THRESHOLD_MGDL:
            self.hyper_count += 1
            self.hyper_days.add(day)

    @property
    def samples(self) -> int:
        return len(self.values)

    @property
    def average(self) -> float:
        return statistics.fmean(self.values)


class PatternReport:
    """Findings for a weekly record.

    Iterating runs the detectors over the pre-aggregated buckets; every call
    to ``iter()`` starts a fresh pass, so the report can be consumed more
    than once.
    """

    def __init__(
        self,
        buckets: dict[int, HourBucket],
        values: list[float],
        thresholds: PatternThresholds,
    ):
        self._buckets = buckets
        self._values = values
        self.thresholds = thresholds

    def __iter__(self) -> Iterator[PatternFinding]:
        return self._findings()

    def __repr__(self) -> str:
        return f"PatternReport(hours={len(self._buckets)}, samples={len(self._values)})"

    def to_list(self) -> list[PatternFinding]:
        return list(self)

    def _findings(self) -> Iterator[PatternFinding]:
        found = False

        for hour in sorted(self._buckets):
            bucket = self._buckets[hour]
            if bucket.samples < self.thresholds.min_samples_per_hour:
                continue

            finding = self._hypo_finding(bucket)
            if finding is not None:
                found = True
                yield finding

            finding = self._hyper_finding(bucket)
            if finding is not None:
                found = True
                yield finding

        if len(self._values) > 1:
            deviation = statistics.pstdev(self._values)
            if deviation > self.thresholds.variability_sd:
                found = True
                yield PatternFinding(
                    kind=PatternKind.high_variability,
                    description=Notice(
                        key=MessageKey.patterns_high_variability,
                        params={"standard_deviation": round_decimals(deviation, 1)},
                    ),
                    suggestion=Notice(key=MessageKey.patterns_suggest_consistency),
                    samples=len(self._values),
                    value=round_decimals(deviation, 1),
                )

        if not found:
            yield PatternFinding(
                kind=PatternKind.no_patterns,
                description=Notice(key=MessageKey.patterns_no_patterns),
                samples=len(self._values),
            )

    def _hypo_finding(self, bucket: HourBucket) -> PatternFinding | None:
        rate = bucket.hypo_count / bucket.samples
        if rate <= self.thresholds.hypo_rate:
            return None
        if len(bucket.hypo_days) < self.thresholds.min_days:
            return None

        period = day_period(bucket.hour)
        return PatternFinding(
            kind=PatternKind.recurring_hypoglycemia,
            description=Notice(
                key=MessageKey.patterns_recurring_hypos,
                params={"period": Notice(key=_PERIOD_KEYS[period]), "hour": bucket.hour},
            ),
            suggestion=Notice(
                key=MessageKey.patterns_suggest_reduce_dose,
                params={"hour": bucket.hour},
            ),
            hour=bucket.hour,
            time_descriptor=period,
            occurrences=bucket.hypo_count,
            days=len(bucket.hypo_days),
            samples=bucket.samples,
            value=round_decimals(rate, 2),
        )

    def _hyper_finding(self, bucket: HourBucket) -> PatternFinding | None:
        rate = bucket.hyper_count / bucket.samples
        if rate <= self.thresholds.hyper_rate:
            return None
        if len(bucket.hyper_days) < self.thresholds.min_days:
            return None

        average = round_decimals(bucket.average, 0)
        return PatternFinding(
            kind=PatternKind.recurring_hyperglycemia,
            description=Notice(
                key=MessageKey.patterns_consistent_hyper,
                params={"hour": bucket.hour, "average": int(average)},
            ),
            suggestion=Notice(
                key=MessageKey.patterns_suggest_increase_dose,
                params={"hour": bucket.hour},
            ),
            hour=bucket.hour,
            time_descriptor=day_period(bucket.hour),
            occurrences=bucket.hyper_count,
            days=len(bucket.hyper_days),
            samples=bucket.samples,
            value=average,
        )


def analyze_patterns(
    weekly_record: WeeklyRecord | list[Any],
    thresholds: PatternThresholds | None = None,
    tz: tzinfo = UTC,
) -> PatternReport:
    """Group a weekly record by hour of day and return its pattern report.

    Args:
        weekly_record: 3-14 days of measurements (validated if raw)
        thresholds: Detection cutoffs; defaults from ``core.constants``
        tz: Timezone used to derive the hour of each measurement

    Returns:
        PatternReport, a restartable iterable of PatternFinding

    Raises:
        InputValidationError: malformed weekly record
    """
    record = validate_weekly_record(weekly_record)
    thresholds = thresholds or PatternThresholds()

    buckets: dict[int, HourBucket] = {}
    values: list[float] = []
    for day in record:
        for measurement in day.measurements:
            hour = datetime.fromtimestamp(measurement.timestamp / 1000, tz=tz).hour
            value = measurement.outcome_glucose
            buckets.setdefault(hour, HourBucket(hour=hour)).add(value, day.date)
            values.append(value)

    logger.debug(
        "Weekly record aggregated for pattern analysis",
        days=len(record),
        samples=len(values),
        hours=len(buckets),
    )
    return PatternReport(buckets, values, thresholds)
