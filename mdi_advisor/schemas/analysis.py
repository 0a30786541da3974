"""Retrospective analysis API schemas."""

import zoneinfo

from pydantic import Field, field_validator

from mdi_advisor.core.models import (
    EngineModel,
    PatternFinding,
    PatternThresholds,
    TieringThresholds,
    WeeklyRecord,
    WeeklyValidationResult,
)
from mdi_advisor.schemas.common import LocalizedRequest


class WeeklyValidationRequest(LocalizedRequest):
    """Request schema for weekly model validation."""

    record: WeeklyRecord
    thresholds: TieringThresholds | None = None


class PatternAnalysisRequest(LocalizedRequest):
    """Request schema for pattern analysis."""

    record: WeeklyRecord
    thresholds: PatternThresholds | None = None
    timezone: str = Field(
        default="UTC",
        max_length=64,
        description="IANA timezone used to bucket measurements by hour",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate that the timezone is a known IANA timezone."""
        try:
            zoneinfo.ZoneInfo(v)
        except (KeyError, ValueError, zoneinfo.ZoneInfoNotFoundError):
            msg = f"Invalid timezone: {v}"
            raise ValueError(msg)
        return v


class WeeklyValidationResponse(EngineModel):
    """Response schema for weekly model validation."""

    result: WeeklyValidationResult
    recommendation: str


class RenderedFinding(EngineModel):
    """A pattern finding with its rendered texts."""

    finding: PatternFinding
    description: str
    suggestion: str | None = None


class PatternAnalysisResponse(EngineModel):
    """Response schema for pattern analysis."""

    findings: list[RenderedFinding]
