"""Retrospective analysis router: weekly validation and pattern detection."""

from zoneinfo import ZoneInfo

from fastapi import APIRouter

from mdi_advisor.core.patterns import analyze_patterns
from mdi_advisor.core.tiering import validate_weekly_model
from mdi_advisor.i18n import resolver_for
from mdi_advisor.schemas.analysis import (
    PatternAnalysisRequest,
    PatternAnalysisResponse,
    RenderedFinding,
    WeeklyValidationRequest,
    WeeklyValidationResponse,
)
from mdi_advisor.schemas.common import ValidationErrorResponse

router = APIRouter(prefix="/api/analysis", tags=["analysis"])

_RESPONSES = {
    422: {"model": ValidationErrorResponse, "description": "Malformed weekly record"},
}


@router.post(
    "/weekly-validation",
    response_model=WeeklyValidationResponse,
    responses={200: {"description": "Weekly metrics and recommendation tier"}, **_RESPONSES},
)
async def weekly_validation(request: WeeklyValidationRequest) -> WeeklyValidationResponse:
    """Classify how well the current parameters performed over the record."""
    result = validate_weekly_model(request.record, request.thresholds)
    resolver = resolver_for(request.language)
    return WeeklyValidationResponse(
        result=result,
        recommendation=resolver.render(result.recommendation),
    )


@router.post(
    "/patterns",
    response_model=PatternAnalysisResponse,
    responses={200: {"description": "Detected patterns"}, **_RESPONSES},
)
async def patterns(request: PatternAnalysisRequest) -> PatternAnalysisResponse:
    """Detect recurring hypo/hyperglycemia by hour of day and high variability."""
    report = analyze_patterns(request.record, request.thresholds, tz=ZoneInfo(request.timezone))
    resolver = resolver_for(request.language)
    return PatternAnalysisResponse(
        findings=[
            RenderedFinding(
                finding=finding,
                description=resolver.render(finding.description),
                suggestion=(
                    resolver.render(finding.suggestion) if finding.suggestion else None
                ),
            )
            for finding in report
        ]
    )
