"""Shared API schemas."""

from pydantic import BaseModel, Field

from mdi_advisor.core.enums import DecayCurve, Language
from mdi_advisor.core.models import EngineModel


class FieldErrorDetail(BaseModel):
    """One rejected input field."""

    field: str
    constraint: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Body returned when engine input validation fails."""

    model: str = Field(..., description="Name of the rejected input model")
    errors: list[FieldErrorDetail]


class LocalizedRequest(EngineModel):
    """Base for requests whose response includes rendered messages."""

    language: Language | None = Field(
        default=None,
        description="Language for rendered messages; defaults to the service language.",
    )


class SnapshotRequest(LocalizedRequest):
    """Base for requests evaluated at an explicit reference time."""

    now: int = Field(..., gt=0, description="Reference time, epoch milliseconds.")
    curve: DecayCurve | None = Field(
        default=None,
        description="IOB decay curve; defaults to the service curve.",
    )
