"""Input validation for profiles, dose requests and weekly records.

Every external input is validated against the bounds in ``models`` before a
calculation runs. Failures raise ``InputValidationError`` naming each
offending field and the violated constraint; values are never clamped.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from mdi_advisor.core.constants import MAX_GLUCOSE_MGDL, MIN_GLUCOSE_MGDL
from mdi_advisor.core.models import (
    CalculateDoseParams,
    Injection,
    InsulinProfile,
    WeeklyRecord,
)
from mdi_advisor.logging_config import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_GLUCOSE = TypeAdapter(Annotated[float, Field(ge=MIN_GLUCOSE_MGDL, le=MAX_GLUCOSE_MGDL)])
_INJECTIONS = TypeAdapter(list[Injection])


@dataclass(frozen=True)
class FieldViolation:
    """One failed constraint."""

    field: str
    constraint: str
    message: str
    value: Any = None


class InputValidationError(ValueError):
    """Raised when an input falls outside its documented range or shape."""

    def __init__(self, model_name: str, violations: list[FieldViolation]):
        self.model_name = model_name
        self.violations = violations
        details = "; ".join(f"{v.field}: {v.message}" for v in violations)
        super().__init__(f"Invalid {model_name}: {details}")

    @classmethod
    def from_pydantic(cls, model_name: str, exc: ValidationError) -> "InputValidationError":
        """Translate pydantic's error list into field violations."""
        violations = [
            FieldViolation(
                field=".".join(str(part) for part in error["loc"]) or model_name,
                constraint=error["type"],
                message=error["msg"],
                value=error.get("input"),
            )
            for error in exc.errors()
        ]
        return cls(model_name, violations)

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form for API error responses."""
        return {
            "model": self.model_name,
            "errors": [
                {"field": v.field, "constraint": v.constraint, "message": v.message}
                for v in self.violations
            ],
        }


def _reject(name: str, exc: ValidationError) -> InputValidationError:
    error = InputValidationError.from_pydantic(name, exc)
    logger.info(
        "Input rejected",
        model=name,
        fields=[v.field for v in error.violations],
    )
    return error


def _validate(model: type[ModelT], data: ModelT | Mapping[str, Any] | Any) -> ModelT:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise _reject(model.__name__, exc) from exc


def validate_insulin_profile(profile: InsulinProfile | Mapping[str, Any]) -> InsulinProfile:
    """Validate an insulin profile.

    Raises:
        InputValidationError: isf, ic ratios, DIA or target out of range
    """
    return _validate(InsulinProfile, profile)


def validate_dose_calculation_input(
    params: CalculateDoseParams | Mapping[str, Any],
) -> CalculateDoseParams:
    """Validate a dose request.

    Raises:
        InputValidationError: glucose, carbohydrates, injections or context invalid
    """
    return _validate(CalculateDoseParams, params)


def validate_weekly_record(record: WeeklyRecord | list[Any]) -> WeeklyRecord:
    """Validate a 3-14 day record with at least one measurement per day.

    Raises:
        InputValidationError: wrong number of days or invalid measurements
    """
    return _validate(WeeklyRecord, record)


def validate_glucose(glucose: float) -> float:
    """Validate a glucose reading against 20-600 mg/dL.

    Raises:
        InputValidationError: reading missing, not numeric or out of range
    """
    try:
        return _GLUCOSE.validate_python(glucose)
    except ValidationError as exc:
        raise _reject("glucose", exc) from exc


def validate_injections(
    injections: Sequence[Injection | Mapping[str, Any]] | None,
) -> list[Injection]:
    """Validate an injection history given as models or mappings.

    Raises:
        InputValidationError: a timestamp or dose out of range
    """
    if not injections:
        return []
    try:
        return _INJECTIONS.validate_python(list(injections))
    except ValidationError as exc:
        raise _reject("injections", exc) from exc
