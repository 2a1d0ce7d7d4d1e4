"""
Typed Pydantic models for the outward validation contract.

The engine itself knows nothing about HTTP; these models give hosts a
stable, serialisable shape for rejected requests and validation results.
"""
from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from strategy_validation.config.constants import DEFAULT_BAD_REQUEST_TITLE
from strategy_validation.models.validation_result import ValidationResult


class ValidationErrorItem(BaseModel):
    """One (field, message) failure as exposed to clients."""

    field: str = Field(..., min_length=1, description="Logical name of the failing field.")
    message: str = Field(..., min_length=1, description="Human-readable failure message.")


class ValidationReport(BaseModel):
    """Serialisable view of a ValidationResult."""

    is_valid: bool
    errors: List[ValidationErrorItem] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ValidationResult) -> ValidationReport:
        return cls(
            is_valid=result.is_valid,
            errors=[ValidationErrorItem(field=e.field, message=e.message) for e in result.errors],
        )


class BadRequestResponse(BaseModel):
    """
    400-class response body produced when bound arguments fail validation.

    ``errors`` maps each model-state key to every message recorded for it,
    in discovery order.
    """

    status: int = Field(400, ge=400, le=499)
    title: str = Field(DEFAULT_BAD_REQUEST_TITLE)
    errors: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("errors")
    @classmethod
    def validate_errors(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        if not v:
            raise ValueError("a bad request response must carry at least one error")
        for key, messages in v.items():
            if not messages:
                raise ValueError(f"error key '{key}' has no messages")
        return v
