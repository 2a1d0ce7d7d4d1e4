"""
ValidationResult — ordered accumulator of per-field validation errors.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from strategy_validation.validation.errors import InvalidArgumentError


def _require_text(argument: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(argument, f"{argument} must be a non-empty string")
    return value


@dataclass(frozen=True)
class ValidationError:
    """A single failure: the logical field name and a readable message."""

    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    """
    Outcome of a validation call.

    Errors keep discovery order and are never de-duplicated: two failing
    rules on the same field produce two entries. ``is_valid`` is derived
    from the error list and cannot drift out of sync with it.
    """

    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    @classmethod
    def fail(cls, errors: Mapping[str, str]) -> ValidationResult:
        """Build a result with one error per mapping entry, in iteration order."""
        result = cls()
        for field_name, message in errors.items():
            result.add_error(field_name, message)
        return result

    def add_error(self, field_name: str, message: str) -> ValidationResult:
        """
        Append one error and return self for chaining.

        Raises:
            InvalidArgumentError: If *field_name* or *message* is empty or
                whitespace. That is a programming error, not a failed check.
        """
        _require_text("field_name", field_name)
        _require_text("message", message)
        self.errors.append(ValidationError(field=field_name, message=message))
        return self

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Append every error of *other* after the current ones; returns self."""
        self.errors.extend(other.errors)
        return self

    def has_error_for(self, field_name: str) -> bool:
        return any(e.field == field_name for e in self.errors)

    def errors_for(self, field_name: str) -> List[str]:
        return [e.message for e in self.errors if e.field == field_name]

    def to_dict(self) -> Dict[str, object]:
        return {
            "is_valid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
        }
