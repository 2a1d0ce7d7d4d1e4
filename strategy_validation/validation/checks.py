"""
Leaf checks — single-parameter predicates returning a ValidationResult.

Each check validates one named value and reports at most one error for
that name. They carry no orchestration logic and are meant to be combined
inside custom strategies:

    def validate_order(order):
        return combine(
            is_not_null_or_whitespace(order.reference, "reference"),
            is_positive(order.quantity, "quantity"),
        )
"""
import re
import uuid
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Type
from urllib.parse import urlparse

from strategy_validation.config.constants import (
    ALPHANUMERIC_PATTERN,
    EMAIL_PATTERN,
    PASSWORD_PATTERN,
    URL_SCHEMES,
)
from strategy_validation.models.validation_result import ValidationResult

_EMAIL_RE = re.compile(EMAIL_PATTERN)
_ALPHANUMERIC_RE = re.compile(ALPHANUMERIC_PATTERN)
_PASSWORD_RE = re.compile(PASSWORD_PATTERN)


def _outcome(ok: bool, parameter_name: str, message: str) -> ValidationResult:
    if ok:
        return ValidationResult.success()
    return ValidationResult.fail({parameter_name: message})


def _public_values(obj: Any) -> list:
    if is_dataclass(obj):
        return [getattr(obj, f.name) for f in fields(obj)]
    return [v for k, v in vars(obj).items() if not k.startswith("_")]


def combine(*results: ValidationResult) -> ValidationResult:
    """Merge several check outcomes, preserving argument order."""
    combined = ValidationResult()
    for r in results:
        combined.merge(r)
    return combined


# =============================================================================
# Presence
# =============================================================================

def not_null(value: Any, parameter_name: str) -> ValidationResult:
    return _outcome(value is not None, parameter_name, f"{parameter_name} cannot be null.")


def is_not_null_or_whitespace(value: Optional[str], parameter_name: str) -> ValidationResult:
    ok = isinstance(value, str) and value.strip() != ""
    return _outcome(ok, parameter_name, f"{parameter_name} cannot be null, empty or whitespace.")


def is_not_null_or_empty(collection: Optional[Iterable[Any]], parameter_name: str) -> ValidationResult:
    ok = collection is not None and any(True for _ in collection)
    return _outcome(ok, parameter_name, f"{parameter_name} cannot be null or empty.")


def are_any_fields_null(obj: Any, parameter_name: str) -> ValidationResult:
    """Fails when *obj* is None or any of its public fields is None."""
    ok = obj is not None and all(v is not None for v in _public_values(obj))
    return _outcome(ok, parameter_name, f"{parameter_name} has one or more null fields.")


def are_all_fields_null(obj: Any, parameter_name: str) -> ValidationResult:
    """Succeeds only when *obj* exists and every public field is None."""
    ok = obj is not None and all(v is None for v in _public_values(obj))
    return _outcome(ok, parameter_name, f"All fields of {parameter_name} must be null.")


# =============================================================================
# Numbers & booleans
# =============================================================================

def is_in_range(value: int, parameter_name: str, minimum: int, maximum: int) -> ValidationResult:
    ok = minimum <= value <= maximum
    return _outcome(ok, parameter_name, f"{parameter_name} must be between {minimum} and {maximum}.")


def is_greater_than(value: int, parameter_name: str, min_value: int) -> ValidationResult:
    return _outcome(value > min_value, parameter_name, f"{parameter_name} must be greater than {min_value}.")


def is_less_than(value: int, parameter_name: str, max_value: int) -> ValidationResult:
    return _outcome(value < max_value, parameter_name, f"{parameter_name} must be less than {max_value}.")


def is_positive(value: int, parameter_name: str) -> ValidationResult:
    return _outcome(value > 0, parameter_name, f"{parameter_name} must be positive.")


def is_negative(value: int, parameter_name: str) -> ValidationResult:
    return _outcome(value < 0, parameter_name, f"{parameter_name} must be negative.")


def is_true(value: bool, parameter_name: str) -> ValidationResult:
    return _outcome(value is True, parameter_name, f"{parameter_name} must be true.")


def is_false(value: bool, parameter_name: str) -> ValidationResult:
    return _outcome(value is False, parameter_name, f"{parameter_name} must be false.")


# =============================================================================
# Strings & formats
# =============================================================================

def is_email(value: Optional[str], parameter_name: str) -> ValidationResult:
    ok = isinstance(value, str) and _EMAIL_RE.match(value) is not None
    return _outcome(ok, parameter_name, f"{parameter_name} is not a valid e-mail address.")


def is_url(value: Optional[str], parameter_name: str) -> ValidationResult:
    ok = False
    if isinstance(value, str):
        parsed = urlparse(value)
        ok = parsed.scheme in URL_SCHEMES and bool(parsed.netloc)
    return _outcome(ok, parameter_name, f"{parameter_name} is not a valid absolute URL.")


def is_alphanumeric(value: Optional[str], parameter_name: str) -> ValidationResult:
    ok = isinstance(value, str) and _ALPHANUMERIC_RE.match(value) is not None
    return _outcome(ok, parameter_name, f"{parameter_name} must contain only letters and digits.")


def is_password_secure(password: Optional[str], parameter_name: str) -> ValidationResult:
    """At least one digit and one non-word character."""
    ok = isinstance(password, str) and password.strip() != "" and _PASSWORD_RE.match(password) is not None
    return _outcome(
        ok, parameter_name,
        f"{parameter_name} must contain at least one digit and one special character.",
    )


def is_guid(value: Optional[str], parameter_name: str) -> ValidationResult:
    ok = False
    if isinstance(value, str) and value.strip():
        try:
            uuid.UUID(value.strip())
            ok = True
        except ValueError:
            ok = False
    return _outcome(ok, parameter_name, f"{parameter_name} is not a valid GUID.")


def is_date(value: Optional[str], parameter_name: str) -> ValidationResult:
    """ISO-8601 date or datetime string."""
    ok = False
    if isinstance(value, str) and value.strip():
        for parse in (date.fromisoformat, datetime.fromisoformat):
            try:
                parse(value.strip())
                ok = True
                break
            except ValueError:
                continue
    return _outcome(ok, parameter_name, f"{parameter_name} is not a valid date.")


# =============================================================================
# Types, enums & files
# =============================================================================

def is_valid_enum_value(value: Any, parameter_name: str, enum_type: Type[Enum]) -> ValidationResult:
    """Accepts an enum member or a raw value defined on *enum_type*."""
    ok = isinstance(value, enum_type) or value in [m.value for m in enum_type]
    return _outcome(ok, parameter_name, f"{parameter_name} is not a defined {enum_type.__name__} value.")


def is_assignable_to(
    candidate: Optional[type], parameter_name: str, base_type: Optional[type]
) -> ValidationResult:
    ok = (
        isinstance(candidate, type)
        and isinstance(base_type, type)
        and issubclass(candidate, base_type)
    )
    base_name = getattr(base_type, "__name__", base_type)
    return _outcome(ok, parameter_name, f"{parameter_name} is not assignable to {base_name}.")


def do_files_exist(file_paths: Optional[Sequence[str]], parameter_name: str) -> ValidationResult:
    ok = bool(file_paths) and all(Path(p).is_file() for p in file_paths)
    return _outcome(ok, parameter_name, f"{parameter_name} must list existing files only.")
