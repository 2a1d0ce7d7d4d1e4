"""
Declarative field constraints consumed by the default structural validator.

Every constraint honours the same two-method contract:

    is_valid(value) -> bool
    format_error_message(field_name) -> str

so any predicate library exposing those two methods can be attached to a
field. Constraints are attached through ``typing.Annotated`` metadata::

    @dataclass
    class Customer:
        name: Annotated[Optional[str], Required(), StringLength(50)] = None
        age: Annotated[Optional[int], Range(18, 120)] = None

or declared ahead of time from plain spec dicts (see ``constraint_from_spec``).

Only ``Required`` treats ``None`` as a failure; every other constraint lets
an absent value through so optional fields stay optional.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Optional
from urllib.parse import urlparse

from jsonschema import Draft202012Validator, SchemaError
from jsonschema import ValidationError as SchemaViolation

from strategy_validation.config.constants import (
    EMAIL_MESSAGE,
    EMAIL_PATTERN,
    ONE_OF_MESSAGE,
    PATTERN_MESSAGE,
    PREDICATE_MESSAGE,
    RANGE_MESSAGE,
    REQUIRED_MESSAGE,
    SCHEMA_MESSAGE,
    STRING_LENGTH_MESSAGE,
    STRING_LENGTH_RANGE_MESSAGE,
    URL_MESSAGE,
    URL_SCHEMES,
)
from strategy_validation.config.schemas import CONSTRAINT_SPEC_SCHEMA
from strategy_validation.validation.errors import InvalidArgumentError

_EMAIL_RE = re.compile(EMAIL_PATTERN)


class Constraint:
    """Base class: subclasses set ``default_message`` and implement ``is_valid``."""

    default_message: str = PREDICATE_MESSAGE

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message

    def is_valid(self, value: Any) -> bool:  # pragma: no cover - abstract
        raise NotImplementedError

    def template_args(self) -> dict:
        """Extra placeholders available to the message template."""
        return {}

    def format_error_message(self, field_name: str) -> str:
        template = self.message or self.default_message
        return template.format(field=field_name, **self.template_args())

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.template_args().items())
        return f"{type(self).__name__}({args})"


class Required(Constraint):
    default_message = REQUIRED_MESSAGE

    def __init__(self, allow_empty_strings: bool = False, message: Optional[str] = None) -> None:
        super().__init__(message)
        self.allow_empty_strings = allow_empty_strings

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str) and not self.allow_empty_strings:
            return value.strip() != ""
        return True


class Range(Constraint):
    """Inclusive bounds. Values that cannot be compared to the bounds fail."""

    default_message = RANGE_MESSAGE

    def __init__(self, minimum: Any, maximum: Any, message: Optional[str] = None) -> None:
        super().__init__(message)
        if minimum > maximum:
            raise InvalidArgumentError("minimum", "Range minimum cannot exceed maximum")
        self.minimum = minimum
        self.maximum = maximum

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, bool):
            return False
        try:
            return self.minimum <= value <= self.maximum
        except TypeError:
            return False

    def template_args(self) -> dict:
        return {"minimum": self.minimum, "maximum": self.maximum}


class StringLength(Constraint):
    default_message = STRING_LENGTH_MESSAGE

    def __init__(self, maximum: int, minimum: int = 0, message: Optional[str] = None) -> None:
        super().__init__(message)
        if minimum < 0 or maximum < minimum:
            raise InvalidArgumentError("maximum", "StringLength bounds must satisfy 0 <= minimum <= maximum")
        self.maximum = maximum
        self.minimum = minimum
        if minimum and message is None:
            self.default_message = STRING_LENGTH_RANGE_MESSAGE

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        if not isinstance(value, str):
            return False
        return self.minimum <= len(value) <= self.maximum

    def template_args(self) -> dict:
        return {"minimum": self.minimum, "maximum": self.maximum}


class Pattern(Constraint):
    """The whole string must match, not just a prefix."""

    default_message = PATTERN_MESSAGE

    def __init__(self, pattern: str, flags: int = 0, message: Optional[str] = None) -> None:
        super().__init__(message)
        try:
            self._regex = re.compile(pattern, flags)
        except re.error as exc:
            raise InvalidArgumentError("pattern", f"Invalid regular expression: {exc}") from exc
        self.pattern = pattern

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        return self._regex.fullmatch(str(value)) is not None

    def template_args(self) -> dict:
        return {"pattern": self.pattern}


class Email(Constraint):
    default_message = EMAIL_MESSAGE

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and _EMAIL_RE.match(value) is not None


class Url(Constraint):
    default_message = URL_MESSAGE

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        if not isinstance(value, str):
            return False
        parsed = urlparse(value)
        return parsed.scheme in URL_SCHEMES and bool(parsed.netloc)


class OneOf(Constraint):
    default_message = ONE_OF_MESSAGE

    def __init__(self, choices: Iterable[Any], message: Optional[str] = None) -> None:
        super().__init__(message)
        self.choices = tuple(choices)
        if not self.choices:
            raise InvalidArgumentError("choices", "OneOf needs at least one choice")

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        return value in self.choices

    def template_args(self) -> dict:
        return {"choices": ", ".join(str(c) for c in self.choices)}


class MatchesSchema(Constraint):
    """Validates structured values (dicts, lists) against a JSON Schema."""

    default_message = SCHEMA_MESSAGE

    def __init__(self, schema: dict, message: Optional[str] = None) -> None:
        super().__init__(message)
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise InvalidArgumentError("schema", f"Invalid JSON Schema: {e.message}") from e
        self.schema = schema
        self._validator = Draft202012Validator(schema)

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        return self._validator.is_valid(value)

    def __repr__(self) -> str:
        return f"MatchesSchema(schema={self.schema!r})"


class Predicate(Constraint):
    def __init__(self, fn: Callable[[Any], bool], message: Optional[str] = None) -> None:
        super().__init__(message)
        if not callable(fn):
            raise InvalidArgumentError("fn", "Predicate requires a callable")
        self.fn = fn

    def is_valid(self, value: Any) -> bool:
        return bool(self.fn(value))

    def __repr__(self) -> str:
        return f"Predicate(fn={getattr(self.fn, '__name__', self.fn)!r})"


# =============================================================================
# Declarative specs
# =============================================================================

_SPEC_VALIDATOR = Draft202012Validator(CONSTRAINT_SPEC_SCHEMA)


def constraint_from_spec(spec: dict) -> Constraint:
    """
    Build a constraint from a declarative spec dict.

    Args:
        spec: e.g. ``{"kind": "string_length", "maximum": 50}``.

    Raises:
        InvalidArgumentError: If the spec does not conform to
            CONSTRAINT_SPEC_SCHEMA.
    """
    try:
        _SPEC_VALIDATOR.validate(spec)
    except SchemaViolation as e:
        raise InvalidArgumentError("spec", f"Invalid constraint spec: {e.message}") from e

    kind = spec["kind"]
    message = spec.get("message")

    if kind == "required":
        return Required(spec.get("allow_empty_strings", False), message=message)
    if kind == "range":
        return Range(spec["minimum"], spec["maximum"], message=message)
    if kind == "string_length":
        return StringLength(spec["maximum"], spec.get("minimum", 0), message=message)
    if kind == "pattern":
        return Pattern(spec["pattern"], message=message)
    if kind == "email":
        return Email(message=message)
    if kind == "url":
        return Url(message=message)
    if kind == "one_of":
        return OneOf(spec["choices"], message=message)
    return MatchesSchema(spec["schema"], message=message)


def is_constraint(item: Any) -> bool:
    """True for objects exposing the two-method constraint contract."""
    return (
        not isinstance(item, type)
        and callable(getattr(item, "is_valid", None))
        and callable(getattr(item, "format_error_message", None))
    )


def as_constraint(item: Any) -> Constraint:
    """Accept a constraint-like object or a spec dict."""
    if isinstance(item, dict):
        return constraint_from_spec(item)
    if is_constraint(item):
        return item
    raise InvalidArgumentError(
        "constraint",
        f"Expected a constraint or spec dict, got {type(item).__name__}",
    )
