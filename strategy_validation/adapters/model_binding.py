"""
Model-Binding Adapter — validation gate in front of request handlers.

Pattern: every bound argument of a request is dispatched to the
StrategyValidator by its runtime type. Failures are copied into a
ModelState error dictionary; if any argument fails, the request is
short-circuited with a ModelBindingError carrying a 400-class response,
so handler code only ever sees validated input.

Key scheme
----------
  {key_prefix}{field}   – one entry per failing field, messages in order

The adapter is framework-agnostic: hosts translate ModelBindingError (or
its ``to_response()`` payload) into their own response type.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from strategy_validation.models.responses import BadRequestResponse
from strategy_validation.models.validation_result import ValidationResult
from strategy_validation.validation.dispatcher import StrategyValidator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error dictionary
# ---------------------------------------------------------------------------

class ModelState:
    """Ordered ``key -> [messages]`` error dictionary for one request."""

    def __init__(self) -> None:
        self._errors: Dict[str, List[str]] = {}

    def add_model_error(self, key: str, message: str) -> None:
        self._errors.setdefault(key, []).append(message)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def error_count(self) -> int:
        return sum(len(m) for m in self._errors.values())

    def __getitem__(self, key: str) -> List[str]:
        return list(self._errors.get(key, []))

    def __contains__(self, key: object) -> bool:
        return key in self._errors

    def to_dict(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self._errors.items()}

    def __repr__(self) -> str:
        return f"ModelState(errors={self._errors!r})"


# ---------------------------------------------------------------------------
# Custom exception
# ---------------------------------------------------------------------------

class ModelBindingError(Exception):
    """Raised when one or more bound arguments fail validation."""

    def __init__(self, model_state: ModelState) -> None:
        self.model_state = model_state
        super().__init__(f"Model binding validation failed: {model_state.to_dict()}")

    def to_response(self) -> BadRequestResponse:
        return BadRequestResponse(errors=self.model_state.to_dict())


# ---------------------------------------------------------------------------
# Core adapter
# ---------------------------------------------------------------------------

def add_validation_result(
    model_state: ModelState,
    result: ValidationResult,
    key_prefix: str = "",
) -> None:
    """Copy every error of *result* into *model_state* under ``key_prefix + field``."""
    if result.is_valid:
        return
    for error in result.errors:
        model_state.add_model_error(f"{key_prefix}{error.field}", error.message)


def validate_arguments(
    validator: StrategyValidator,
    arguments: Mapping[str, Any],
    model_state: Optional[ModelState] = None,
    key_prefix: str = "",
) -> ModelState:
    """
    Validate each bound argument by its runtime type.

    Args:
        validator:   The dispatch engine.
        arguments:   ``{argument_name: value}`` as bound by the host.
        model_state: Existing error dictionary to extend; a new one if None.
        key_prefix:  Prepended to every error key.

    Returns:
        The model state; ``is_valid`` is False if any argument failed.
    """
    state = model_state if model_state is not None else ModelState()
    for name, argument in arguments.items():
        if argument is None:
            logger.debug("ModelBinding: argument '%s' is None, skipped", name)
            continue
        result = validator.validate(argument, type(argument))
        add_validation_result(state, result, key_prefix)
    return state


async def validate_arguments_async(
    validator: StrategyValidator,
    arguments: Mapping[str, Any],
    model_state: Optional[ModelState] = None,
    key_prefix: str = "",
) -> ModelState:
    """Async counterpart of validate_arguments; arguments are validated in order."""
    state = model_state if model_state is not None else ModelState()
    for name, argument in arguments.items():
        if argument is None:
            logger.debug("ModelBinding: argument '%s' is None, skipped", name)
            continue
        result = await validator.validate_async(argument, type(argument))
        add_validation_result(state, result, key_prefix)
    return state


def ensure_valid_arguments(
    validator: StrategyValidator,
    arguments: Mapping[str, Any],
    key_prefix: str = "",
) -> None:
    """
    Validate bound arguments and short-circuit the request on failure.

    Raises:
        ModelBindingError: If any argument produced validation errors.
    """
    state = validate_arguments(validator, arguments, key_prefix=key_prefix)
    _raise_if_invalid(state)


async def ensure_valid_arguments_async(
    validator: StrategyValidator,
    arguments: Mapping[str, Any],
    key_prefix: str = "",
) -> None:
    state = await validate_arguments_async(validator, arguments, key_prefix=key_prefix)
    _raise_if_invalid(state)


def _raise_if_invalid(state: ModelState) -> None:
    if state.is_valid:
        return
    logger.warning(
        "ModelBinding rejected request: %d error(s) on %s",
        state.error_count, sorted(state.to_dict()),
    )
    raise ModelBindingError(state)
