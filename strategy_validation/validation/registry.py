"""
Strategy registry — type-keyed store of custom validation procedures.

Two independent slots per type: one sync strategy and one async strategy.
Registering again for the same type replaces the previous strategy (last
write wins).

Lookup is by exact class identity. A strategy registered for ``Base`` is
NOT applied to instances of ``Derived(Base)``; callers wanting the base
strategy must dispatch with ``model_type=Base`` explicitly.

Registration is expected during single-threaded startup. Concurrent
registration and lookup is not synchronised here; guard it externally if
strategies are registered after the registry is shared.
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Union, runtime_checkable

from strategy_validation.models.validation_result import ValidationResult
from strategy_validation.validation.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Strategy capabilities
# ---------------------------------------------------------------------------

@runtime_checkable
class ValidationStrategy(Protocol):
    def validate(self, value: Any) -> ValidationResult: ...


@runtime_checkable
class AsyncValidationStrategy(Protocol):
    async def validate_async(self, value: Any) -> ValidationResult: ...


SyncStrategyLike = Union[ValidationStrategy, Callable[[Any], ValidationResult]]
AsyncStrategyLike = Union[AsyncValidationStrategy, Callable[[Any], Awaitable[ValidationResult]]]


class FunctionStrategy:
    """Adapts a plain ``fn(value) -> ValidationResult`` to ValidationStrategy."""

    def __init__(self, fn: Callable[[Any], ValidationResult]) -> None:
        self.fn = fn

    def validate(self, value: Any) -> ValidationResult:
        return self.fn(value)

    def __repr__(self) -> str:
        return f"FunctionStrategy({getattr(self.fn, '__name__', self.fn)!r})"


class AsyncFunctionStrategy:
    """
    Adapts a callable to AsyncValidationStrategy.

    The callable may be a coroutine function or return a plain
    ValidationResult; non-awaitable results are passed through.
    """

    def __init__(self, fn: Callable[[Any], Any]) -> None:
        self.fn = fn

    async def validate_async(self, value: Any) -> ValidationResult:
        outcome = self.fn(value)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return outcome

    def __repr__(self) -> str:
        return f"AsyncFunctionStrategy({getattr(self.fn, '__name__', self.fn)!r})"


def _check_model_type(model_type: Any) -> None:
    if not isinstance(model_type, type):
        raise InvalidArgumentError("model_type", "Strategies must be registered for a class")


def _as_sync_strategy(strategy: Any) -> ValidationStrategy:
    if strategy is None:
        raise InvalidArgumentError("strategy", "Validation strategy cannot be None")
    if callable(getattr(strategy, "validate", None)):
        return strategy
    if callable(strategy):
        return FunctionStrategy(strategy)
    raise InvalidArgumentError("strategy", f"{type(strategy).__name__} is not a validation strategy")


def _as_async_strategy(strategy: Any) -> AsyncValidationStrategy:
    if strategy is None:
        raise InvalidArgumentError("strategy", "Validation strategy cannot be None")
    if callable(getattr(strategy, "validate_async", None)):
        return strategy
    if callable(strategy):
        return AsyncFunctionStrategy(strategy)
    raise InvalidArgumentError("strategy", f"{type(strategy).__name__} is not an async validation strategy")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class StrategyRegistry:
    """Maps a class to at most one sync and one async custom strategy."""

    def __init__(self) -> None:
        self._sync: Dict[type, ValidationStrategy] = {}
        self._async: Dict[type, AsyncValidationStrategy] = {}

    def register_strategy(self, model_type: type, strategy: SyncStrategyLike) -> None:
        """
        Store the sync strategy for *model_type*, replacing any previous one.

        Raises:
            InvalidArgumentError: If *strategy* is None or not usable.
        """
        _check_model_type(model_type)
        adapted = _as_sync_strategy(strategy)
        if model_type in self._sync:
            logger.info("Replacing sync validation strategy for %s", model_type.__name__)
        self._sync[model_type] = adapted
        logger.debug("Registered sync strategy %r for %s", adapted, model_type.__name__)

    def register_async_strategy(self, model_type: type, strategy: AsyncStrategyLike) -> None:
        """Same as register_strategy, for the async slot."""
        _check_model_type(model_type)
        adapted = _as_async_strategy(strategy)
        if model_type in self._async:
            logger.info("Replacing async validation strategy for %s", model_type.__name__)
        self._async[model_type] = adapted
        logger.debug("Registered async strategy %r for %s", adapted, model_type.__name__)

    def strategy_for(self, model_type: type) -> Callable:
        """Decorator form of register_strategy."""
        def decorator(fn):
            self.register_strategy(model_type, fn)
            return fn
        return decorator

    def async_strategy_for(self, model_type: type) -> Callable:
        """Decorator form of register_async_strategy."""
        def decorator(fn):
            self.register_async_strategy(model_type, fn)
            return fn
        return decorator

    def get_strategy(self, model_type: type) -> Optional[ValidationStrategy]:
        return self._sync.get(model_type)

    def get_async_strategy(self, model_type: type) -> Optional[AsyncValidationStrategy]:
        return self._async.get(model_type)

    def registered_types(self) -> List[type]:
        """Every class with at least one strategy, in first-registration order."""
        seen = dict.fromkeys(self._sync)
        seen.update(dict.fromkeys(self._async))
        return list(seen)

    def unregister(self, model_type: type) -> bool:
        """Drop both slots for *model_type*. Returns True if anything was removed."""
        removed_sync = self._sync.pop(model_type, None) is not None
        removed_async = self._async.pop(model_type, None) is not None
        return removed_sync or removed_async

    def clear(self) -> None:
        self._sync.clear()
        self._async.clear()

    def __contains__(self, model_type: object) -> bool:
        return model_type in self._sync or model_type in self._async
