"""
Dispatch Engine — main entry point for validating a value.

For a value of type T (``model_type``, defaulting to ``type(value)``):
    1. Structural validation (DefaultValidationStrategy, always runs)
    2. Custom strategy lookup in the StrategyRegistry (exact type match)
    3. Merge of both outcomes into one ValidationResult

Error order
-----------
    validate()        default errors, then custom errors
    validate_async()  custom errors, then default errors (ErrorOrder.CUSTOM_FIRST)

The async order is configurable (``ErrorOrder.DEFAULT_FIRST`` makes both
entry points agree); the historical asymmetry stays the default.

A missing custom strategy is not an error: the result then carries the
structural findings only. Exceptions raised inside a custom strategy are
defects and propagate to the caller unchanged.
"""
import asyncio
import logging
import time
from concurrent.futures import Executor
from enum import Enum
from typing import Any, Optional

from strategy_validation.config.constants import ERROR_ORDER_CUSTOM_FIRST, ERROR_ORDER_DEFAULT_FIRST
from strategy_validation.models.validation_result import ValidationResult
from strategy_validation.validation.default_strategy import DefaultValidationStrategy
from strategy_validation.validation.errors import InvalidArgumentError, StrategyTimeoutError
from strategy_validation.validation.metrics import (
    record_errors,
    record_run,
    record_strategy_fault,
    timed_validation,
)
from strategy_validation.validation.registry import (
    AsyncStrategyLike,
    AsyncValidationStrategy,
    StrategyRegistry,
    SyncStrategyLike,
    ValidationStrategy,
)

logger = logging.getLogger(__name__)


class ErrorOrder(str, Enum):
    CUSTOM_FIRST = ERROR_ORDER_CUSTOM_FIRST
    DEFAULT_FIRST = ERROR_ORDER_DEFAULT_FIRST


def _checked(outcome: Any, strategy: Any, model_type: type) -> ValidationResult:
    if not isinstance(outcome, ValidationResult):
        raise TypeError(
            f"Strategy {strategy!r} for {model_type.__name__} returned "
            f"{type(outcome).__name__}, expected ValidationResult"
        )
    return outcome


class StrategyValidator:
    """
    Validates values against structural constraints plus registered strategies.

    Args:
        registry: Strategy store. A fresh empty registry if omitted.
        default_strategy: Structural validator. A fresh one if omitted.
        async_error_order: Merge order on the async path. Defaults to
            VALIDATION_ASYNC_ERROR_ORDER.
        async_timeout: Seconds allowed for a custom async strategy; 0 means
            unbounded, negative values are rejected. Defaults to
            VALIDATION_ASYNC_TIMEOUT_SECONDS.
        offload_default: Run structural validation in an executor on the
            async path. Defaults to VALIDATION_OFFLOAD_DEFAULT.
        executor: Executor used for offloading (loop default if None).
    """

    def __init__(
        self,
        registry: Optional[StrategyRegistry] = None,
        default_strategy: Optional[DefaultValidationStrategy] = None,
        async_error_order: Optional[ErrorOrder] = None,
        async_timeout: Optional[float] = None,
        offload_default: Optional[bool] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        from strategy_validation.config.settings import (
            VALIDATION_ASYNC_ERROR_ORDER,
            VALIDATION_ASYNC_TIMEOUT_SECONDS,
            VALIDATION_OFFLOAD_DEFAULT,
        )

        self.registry = registry if registry is not None else StrategyRegistry()
        self.default_strategy = default_strategy if default_strategy is not None else DefaultValidationStrategy()
        self.async_error_order = ErrorOrder(async_error_order or VALIDATION_ASYNC_ERROR_ORDER)
        if async_timeout is None:
            async_timeout = VALIDATION_ASYNC_TIMEOUT_SECONDS
        if async_timeout < 0:
            raise InvalidArgumentError("async_timeout", "Timeout cannot be negative; use 0 for no limit")
        self.async_timeout = async_timeout if async_timeout > 0 else None
        self.offload_default = VALIDATION_OFFLOAD_DEFAULT if offload_default is None else offload_default
        self._executor = executor

    # ==================================================================
    # Registration (delegates to the registry / default strategy)
    # ==================================================================

    def register_strategy(self, model_type: type, strategy: SyncStrategyLike) -> None:
        self.registry.register_strategy(model_type, strategy)

    def register_async_strategy(self, model_type: type, strategy: AsyncStrategyLike) -> None:
        self.registry.register_async_strategy(model_type, strategy)

    def declare_constraints(self, model_type: type, rules: dict) -> None:
        self.default_strategy.declare(model_type, rules)

    # ==================================================================
    # Sync path
    # ==================================================================

    def validate(self, value: Any, model_type: Optional[type] = None) -> ValidationResult:
        """
        Validate *value* synchronously.

        Returns:
            ValidationResult: structural errors first, then custom ones.

        Raises:
            InvalidArgumentError: If *value* is None.
            TypeError: If *value* is not an instance of *model_type*, or the
                custom strategy returns something other than a ValidationResult.
        """
        target = self._resolve_target(value, model_type)
        start_time = time.monotonic()

        with timed_validation("sync"):
            result = self.default_strategy.validate(value, target)
            record_errors(target, "default", len(result.errors))

            strategy = self.registry.get_strategy(target)
            if strategy is not None:
                custom = self._run_sync_strategy(strategy, value, target)
                record_errors(target, "custom", len(custom.errors))
                result.merge(custom)

        record_run("sync", result.is_valid)
        logger.debug(
            "Validated %s (sync): valid=%s errors=%d custom=%s in %.2fms",
            target.__name__, result.is_valid, len(result.errors),
            strategy is not None, (time.monotonic() - start_time) * 1000,
        )
        return result

    def _run_sync_strategy(
        self, strategy: ValidationStrategy, value: Any, target: type
    ) -> ValidationResult:
        try:
            return _checked(strategy.validate(value), strategy, target)
        except Exception:
            record_strategy_fault(target, "sync")
            logger.exception("Sync validation strategy for %s raised", target.__name__)
            raise

    # ==================================================================
    # Async path
    # ==================================================================

    async def validate_async(
        self,
        value: Any,
        model_type: Optional[type] = None,
        *,
        timeout: Optional[float] = None,
    ) -> ValidationResult:
        """
        Validate *value*, awaiting the custom async strategy if one is registered.

        Args:
            value: Object to validate. Must not be None.
            model_type: Lookup key; defaults to ``type(value)``.
            timeout: Seconds allowed for the custom strategy. Overrides the
                validator's ``async_timeout`` when given; must be positive.

        Returns:
            ValidationResult merged according to ``async_error_order``.

        Raises:
            InvalidArgumentError: If *value* is None or *timeout* is not positive.
            StrategyTimeoutError: If the custom strategy exceeds the timeout.
            asyncio.CancelledError: If the awaiting task is cancelled.
        """
        target = self._resolve_target(value, model_type)
        if timeout is not None and timeout <= 0:
            raise InvalidArgumentError("timeout", "Timeout must be a positive number of seconds")
        effective_timeout = timeout if timeout is not None else self.async_timeout
        start_time = time.monotonic()

        with timed_validation("async"):
            custom: Optional[ValidationResult] = None
            strategy = self.registry.get_async_strategy(target)
            if strategy is not None:
                custom = await self._run_async_strategy(strategy, value, target, effective_timeout)
                record_errors(target, "custom", len(custom.errors))

            structural = await self._run_default_async(value, target)
            record_errors(target, "default", len(structural.errors))

            result = ValidationResult()
            if self.async_error_order is ErrorOrder.CUSTOM_FIRST:
                if custom is not None:
                    result.merge(custom)
                result.merge(structural)
            else:
                result.merge(structural)
                if custom is not None:
                    result.merge(custom)

        record_run("async", result.is_valid)
        logger.debug(
            "Validated %s (async): valid=%s errors=%d custom=%s in %.2fms",
            target.__name__, result.is_valid, len(result.errors),
            strategy is not None, (time.monotonic() - start_time) * 1000,
        )
        return result

    async def _run_async_strategy(
        self,
        strategy: AsyncValidationStrategy,
        value: Any,
        target: type,
        timeout: Optional[float],
    ) -> ValidationResult:
        try:
            if timeout is None:
                outcome = await strategy.validate_async(value)
            else:
                outcome = await self._await_within(strategy.validate_async(value), target, timeout)
        except StrategyTimeoutError:
            raise
        except Exception:
            record_strategy_fault(target, "async")
            logger.exception("Async validation strategy for %s raised", target.__name__)
            raise
        return _checked(outcome, strategy, target)

    @staticmethod
    async def _await_within(awaitable: Any, target: type, timeout: float) -> Any:
        """
        Await *awaitable* for at most *timeout* seconds.

        Only the expiry of this deadline becomes StrategyTimeoutError; any
        exception raised by the strategy itself (a TimeoutError included)
        comes out of ``task.result()`` unchanged.
        """
        task = asyncio.ensure_future(awaitable)
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise
        if task in done:
            return task.result()

        task.cancel()
        record_strategy_fault(target, "async")
        logger.error(
            "Async validation strategy for %s timed out after %ss",
            target.__name__, timeout,
        )
        raise StrategyTimeoutError(target, timeout)

    async def _run_default_async(self, value: Any, target: type) -> ValidationResult:
        if not self.offload_default:
            return self.default_strategy.validate(value, target)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.default_strategy.validate, value, target)

    # ==================================================================
    # Helpers
    # ==================================================================

    @staticmethod
    def _resolve_target(value: Any, model_type: Optional[type]) -> type:
        if value is None:
            raise InvalidArgumentError("value", "Validation target cannot be None")
        if model_type is None:
            return type(value)
        if not isinstance(model_type, type):
            raise TypeError(f"model_type must be a class, got {model_type!r}")
        if not isinstance(value, model_type):
            raise TypeError(
                f"Cannot validate {type(value).__name__} as {model_type.__name__}"
            )
        return model_type


def build_strategy_validator(**kwargs: Any) -> StrategyValidator:
    """Wire a validator with a fresh registry and default strategy."""
    return StrategyValidator(
        registry=StrategyRegistry(),
        default_strategy=DefaultValidationStrategy(),
        **kwargs,
    )
