"""
Shared test fixtures for the validation engine test suite.
"""
import pytest

from strategy_validation.models.validation_result import ValidationResult
from strategy_validation.validation.default_strategy import DefaultValidationStrategy
from strategy_validation.validation.dispatcher import ErrorOrder, StrategyValidator
from strategy_validation.validation.registry import StrategyRegistry


# ==========================================================================
# Engine components
# ==========================================================================

@pytest.fixture
def registry():
    return StrategyRegistry()


@pytest.fixture
def default_strategy():
    return DefaultValidationStrategy()


@pytest.fixture
def validator(registry, default_strategy):
    """Validator with settings pinned so tests do not depend on the environment."""
    return StrategyValidator(
        registry=registry,
        default_strategy=default_strategy,
        async_error_order=ErrorOrder.CUSTOM_FIRST,
        async_timeout=0,
        offload_default=True,
    )


@pytest.fixture
def default_first_validator(registry, default_strategy):
    return StrategyValidator(
        registry=registry,
        default_strategy=default_strategy,
        async_error_order=ErrorOrder.DEFAULT_FIRST,
        async_timeout=0,
    )


# ==========================================================================
# Strategies
# ==========================================================================

@pytest.fixture
def bad_field_strategy():
    """Sync strategy that always reports 'bad field' against field 'x'."""
    def strategy(_value) -> ValidationResult:
        return ValidationResult().add_error("x", "bad field")
    return strategy


@pytest.fixture
def bad_field_async_strategy():
    async def strategy(_value) -> ValidationResult:
        return ValidationResult().add_error("x", "bad field")
    return strategy


@pytest.fixture
def passing_strategy():
    def strategy(_value) -> ValidationResult:
        return ValidationResult.success()
    return strategy
