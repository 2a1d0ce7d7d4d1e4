"""
Exceptions raised for API misuse and broken strategies.

Validation failures are never raised: they are values collected in a
ValidationResult. The exceptions here signal that the caller or a
registered strategy is at fault.
"""
from typing import Optional


class InvalidArgumentError(ValueError):
    """Raised when an engine operation receives an argument it cannot accept."""

    def __init__(self, argument: str, message: str) -> None:
        self.argument = argument
        super().__init__(f"{message} (argument: '{argument}')")


class StrategyTimeoutError(TimeoutError):
    """Raised when a custom async strategy does not finish within its timeout."""

    def __init__(self, model_type: type, timeout: Optional[float]) -> None:
        self.model_type = model_type
        self.timeout = timeout
        super().__init__(
            f"Async validation strategy for {model_type.__name__} "
            f"did not complete within {timeout}s"
        )
