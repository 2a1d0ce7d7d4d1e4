"""
Prometheus Metrics — validation engine observability.

Exposes counters and histograms for:
- Validation runs per entry point and outcome
- Errors per validated type and source (default / custom strategy)
- Faults raised by custom strategies (exceptions, timeouts)
- Dispatch latency per entry point

Usage
-----
    from strategy_validation.validation.metrics import record_run, timed_validation

    with timed_validation("sync"):
        result = validator.validate(payload)

    record_run("sync", result.is_valid)
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram

# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

# Validation calls, labelled by entry point ("sync" / "async") and outcome.
VALIDATION_RUNS: Counter = Counter(
    "strategy_validation_runs_total",
    "Total validation calls by entry point and outcome",
    ["mode", "outcome"],
)

# Errors reported, labelled by validated type and by who reported them.
VALIDATION_ERRORS: Counter = Counter(
    "strategy_validation_errors_total",
    "Total validation errors by model type and source (default / custom)",
    ["model_type", "source"],
)

# Exceptions or timeouts raised by custom strategies.
STRATEGY_FAULTS: Counter = Counter(
    "strategy_validation_strategy_faults_total",
    "Custom strategy faults (exceptions and timeouts) by model type and entry point",
    ["model_type", "mode"],
)

# Dispatch latency (seconds).
VALIDATION_LATENCY: Histogram = Histogram(
    "strategy_validation_duration_seconds",
    "Validation dispatch time in seconds",
    ["mode"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------

def record_run(mode: str, is_valid: bool) -> None:
    """Increment the run counter for *mode* with a valid/invalid outcome."""
    VALIDATION_RUNS.labels(mode=mode, outcome="valid" if is_valid else "invalid").inc()


def record_errors(model_type: type, source: str, count: int) -> None:
    """Add *count* errors for *model_type* reported by *source*."""
    if count:
        VALIDATION_ERRORS.labels(model_type=model_type.__name__, source=source).inc(count)


def record_strategy_fault(model_type: type, mode: str) -> None:
    STRATEGY_FAULTS.labels(model_type=model_type.__name__, mode=mode).inc()


@contextmanager
def timed_validation(mode: str) -> Generator[None, None, None]:
    """
    Context manager that records dispatch latency.

    Usage::

        with timed_validation("async"):
            result = await validator.validate_async(payload)
    """
    with VALIDATION_LATENCY.labels(mode=mode).time():
        yield
