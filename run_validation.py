"""
Demo run of the strategy validation engine.

Reads (optional):
  - argv[1]: JSON file with a "customer" object to validate

Produces:
  - a sync and an async ValidationReport printed as JSON
"""
import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional

from strategy_validation.config.settings import LOG_LEVEL

# ---------------------------------------------------------------------------
# Setup logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger("run_validation")

from strategy_validation.models.constraints import Email, Range, Required, StringLength
from strategy_validation.models.responses import ValidationReport
from strategy_validation.models.validation_result import ValidationResult
from strategy_validation.validation import checks
from strategy_validation.validation.dispatcher import build_strategy_validator


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------
@dataclass
class Customer:
    name: Annotated[Optional[str], Required(), StringLength(50)] = None
    email: Annotated[Optional[str], Required(), Email()] = None
    age: Annotated[Optional[int], Range(18, 120)] = None
    country: Optional[str] = None


SAMPLE_CUSTOMER = {"name": "", "email": "mario.rossi@example", "age": 17, "country": "IT"}

# ---------------------------------------------------------------------------
# Load input
# ---------------------------------------------------------------------------
if len(sys.argv) > 1:
    input_file = Path(sys.argv[1])
    logger.info("Loading input from %s", input_file)
    with open(input_file, encoding="utf-8") as f:
        raw: dict = json.load(f)["customer"]
else:
    logger.info("No input file given, using the built-in sample")
    raw = SAMPLE_CUSTOMER

customer = Customer(**raw)

# ---------------------------------------------------------------------------
# Validator wiring
# ---------------------------------------------------------------------------
validator = build_strategy_validator(async_timeout=2.0)
validator.declare_constraints(Customer, {"country": [{"kind": "one_of", "choices": ["IT", "IE", "GB"]}]})


@validator.registry.strategy_for(Customer)
def customer_rules(c: Customer) -> ValidationResult:
    return checks.combine(
        checks.is_alphanumeric(c.country, "country"),
    )


@validator.registry.async_strategy_for(Customer)
async def customer_rules_async(c: Customer) -> ValidationResult:
    # Stands in for a remote uniqueness lookup.
    await asyncio.sleep(0.01)
    if c.email and c.email.endswith("@example"):
        return ValidationResult().add_error("email", "The email domain is not accepted.")
    return ValidationResult.success()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
sync_result = validator.validate(customer)
async_result = asyncio.run(validator.validate_async(customer))

logger.info("sync  : valid=%s errors=%d", sync_result.is_valid, len(sync_result.errors))
logger.info("async : valid=%s errors=%d", async_result.is_valid, len(async_result.errors))

print("\n" + "=" * 70)
print("VALIDATION RESULT — SUMMARY")
print("=" * 70)
print("sync:")
print(ValidationReport.from_result(sync_result).model_dump_json(indent=2))
print("async:")
print(ValidationReport.from_result(async_result).model_dump_json(indent=2))
print("=" * 70 + "\n")
