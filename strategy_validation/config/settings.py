"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# --- Async dispatch ---
# Seconds a custom async strategy may run before StrategyTimeoutError; 0 disables.
VALIDATION_ASYNC_TIMEOUT_SECONDS: float = float(os.getenv("VALIDATION_ASYNC_TIMEOUT_SECONDS", "0"))
# "custom_first" keeps the historical async ordering, "default_first" matches the sync path.
VALIDATION_ASYNC_ERROR_ORDER: str = os.getenv("VALIDATION_ASYNC_ERROR_ORDER", "custom_first")
# Run the structural validator in an executor on the async path.
VALIDATION_OFFLOAD_DEFAULT: bool = os.getenv("VALIDATION_OFFLOAD_DEFAULT", "true").lower() == "true"
