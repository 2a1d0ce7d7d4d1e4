"""
Constants used across the validation engine.
Message templates mirror the DataAnnotations wording so errors read the
same regardless of which constraint produced them.
"""
from typing import List

# =============================================================================
# Constraint message templates ({field} is always available)
# =============================================================================
REQUIRED_MESSAGE: str = "The {field} field is required."
RANGE_MESSAGE: str = "The field {field} must be between {minimum} and {maximum}."
STRING_LENGTH_MESSAGE: str = "The field {field} must be a string with a maximum length of {maximum}."
STRING_LENGTH_RANGE_MESSAGE: str = (
    "The field {field} must be a string with a minimum length of {minimum} "
    "and a maximum length of {maximum}."
)
PATTERN_MESSAGE: str = "The field {field} must match the regular expression '{pattern}'."
EMAIL_MESSAGE: str = "The {field} field is not a valid e-mail address."
URL_MESSAGE: str = "The {field} field is not a valid fully-qualified http, https, or ftp URL."
ONE_OF_MESSAGE: str = "The field {field} must be one of: {choices}."
SCHEMA_MESSAGE: str = "The field {field} does not conform to the expected schema."
PREDICATE_MESSAGE: str = "The field {field} is invalid."

# =============================================================================
# Patterns
# =============================================================================
EMAIL_PATTERN: str = r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,}$"
ALPHANUMERIC_PATTERN: str = r"^[a-zA-Z0-9]+$"
# At least one digit and one non-word character.
PASSWORD_PATTERN: str = r"^(?=.*\d)(?=.*\W).+$"

URL_SCHEMES: List[str] = ["http", "https", "ftp"]

# =============================================================================
# Declarative constraint kinds (see config/schemas.py)
# =============================================================================
CONSTRAINT_KINDS: List[str] = [
    "required",
    "range",
    "string_length",
    "pattern",
    "email",
    "url",
    "one_of",
    "schema",
]

# =============================================================================
# Dispatch
# =============================================================================
ERROR_ORDER_CUSTOM_FIRST: str = "custom_first"
ERROR_ORDER_DEFAULT_FIRST: str = "default_first"

DEFAULT_BAD_REQUEST_TITLE: str = "One or more validation errors occurred."
