"""
JSON Schemas for declarative constraint specs.

A spec is a plain dict such as ``{"kind": "range", "minimum": 1, "maximum": 5}``
and is how constraints are declared from configuration instead of code.
Kind-specific parameters are enforced with ``if``/``then`` branches so a
malformed spec is rejected before any constraint object is built.
"""
from strategy_validation.config.constants import CONSTRAINT_KINDS


def _requires(kind: str, *params: str, **param_types: str) -> dict:
    then: dict = {"required": list(params)}
    if param_types:
        then["properties"] = {name: {"type": t} for name, t in param_types.items()}
    return {
        "if": {"properties": {"kind": {"const": kind}}},
        "then": then,
    }


CONSTRAINT_SPEC_SCHEMA: dict = {
    "type": "object",
    "required": ["kind"],
    "properties": {
        "kind": {
            "type": "string",
            "enum": CONSTRAINT_KINDS,
            "description": "Constraint kind to build",
        },
        "message": {
            "type": "string",
            "minLength": 1,
            "description": "Optional message template; {field} is substituted",
        },
        "allow_empty_strings": {"type": "boolean"},
        "minimum": {"type": ["number", "string"]},
        "maximum": {"type": ["number", "string"]},
        "pattern": {"type": "string", "minLength": 1},
        "choices": {"type": "array", "minItems": 1},
        "schema": {"type": "object"},
    },
    "allOf": [
        _requires("range", "minimum", "maximum"),
        _requires("string_length", "maximum", minimum="integer", maximum="integer"),
        _requires("pattern", "pattern"),
        _requires("one_of", "choices"),
        _requires("schema", "schema"),
    ],
    "additionalProperties": False,
}