"""
Default Structural Validator — type-agnostic, constraint-driven validation.

For any instance it:
    1. Enumerates the declared public fields of the target type
       (annotations across the MRO, base class fields first).
    2. Collects the constraints attached to each field, from
       ``typing.Annotated`` metadata and from rules declared with
       ``DefaultValidationStrategy.declare`` on the type or any base class.
    3. Evaluates every constraint against the field's current value.
    4. Records one error per failing constraint, keyed by field name.

Field descriptors are compiled once per type and cached, so steady-state
validation does no annotation parsing.
"""
from __future__ import annotations

import inspect
import logging
import sys
import typing
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from strategy_validation.models.constraints import Constraint, as_constraint, is_constraint
from strategy_validation.models.validation_result import ValidationResult
from strategy_validation.validation.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldDescriptor:
    """A field name and the constraints evaluated against it, in order."""

    name: str
    constraints: Tuple[Constraint, ...]


def _annotated_constraints(annotation: Any) -> List[Constraint]:
    if typing.get_origin(annotation) is not typing.Annotated:
        return []
    return [meta for meta in annotation.__metadata__ if is_constraint(meta)]


def _is_class_var(annotation: Any) -> bool:
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def _field_annotations(model_type: type) -> Dict[str, Any]:
    """
    Resolved annotations across the MRO, base class fields first.

    When some annotation cannot be resolved (e.g. a name imported only
    under ``TYPE_CHECKING``), each class is walked on its own and every
    unresolvable entry is kept unevaluated, so it carries no constraints
    but does not break the fields that do resolve.
    """
    try:
        return typing.get_type_hints(model_type, include_extras=True)
    except (NameError, AttributeError, TypeError) as e:
        logger.debug(
            "Falling back to per-field annotation resolution for %s: %s",
            model_type.__name__, e,
        )

    hints: Dict[str, Any] = {}
    for klass in reversed(model_type.__mro__):
        module = sys.modules.get(klass.__module__)
        globalns = vars(module) if module is not None else {}
        for name, annotation in inspect.get_annotations(klass).items():
            if isinstance(annotation, str):
                try:
                    annotation = eval(annotation, globalns, dict(vars(klass)))
                except (NameError, AttributeError, SyntaxError, TypeError):
                    pass
            hints[name] = annotation
    return hints


class DefaultValidationStrategy:
    """
    Structural validator applicable to any type without per-type code.

    Thread-safety: ``validate`` only reads the descriptor cache. ``declare``
    mutates it and must happen during startup, before concurrent use.
    """

    def __init__(self) -> None:
        self._declared: Dict[type, Dict[str, List[Constraint]]] = {}
        self._descriptors: Dict[type, Tuple[FieldDescriptor, ...]] = {}

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def declare(self, model_type: type, rules: Mapping[str, Iterable[Any]]) -> None:
        """
        Attach constraints to fields of *model_type* ahead of time.

        Args:
            model_type: Class whose instances the rules apply to.
            rules: ``{field_name: [Constraint | spec dict, ...]}``.

        Raises:
            InvalidArgumentError: On a non-class target, an empty field
                name, or a malformed constraint/spec.
        """
        if not isinstance(model_type, type):
            raise InvalidArgumentError("model_type", "Constraints can only be declared on a class")
        if not isinstance(rules, Mapping):
            raise InvalidArgumentError("rules", "Rules must map field names to constraint lists")

        table = self._declared.setdefault(model_type, {})
        for field_name, items in rules.items():
            if not isinstance(field_name, str) or not field_name.strip():
                raise InvalidArgumentError("rules", "Field names must be non-empty strings")
            if isinstance(items, (dict, str)) or not isinstance(items, Iterable):
                raise InvalidArgumentError("rules", f"Constraints for '{field_name}' must be a list")
            table.setdefault(field_name, []).extend(as_constraint(item) for item in items)

        self._descriptors.clear()
        logger.debug(
            "Declared constraints for %s on fields %s",
            model_type.__name__, sorted(rules),
        )

    # ------------------------------------------------------------------
    # Descriptor compilation
    # ------------------------------------------------------------------

    def describe(self, model_type: type) -> Tuple[FieldDescriptor, ...]:
        """Return the (cached) field descriptors for *model_type*."""
        cached = self._descriptors.get(model_type)
        if cached is not None:
            return cached

        ordered: Dict[str, List[Constraint]] = {}
        for name, annotation in _field_annotations(model_type).items():
            if name.startswith("_") or _is_class_var(annotation):
                continue
            ordered[name] = _annotated_constraints(annotation)

        # declarations on base classes apply to subclasses, base first
        for klass in reversed(model_type.__mro__):
            for name, constraints in self._declared.get(klass, {}).items():
                ordered.setdefault(name, []).extend(constraints)

        descriptors = tuple(
            FieldDescriptor(name=name, constraints=tuple(constraints))
            for name, constraints in ordered.items()
            if constraints
        )
        self._descriptors[model_type] = descriptors
        logger.debug(
            "Compiled %d constrained field(s) for %s",
            len(descriptors), model_type.__name__,
        )
        return descriptors

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, instance: Any, model_type: Optional[type] = None) -> ValidationResult:
        """
        Evaluate every declared constraint of *model_type* against *instance*.

        Args:
            instance: The object to inspect. Must not be None.
            model_type: Type whose field declarations apply. Defaults to
                ``type(instance)``.

        Returns:
            ValidationResult with one error per failing constraint, in
            field declaration order then constraint order.
        """
        if instance is None:
            raise InvalidArgumentError("instance", "Validation target cannot be None")

        result = ValidationResult()
        for descriptor in self.describe(model_type or type(instance)):
            value = getattr(instance, descriptor.name, None)
            for constraint in descriptor.constraints:
                if not constraint.is_valid(value):
                    result.add_error(descriptor.name, constraint.format_error_message(descriptor.name))
        return result
