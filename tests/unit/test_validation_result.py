"""
Unit tests for ValidationResult / ValidationError.
Tests: is_valid derivation, add_error argument checks, fail(), has_error_for,
       merge ordering, serialisation.
"""
from collections import OrderedDict

import pytest

from strategy_validation.models.validation_result import ValidationError, ValidationResult
from strategy_validation.validation.errors import InvalidArgumentError


class TestIsValid:
    def test_new_result_is_valid(self):
        result = ValidationResult()
        assert result.is_valid is True
        assert result.errors == []

    def test_success_factory_is_valid(self):
        assert ValidationResult.success().is_valid is True

    def test_one_error_makes_result_invalid(self):
        result = ValidationResult().add_error("name", "The name field is required.")
        assert result.is_valid is False
        assert len(result.errors) == 1

    def test_success_instances_are_independent(self):
        a = ValidationResult.success()
        b = ValidationResult.success()
        a.add_error("x", "broken")
        assert b.is_valid is True


class TestAddError:
    def test_returns_self_for_chaining(self):
        result = ValidationResult()
        returned = result.add_error("a", "first").add_error("b", "second")
        assert returned is result
        assert [e.field for e in result.errors] == ["a", "b"]

    @pytest.mark.parametrize("field_name", ["", "   ", "\t\n"])
    def test_empty_field_rejected(self, field_name):
        with pytest.raises(InvalidArgumentError) as exc_info:
            ValidationResult().add_error(field_name, "message")
        assert exc_info.value.argument == "field_name"

    @pytest.mark.parametrize("message", ["", "  "])
    def test_empty_message_rejected(self, message):
        with pytest.raises(InvalidArgumentError) as exc_info:
            ValidationResult().add_error("field", message)
        assert exc_info.value.argument == "message"

    def test_none_arguments_rejected(self):
        with pytest.raises(InvalidArgumentError):
            ValidationResult().add_error(None, "message")
        with pytest.raises(InvalidArgumentError):
            ValidationResult().add_error("field", None)

    def test_rejected_error_leaves_result_untouched(self):
        result = ValidationResult()
        with pytest.raises(InvalidArgumentError):
            result.add_error("", "message")
        assert result.is_valid is True

    def test_invalid_argument_is_a_value_error(self):
        with pytest.raises(ValueError):
            ValidationResult().add_error("", "")

    def test_duplicates_are_kept(self):
        result = ValidationResult().add_error("name", "too short").add_error("name", "too short")
        assert len(result.errors) == 2


class TestFail:
    def test_two_entries(self):
        result = ValidationResult.fail(OrderedDict([("a", "msg1"), ("b", "msg2")]))
        assert len(result.errors) == 2
        assert result.has_error_for("a")
        assert result.has_error_for("b")
        assert not result.has_error_for("c")

    def test_preserves_mapping_order(self):
        result = ValidationResult.fail({"b": "second", "a": "first"})
        assert result.errors == [
            ValidationError("b", "second"),
            ValidationError("a", "first"),
        ]

    def test_empty_message_in_mapping_rejected(self):
        with pytest.raises(InvalidArgumentError):
            ValidationResult.fail({"a": ""})


class TestLookupAndMerge:
    def test_has_error_for_is_exact_match(self):
        result = ValidationResult().add_error("Name", "bad")
        assert result.has_error_for("Name")
        assert not result.has_error_for("name")
        assert not result.has_error_for("Nam")

    def test_errors_for_returns_messages_in_order(self):
        result = (
            ValidationResult()
            .add_error("age", "too low")
            .add_error("name", "missing")
            .add_error("age", "not a number")
        )
        assert result.errors_for("age") == ["too low", "not a number"]
        assert result.errors_for("email") == []

    def test_merge_appends_after_existing(self):
        left = ValidationResult().add_error("a", "1")
        right = ValidationResult().add_error("b", "2")
        merged = left.merge(right)
        assert merged is left
        assert [e.field for e in merged.errors] == ["a", "b"]
        assert len(right.errors) == 1

    def test_merge_valid_into_valid(self):
        assert ValidationResult().merge(ValidationResult()).is_valid is True


class TestSerialisation:
    def test_to_dict(self):
        result = ValidationResult().add_error("x", "bad field")
        assert result.to_dict() == {
            "is_valid": False,
            "errors": [{"field": "x", "message": "bad field"}],
        }

    def test_results_compare_by_errors(self):
        a = ValidationResult().add_error("x", "bad")
        b = ValidationResult().add_error("x", "bad")
        assert a == b

    def test_validation_error_is_frozen(self):
        error = ValidationError("x", "bad")
        with pytest.raises(Exception):
            error.field = "y"  # type: ignore[misc]
