"""
Unit tests for the leaf check library.
Tests: presence checks, numeric bounds, string formats, GUID / date parsing,
       enums, type assignability, file existence, combine().
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pytest

from strategy_validation.validation import checks


class Colour(Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class Address:
    street: Optional[str] = None
    city: Optional[str] = None


class Contact:
    def __init__(self, phone=None, email=None):
        self.phone = phone
        self.email = email
        self._cache = None


def _messages(result):
    return [(e.field, e.message) for e in result.errors]


class TestPresence:
    def test_not_null(self):
        assert checks.not_null(0, "count").is_valid
        assert _messages(checks.not_null(None, "count")) == [("count", "count cannot be null.")]

    @pytest.mark.parametrize("value", [None, "", "   ", 7])
    def test_is_not_null_or_whitespace_fails(self, value):
        assert not checks.is_not_null_or_whitespace(value, "reference").is_valid

    def test_is_not_null_or_whitespace_passes(self):
        assert checks.is_not_null_or_whitespace(" ref ", "reference").is_valid

    def test_is_not_null_or_empty(self):
        assert checks.is_not_null_or_empty([1], "items").is_valid
        assert checks.is_not_null_or_empty(iter([0]), "items").is_valid
        assert not checks.is_not_null_or_empty([], "items").is_valid
        assert not checks.is_not_null_or_empty(None, "items").is_valid

    def test_are_any_fields_null(self):
        assert checks.are_any_fields_null(Address("Via Roma 1", "Roma"), "address").is_valid
        assert not checks.are_any_fields_null(Address("Via Roma 1"), "address").is_valid
        assert not checks.are_any_fields_null(None, "address").is_valid

    def test_private_attributes_are_ignored(self):
        assert checks.are_any_fields_null(Contact("555", "a@b.it"), "contact").is_valid
        assert checks.are_all_fields_null(Contact(), "contact").is_valid

    def test_are_all_fields_null(self):
        assert checks.are_all_fields_null(Address(), "address").is_valid
        assert not checks.are_all_fields_null(Address(city="Roma"), "address").is_valid
        assert not checks.are_all_fields_null(None, "address").is_valid


class TestNumbersAndBooleans:
    def test_is_in_range_is_inclusive(self):
        assert checks.is_in_range(1, "qty", 1, 5).is_valid
        assert checks.is_in_range(5, "qty", 1, 5).is_valid
        result = checks.is_in_range(6, "qty", 1, 5)
        assert _messages(result) == [("qty", "qty must be between 1 and 5.")]

    def test_strict_comparisons(self):
        assert checks.is_greater_than(2, "n", 1).is_valid
        assert not checks.is_greater_than(1, "n", 1).is_valid
        assert checks.is_less_than(0, "n", 1).is_valid
        assert not checks.is_less_than(1, "n", 1).is_valid

    def test_sign_checks_exclude_zero(self):
        assert checks.is_positive(1, "n").is_valid
        assert not checks.is_positive(0, "n").is_valid
        assert checks.is_negative(-1, "n").is_valid
        assert not checks.is_negative(0, "n").is_valid

    def test_boolean_checks_require_actual_bools(self):
        assert checks.is_true(True, "flag").is_valid
        assert not checks.is_true(1, "flag").is_valid
        assert checks.is_false(False, "flag").is_valid
        assert not checks.is_false(None, "flag").is_valid


class TestFormats:
    def test_is_email(self):
        assert checks.is_email("anna.bianchi@example.it", "email").is_valid
        assert not checks.is_email("anna.bianchi", "email").is_valid
        assert not checks.is_email(None, "email").is_valid

    def test_is_url(self):
        assert checks.is_url("https://example.com", "site").is_valid
        assert not checks.is_url("example.com", "site").is_valid
        assert not checks.is_url("file:///etc/hosts", "site").is_valid

    def test_is_alphanumeric(self):
        assert checks.is_alphanumeric("abc123", "code").is_valid
        assert not checks.is_alphanumeric("abc-123", "code").is_valid
        assert not checks.is_alphanumeric("", "code").is_valid

    def test_is_password_secure(self):
        assert checks.is_password_secure("s3cret!", "password").is_valid
        assert not checks.is_password_secure("secret", "password").is_valid
        assert not checks.is_password_secure("secret1", "password").is_valid
        assert not checks.is_password_secure("   ", "password").is_valid

    def test_is_guid(self):
        assert checks.is_guid("6f1c2b8e-3d8a-4a44-9c1e-2b9d8f0a7e11", "id").is_valid
        assert not checks.is_guid("not-a-guid", "id").is_valid
        assert not checks.is_guid("", "id").is_valid

    @pytest.mark.parametrize("value", ["2024-01-15", "2024-01-15T10:30:00"])
    def test_is_date_accepts_iso(self, value):
        assert checks.is_date(value, "when").is_valid

    @pytest.mark.parametrize("value", ["2024-02-30", "yesterday", None])
    def test_is_date_rejects_other_values(self, value):
        assert not checks.is_date(value, "when").is_valid


class TestTypesEnumsFiles:
    def test_enum_member_or_value(self):
        assert checks.is_valid_enum_value(Colour.RED, "colour", Colour).is_valid
        assert checks.is_valid_enum_value("green", "colour", Colour).is_valid
        result = checks.is_valid_enum_value("blue", "colour", Colour)
        assert _messages(result) == [("colour", "colour is not a defined Colour value.")]

    def test_enum_check_handles_unhashable_values(self):
        assert not checks.is_valid_enum_value(["red"], "colour", Colour).is_valid

    def test_is_assignable_to(self):
        assert checks.is_assignable_to(bool, "kind", int).is_valid
        assert not checks.is_assignable_to(str, "kind", int).is_valid
        assert not checks.is_assignable_to(None, "kind", int).is_valid
        assert not checks.is_assignable_to(bool, "kind", None).is_valid

    def test_do_files_exist(self, tmp_path):
        present = tmp_path / "a.txt"
        present.write_text("x")
        assert checks.do_files_exist([str(present)], "files").is_valid
        assert not checks.do_files_exist([str(present), str(tmp_path / "missing.txt")], "files").is_valid
        assert not checks.do_files_exist([], "files").is_valid
        assert not checks.do_files_exist([str(tmp_path)], "files").is_valid


class TestCombine:
    def test_combine_keeps_argument_order(self):
        result = checks.combine(
            checks.is_positive(0, "quantity"),
            checks.not_null("ok", "reference"),
            checks.is_email("nope", "email"),
        )
        assert [e.field for e in result.errors] == ["quantity", "email"]

    def test_combine_of_nothing_is_valid(self):
        assert checks.combine().is_valid
