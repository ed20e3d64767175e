"""
Unit tests for form validation and input sanitization.
"""

from decimal import Decimal

import pytest

from core.exceptions import ValidationError
from modules.validation import (
    parse_price,
    sanitize_text,
    validate_customer_form,
    validate_email,
    validate_optional_date,
    validate_optional_email,
    validate_password,
    validate_password_change,
    validate_password_confirmation,
    validate_person_form,
    validate_profile_form,
    validate_phone,
    validate_required_with_max_length,
)


class TestSanitizeText:

    def test_strips_html(self):
        assert sanitize_text("  <b>Dana</b> Levi ") == "Dana Levi"

    def test_script_tags_removed(self):
        assert "<script>" not in sanitize_text("<script>alert(1)</script>Hi")

    def test_truncates(self):
        assert sanitize_text("abcdef", max_length=3) == "abc"

    def test_empty(self):
        assert sanitize_text(None) == ""
        assert sanitize_text("") == ""


class TestFieldValidators:

    def test_required_with_max_length(self):
        assert validate_required_with_max_length("  ", 5) == "validation.required"
        assert validate_required_with_max_length("abcdef", 5) == "validation.too_long"
        assert validate_required_with_max_length("abc", 5) is None

    def test_phone(self):
        assert validate_phone("0501234567") is None
        assert validate_phone("050-123") == "validation.phone_digits"
        assert validate_phone("05012345678") == "validation.too_long"
        assert validate_phone("") == "validation.required"

    def test_email(self):
        assert validate_email("dana@example.com") is None
        assert validate_email("dana@") == "validation.email"
        assert validate_email("") == "validation.required"

    def test_optional_email(self):
        assert validate_optional_email("") is None
        assert validate_optional_email("nope") == "validation.email"

    def test_password(self):
        assert validate_password("short") == "validation.password_short"
        assert validate_password("long-enough") is None
        assert validate_password("") == "validation.required"

    def test_password_confirmation(self):
        assert validate_password_confirmation("secret123", "secret123") is None
        assert validate_password_confirmation("secret123", "secret124") == "validation.password_mismatch"
        assert validate_password_confirmation("secret123", "") == "validation.required"

    @pytest.mark.parametrize("value,expected", [
        ("", None),
        ("1990-05-17", None),
        ("17/05/1990", "validation.date"),
        ("2990-01-01", "validation.date"),
    ])
    def test_optional_date(self, value, expected):
        assert validate_optional_date(value) == expected


class TestParsePrice:

    def test_valid(self):
        assert parse_price(" 12.90 ") == (Decimal("12.90"), None)

    def test_zero_is_allowed(self):
        assert parse_price("0") == (Decimal("0"), None)

    @pytest.mark.parametrize("value,error", [
        ("", "validation.required"),
        ("abc", "validation.price"),
        ("-1", "validation.price"),
        ("Infinity", "validation.price"),
        ("1000001", "validation.price_max"),
    ])
    def test_invalid(self, value, error):
        assert parse_price(value) == (None, error)


class TestFormSchemas:
    """Test that schema validators collect every failing field."""

    def test_customer_form_valid(self):
        validate_customer_form({"name": "Dana", "phoneNumber": "0501234567"})

    def test_customer_form_errors(self):
        with pytest.raises(ValidationError) as excinfo:
            validate_customer_form({"name": "", "phoneNumber": "abc", "email": "x"})

        assert excinfo.value.errors == {
            "name": "validation.required",
            "phoneNumber": "validation.phone_digits",
            "email": "validation.email",
        }
        assert excinfo.value.first_error == "validation.required"

    def test_person_form_without_password(self):
        form = {
            "firstName": "Avi",
            "lastName": "Cohen",
            "email": "avi@example.com",
            "phoneNumber": "0521111111",
        }
        validate_person_form(form, require_password=False)

        with pytest.raises(ValidationError) as excinfo:
            validate_person_form(form)
        assert list(excinfo.value.errors) == ["password"]

    def test_profile_form(self):
        form = {"firstName": "Noa", "lastName": "Bar", "phoneNumber": "0541112222"}
        validate_profile_form(form)

        with pytest.raises(ValidationError) as excinfo:
            validate_profile_form(dict(form, dateOfBirth="soon", businessName="x" * 101))
        assert excinfo.value.errors == {
            "dateOfBirth": "validation.date",
            "businessName": "validation.too_long",
        }

    def test_password_change(self):
        validate_password_change({
            "oldPassword": "old-secret", "newPassword": "new-secret", "confirmPassword": "new-secret",
        })

        with pytest.raises(ValidationError) as excinfo:
            validate_password_change({"oldPassword": "", "newPassword": "short", "confirmPassword": "shorter"})
        assert excinfo.value.errors == {
            "oldPassword": "validation.required",
            "newPassword": "validation.password_short",
            "confirmPassword": "validation.password_mismatch",
        }
