"""
Form validation helpers.

Every validator returns None when the value is acceptable, or a
translation key (see translations/*.json under "validation.") describing
the problem. validate_fields() collects them per field and raises a
ValidationError that forms render inline.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Optional, Tuple

import bleach

from core.exceptions import ValidationError


# Field limits enforced by the backend
MAX_NAME_LENGTH = 50
MAX_PHONE_LENGTH = 10
MAX_STREET_ADDRESS_LENGTH = 120
MAX_CITY_LENGTH = 60
MAX_EMAIL_LENGTH = 100
MAX_LOCATION_NAME_LENGTH = 60
MAX_BUSINESS_NAME_LENGTH = 100
MAX_CATEGORY_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 500
MAX_NOTES_LENGTH = 1000
MIN_PASSWORD_LENGTH = 8
MAX_PRICE = Decimal("1000000")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def sanitize_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Sanitize user input text to prevent XSS and injection attacks.

    Args:
        text: Raw input text
        max_length: Optional maximum length to enforce

    Returns:
        Sanitized text safe for storage and display
    """
    if not text:
        return ""

    text = text.strip()
    text = bleach.clean(text, tags=[], strip=True)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def validate_required(value: Optional[str]) -> Optional[str]:
    if not (value or "").strip():
        return "validation.required"
    return None


def validate_max_length(value: Optional[str], max_length: int) -> Optional[str]:
    if len((value or "").strip()) > max_length:
        return "validation.too_long"
    return None


def validate_required_with_max_length(value: Optional[str], max_length: int) -> Optional[str]:
    return validate_required(value) or validate_max_length(value, max_length)


def validate_phone(value: Optional[str], max_length: int = MAX_PHONE_LENGTH) -> Optional[str]:
    """Phone numbers are digits only."""
    trimmed = (value or "").strip()
    error = validate_required(trimmed)
    if error:
        return error
    if not trimmed.isdigit():
        return "validation.phone_digits"
    return validate_max_length(trimmed, max_length)


def validate_email(value: Optional[str], max_length: int = MAX_EMAIL_LENGTH) -> Optional[str]:
    trimmed = (value or "").strip()
    if not trimmed:
        return "validation.required"
    if len(trimmed) > max_length:
        return "validation.too_long"
    if not _EMAIL_RE.match(trimmed):
        return "validation.email"
    return None


def validate_optional_email(value: Optional[str], max_length: int = MAX_EMAIL_LENGTH) -> Optional[str]:
    if not (value or "").strip():
        return None
    return validate_email(value, max_length)


def validate_password(value: Optional[str], min_length: int = MIN_PASSWORD_LENGTH) -> Optional[str]:
    if not (value or "").strip():
        return "validation.required"
    if len(value) < min_length:
        return "validation.password_short"
    return None


def validate_password_confirmation(password: Optional[str], confirmation: Optional[str]) -> Optional[str]:
    if not (confirmation or "").strip():
        return "validation.required"
    if password != confirmation:
        return "validation.password_mismatch"
    return None


def validate_optional_date(value: Optional[str]) -> Optional[str]:
    """Empty, or an ISO date (YYYY-MM-DD) that is not in the future."""
    text = (value or "").strip()
    if not text:
        return None
    try:
        parsed = date.fromisoformat(text)
    except ValueError:
        return "validation.date"
    if parsed > date.today():
        return "validation.date"
    return None


def parse_price(value: Optional[str]) -> Tuple[Optional[Decimal], Optional[str]]:
    """
    Parse a price field.

    Returns:
        (price, None) when valid, (None, error_key) otherwise
    """
    text = (value or "").strip()
    if not text:
        return None, "validation.required"
    try:
        price = Decimal(text)
    except InvalidOperation:
        return None, "validation.price"
    if not price.is_finite() or price < 0:
        return None, "validation.price"
    if price > MAX_PRICE:
        return None, "validation.price_max"
    return price, None


def validate_fields(validations: Iterable[Tuple[str, Optional[str]]]) -> None:
    """
    Collect (field, error) pairs and raise if any error is set.

    Raises:
        ValidationError: With a field -> translation key mapping
    """
    errors: Dict[str, str] = {field: error for field, error in validations if error}
    if errors:
        raise ValidationError(errors)


# =============================================================================
# FORM SCHEMAS
# =============================================================================

def validate_customer_form(form: Dict[str, str]) -> None:
    validate_fields([
        ("name", validate_required_with_max_length(form.get("name"), MAX_NAME_LENGTH)),
        ("phoneNumber", validate_phone(form.get("phoneNumber"))),
        ("email", validate_optional_email(form.get("email"))),
        ("streetAddress", validate_max_length(form.get("streetAddress"), MAX_STREET_ADDRESS_LENGTH)),
        ("city", validate_max_length(form.get("city"), MAX_CITY_LENGTH)),
    ])


def validate_person_form(form: Dict[str, str], require_password: bool = True) -> None:
    """Agents and managers share the same profile fields."""
    validations = [
        ("firstName", validate_required_with_max_length(form.get("firstName"), MAX_NAME_LENGTH)),
        ("lastName", validate_required_with_max_length(form.get("lastName"), MAX_NAME_LENGTH)),
        ("email", validate_email(form.get("email"))),
        ("phoneNumber", validate_phone(form.get("phoneNumber"))),
        ("streetAddress", validate_max_length(form.get("streetAddress"), MAX_STREET_ADDRESS_LENGTH)),
        ("city", validate_max_length(form.get("city"), MAX_CITY_LENGTH)),
    ]
    if require_password:
        validations.append(("password", validate_password(form.get("password"))))
    validate_fields(validations)


def validate_location_form(form: Dict[str, str]) -> None:
    validate_fields([
        ("name", validate_required_with_max_length(form.get("name"), MAX_LOCATION_NAME_LENGTH)),
        ("streetAddress", validate_required_with_max_length(form.get("streetAddress"), MAX_STREET_ADDRESS_LENGTH)),
        ("city", validate_required_with_max_length(form.get("city"), MAX_CITY_LENGTH)),
        ("phoneNumber", validate_phone(form.get("phoneNumber"))),
    ])


def validate_product_form(form: Dict[str, str]) -> None:
    validate_fields([
        ("name", validate_required_with_max_length(form.get("name"), MAX_NAME_LENGTH)),
        ("originalPrice", parse_price(form.get("originalPrice"))[1]),
        ("specialPrice", parse_price(form.get("specialPrice"))[1]),
        ("description", validate_max_length(form.get("description"), MAX_DESCRIPTION_LENGTH)),
    ])


def validate_profile_form(form: Dict[str, str]) -> None:
    """The current manager's own details; email and password are changed elsewhere."""
    validate_fields([
        ("firstName", validate_required_with_max_length(form.get("firstName"), MAX_NAME_LENGTH)),
        ("lastName", validate_required_with_max_length(form.get("lastName"), MAX_NAME_LENGTH)),
        ("phoneNumber", validate_phone(form.get("phoneNumber"))),
        ("dateOfBirth", validate_optional_date(form.get("dateOfBirth"))),
        ("streetAddress", validate_max_length(form.get("streetAddress"), MAX_STREET_ADDRESS_LENGTH)),
        ("city", validate_max_length(form.get("city"), MAX_CITY_LENGTH)),
        ("businessName", validate_max_length(form.get("businessName"), MAX_BUSINESS_NAME_LENGTH)),
    ])


def validate_password_change(form: Dict[str, str]) -> None:
    validate_fields([
        ("oldPassword", validate_required(form.get("oldPassword"))),
        ("newPassword", validate_password(form.get("newPassword"))),
        ("confirmPassword", validate_password_confirmation(
            form.get("newPassword"), form.get("confirmPassword")
        )),
    ])
