"""
Unit tests for discount computation and the discount form state.
"""

from decimal import Decimal, ROUND_HALF_UP

import pytest

from core.exceptions import ValidationError
from models.order import LineItem
from modules.pricing import (
    DiscountForm,
    DiscountMode,
    ERROR_INVALID,
    ERROR_TOO_MANY_DECIMALS,
    compute_discount,
    compute_subtotal,
    discount_percentage,
    max_input,
    parse_discount_input,
)


ITEMS = [(2, Decimal("10.00")), (1, Decimal("5.00"))]


def _error_of(excinfo):
    return excinfo.value.errors["discount"]


class TestSubtotal:
    """Test subtotal computation."""

    def test_pairs(self):
        assert compute_subtotal(ITEMS) == Decimal("25.00")

    def test_line_items(self):
        items = [LineItem("Bread", 3, Decimal("1.10")), LineItem("Milk", 2, Decimal("4.95"))]
        assert compute_subtotal(items) == Decimal("13.20")

    def test_empty(self):
        assert compute_subtotal([]) == Decimal("0")

    def test_float_prices_are_exact(self):
        """Floats from JSON must not leak binary noise into the sum."""
        assert compute_subtotal([(3, 0.1)]) == Decimal("0.3")


class TestComputeDiscount:
    """Test discount amounts in both modes."""

    def test_percentage_example(self):
        assert compute_discount(ITEMS, "10", DiscountMode.PERCENTAGE) == Decimal("2.50")

    def test_absolute_example_clamped_to_subtotal(self):
        assert compute_discount(ITEMS, "30", DiscountMode.ABSOLUTE) == Decimal("25.00")

    def test_absolute_within_range(self):
        assert compute_discount(ITEMS, "7.5", DiscountMode.ABSOLUTE) == Decimal("7.50")

    def test_percentage_above_100_is_clamped(self):
        assert compute_discount(ITEMS, "150", DiscountMode.PERCENTAGE) == Decimal("25.00")

    def test_percentage_rounds_half_up(self):
        """12.5% of 0.20 = 0.025 -> 0.03 (half up, not half even)."""
        assert compute_discount([(1, Decimal("0.20"))], "12.5", DiscountMode.PERCENTAGE) == Decimal("0.03")

    def test_percentage_thirds(self):
        assert compute_discount([(1, Decimal("100.00"))], "33.33", DiscountMode.PERCENTAGE) == Decimal("33.33")

    @pytest.mark.parametrize("percent", ["0", "1", "12.5", "50", "99.99", "100"])
    def test_percentage_matches_formula(self, percent):
        subtotal = compute_subtotal(ITEMS)
        expected = (Decimal(percent) / 100 * subtotal).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        result = compute_discount(ITEMS, percent, DiscountMode.PERCENTAGE)
        assert result == expected
        assert result <= subtotal

    @pytest.mark.parametrize("percent", ["0", "10", "100", "250"])
    def test_zero_subtotal_gives_zero(self, percent):
        assert compute_discount([], percent, DiscountMode.PERCENTAGE) == Decimal("0.00")

    def test_capped_at_truncated_subtotal(self):
        """A subtotal with sub-cent precision caps the discount at its cents."""
        items = [(1, Decimal("10.005"))]
        assert compute_discount(items, "100", DiscountMode.PERCENTAGE) == Decimal("10.00")
        assert compute_discount(items, "20", DiscountMode.ABSOLUTE) == Decimal("10.00")

    def test_result_has_two_decimals(self):
        result = compute_discount(ITEMS, "3", DiscountMode.ABSOLUTE)
        assert result.as_tuple().exponent == -2


class TestRejectedInput:
    """Test inputs that must never reach the backend."""

    def test_too_many_decimals(self):
        with pytest.raises(ValidationError) as excinfo:
            compute_discount([(1, Decimal("100.00"))], "33.337", DiscountMode.ABSOLUTE)
        assert _error_of(excinfo) == ERROR_TOO_MANY_DECIMALS

    def test_too_many_decimals_in_percentage_mode(self):
        with pytest.raises(ValidationError) as excinfo:
            compute_discount(ITEMS, "10.001", DiscountMode.PERCENTAGE)
        assert _error_of(excinfo) == ERROR_TOO_MANY_DECIMALS

    @pytest.mark.parametrize("raw", ["", "   ", None, "abc", "1,5", "1e3", "--1", "."])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError) as excinfo:
            compute_discount(ITEMS, raw, DiscountMode.ABSOLUTE)
        assert _error_of(excinfo) == ERROR_INVALID

    def test_negative(self):
        with pytest.raises(ValidationError) as excinfo:
            compute_discount(ITEMS, "-5", DiscountMode.ABSOLUTE)
        assert _error_of(excinfo) == ERROR_INVALID

    def test_parse_accepts_plain_numbers(self):
        assert parse_discount_input(" 12.50 ") == Decimal("12.50")
        assert parse_discount_input(".5") == Decimal("0.5")
        assert parse_discount_input("7.") == Decimal("7")
        assert parse_discount_input("-0") == Decimal("0")


class TestDisplayHelpers:

    def test_discount_percentage(self):
        assert discount_percentage(Decimal("2.50"), Decimal("25.00")) == Decimal("10.0")
        assert discount_percentage(Decimal("1"), Decimal("3")) == Decimal("33.3")

    def test_discount_percentage_zero_subtotal(self):
        assert discount_percentage(Decimal("0"), Decimal("0")) == Decimal("0")

    def test_max_input(self):
        assert max_input(DiscountMode.PERCENTAGE, Decimal("25")) == Decimal("100")
        assert max_input(DiscountMode.ABSOLUTE, Decimal("25.009")) == Decimal("25.00")

    def test_mode_parse(self):
        assert DiscountMode.parse("percentage") is DiscountMode.PERCENTAGE
        assert DiscountMode.parse("PERCENTAGE") is DiscountMode.PERCENTAGE
        assert DiscountMode.parse("bogus") is DiscountMode.ABSOLUTE
        assert DiscountMode.parse(None) is DiscountMode.ABSOLUTE


class TestDiscountForm:
    """Test the discount form state machine."""

    def test_prefilled_with_current_discount(self):
        form = DiscountForm.for_items(ITEMS, Decimal("3.00"))
        assert form.subtotal == Decimal("25.00")
        assert form.mode is DiscountMode.ABSOLUTE
        assert form.value == "3.00"

    def test_no_prefill_without_discount(self):
        assert DiscountForm.for_items(ITEMS).value == ""

    def test_prefill_never_uses_exponent_notation(self):
        """Backend decimals such as 1E+1 must prefill as plain numbers the parser accepts."""
        assert DiscountForm.for_items(ITEMS, Decimal("1E+1")).value == "10"
        assert DiscountForm.for_items(ITEMS, Decimal("5E-1")).value == "0.5"

    def test_switch_mode_clears_value_and_error(self):
        form = DiscountForm.for_items(ITEMS, Decimal("3.00"))
        form.fail(ERROR_INVALID)
        form.switch_mode(DiscountMode.PERCENTAGE)
        assert form.mode is DiscountMode.PERCENTAGE
        assert form.value == ""
        assert form.error is None

    def test_set_value_clears_error(self):
        form = DiscountForm.for_items(ITEMS)
        form.fail(ERROR_INVALID)
        form.set_value("5")
        assert form.error is None
        assert form.value == "5"

    def test_preview(self):
        form = DiscountForm.for_items(ITEMS)
        form.switch_mode(DiscountMode.PERCENTAGE)
        form.set_value("10")
        assert form.preview == Decimal("2.50")

    def test_preview_none_while_invalid(self):
        form = DiscountForm.for_items(ITEMS)
        form.set_value("abc")
        assert form.preview is None

    def test_submit_success(self):
        form = DiscountForm.for_items(ITEMS)
        form.set_value("30")
        assert form.submit() == Decimal("25.00")
        assert form.error is None

    def test_submit_rejected_keeps_value(self):
        form = DiscountForm.for_items([(1, Decimal("100.00"))])
        form.set_value("33.337")
        assert form.submit() is None
        assert form.error == ERROR_TOO_MANY_DECIMALS
        assert form.value == "33.337"
