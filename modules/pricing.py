"""
Order pricing and discount computation.

Turns what an operator types into the discount form into the absolute
discount amount that is submitted to the backend.

Rules:
    subtotal   = sum(quantity * unit_price)
    PERCENTAGE : discount = (input / 100) * subtotal, input clamped to [0, 100]
    ABSOLUTE   : discount = input, clamped to [0, subtotal]

    The result is rounded to cents with ROUND_HALF_UP and never exceeds
    the subtotal.

Rejected (nothing is submitted):
    - empty input, non-numbers, negative numbers  -> "discount.errors.invalid"
    - more than two decimal places ("33.337")     -> "discount.errors.too_many_decimals"

Out-of-range values are clamped, not rejected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, Optional, Tuple, Union

from core.exceptions import ValidationError


CENT = Decimal("0.01")
HUNDRED = Decimal("100")
ZERO = Decimal("0")

ERROR_INVALID = "discount.errors.invalid"
ERROR_TOO_MANY_DECIMALS = "discount.errors.too_many_decimals"

# Plain decimal notation only: no exponents, no signs other than a leading minus
_NUMBER_RE = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)$")


class DiscountMode(Enum):
    """How the operator expresses the discount."""

    ABSOLUTE = "absolute"
    """Currency amount."""

    PERCENTAGE = "percentage"
    """Percent of the order subtotal."""

    @classmethod
    def parse(cls, value: Optional[str]) -> "DiscountMode":
        """Parse a form value; anything unknown means ABSOLUTE."""
        if value:
            for mode in cls:
                if mode.value == value.lower() or mode.name == value.upper():
                    return mode
        return cls.ABSOLUTE


PriceLike = Union[Decimal, int, float, str]
ItemLike = Union[Tuple[int, PriceLike], object]


def _as_decimal(value: PriceLike) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _quantity_and_price(item: ItemLike) -> Tuple[int, Decimal]:
    """Accept (quantity, unit_price) pairs or objects with those attributes."""
    if isinstance(item, tuple):
        quantity, price = item
    else:
        quantity, price = item.quantity, item.unit_price
    return int(quantity), _as_decimal(price)


def compute_subtotal(items: Iterable[ItemLike]) -> Decimal:
    """Sum of quantity * unit price over all line items."""
    subtotal = ZERO
    for item in items:
        quantity, price = _quantity_and_price(item)
        subtotal += price * quantity
    return subtotal


def round_cents(value: Decimal) -> Decimal:
    """Round to two decimals, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_discount_input(raw: Optional[str]) -> Decimal:
    """
    Parse the operator's input into a non-negative Decimal.

    Raises:
        ValidationError: Empty, non-numeric or negative input, or more
            than two decimal places
    """
    text = (raw or "").strip()
    if not text or not _NUMBER_RE.match(text):
        raise ValidationError({"discount": ERROR_INVALID})

    value = Decimal(text)
    if value < 0:
        raise ValidationError({"discount": ERROR_INVALID})

    if "." in text and len(text.split(".", 1)[1]) > 2:
        raise ValidationError({"discount": ERROR_TOO_MANY_DECIMALS})

    # Normalizes "-0" to 0
    return value.copy_abs()


def compute_discount(
    items: Iterable[ItemLike],
    raw_input: Optional[str],
    mode: DiscountMode,
) -> Decimal:
    """
    Compute the absolute discount to submit for an order.

    Args:
        items: Line items, as (quantity, unit_price) pairs or LineItem objects
        raw_input: Text the operator entered
        mode: ABSOLUTE or PERCENTAGE

    Returns:
        Discount amount rounded to cents, 0 <= discount <= subtotal

    Raises:
        ValidationError: If the input is rejected (see module docstring)
    """
    value = parse_discount_input(raw_input)
    subtotal = compute_subtotal(items)

    if mode is DiscountMode.PERCENTAGE:
        percent = min(value, HUNDRED)
        discount = round_cents(percent / HUNDRED * subtotal)
    else:
        discount = round_cents(min(value, subtotal))

    # Rounding up must not push past a subtotal with sub-cent precision
    ceiling = subtotal.quantize(CENT, rounding=ROUND_DOWN)
    return max(min(discount, ceiling), ZERO)


def discount_percentage(discount: Decimal, subtotal: Decimal) -> Decimal:
    """Share of the subtotal taken by the discount, in percent (one decimal)."""
    if subtotal <= 0:
        return Decimal("0.0")
    return (discount / subtotal * HUNDRED).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def max_input(mode: DiscountMode, subtotal: Decimal) -> Decimal:
    """Largest value the form accepts before clamping kicks in."""
    if mode is DiscountMode.PERCENTAGE:
        return HUNDRED
    return subtotal.quantize(CENT, rounding=ROUND_DOWN)


@dataclass
class DiscountForm:
    """
    State of the discount form for one order.

    The two modes are mutually exclusive; switching mode clears the entered
    value and any pending error. A rejected submit keeps the value so the
    operator can correct it.
    """

    subtotal: Decimal
    mode: DiscountMode = DiscountMode.ABSOLUTE
    value: str = ""
    error: Optional[str] = None

    @classmethod
    def for_items(cls, items: Iterable[ItemLike], current_discount: Decimal = ZERO) -> "DiscountForm":
        """Open the form prefilled with the order's current discount (if any)."""
        value = format(current_discount, "f") if current_discount > 0 else ""
        return cls(subtotal=compute_subtotal(items), value=value)

    def switch_mode(self, mode: DiscountMode) -> None:
        self.mode = mode
        self.value = ""
        self.error = None

    def set_value(self, raw: str) -> None:
        self.value = raw
        self.error = None

    def fail(self, error_key: str) -> None:
        self.error = error_key

    @property
    def max_value(self) -> Decimal:
        return max_input(self.mode, self.subtotal)

    @property
    def preview(self) -> Optional[Decimal]:
        """Discount amount for the current value, or None while invalid."""
        try:
            return self.compute()
        except ValidationError:
            return None

    def compute(self) -> Decimal:
        """Discount to submit; raises ValidationError for rejected input."""
        return compute_discount([(1, self.subtotal)], self.value, self.mode)

    def submit(self) -> Optional[Decimal]:
        """
        Validate the form.

        Returns:
            The rounded discount, or None after recording the error
        """
        try:
            return self.compute()
        except ValidationError as e:
            self.error = e.first_error
            return None
