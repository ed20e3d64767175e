"""Display formatting for prices, dates and order cards."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple

from models.catalog import Customer
from models.order import Order, OrderStatus


CURRENCY_SYMBOL = "₪"


def format_price(value) -> str:
    """
    Format a price with thousand separators and two decimals.

    >>> format_price(Decimal("1234.5"))
    '₪1,234.50'
    """
    amount = Decimal(str(value or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"


def format_date_short(value: Optional[datetime]) -> str:
    """dd/mm/yy"""
    if not value:
        return ""
    return value.strftime("%d/%m/%y")


def format_date_long(value: Optional[datetime]) -> str:
    if not value:
        return ""
    return value.strftime("%d/%m/%Y %H:%M")


def order_card_date(order: Order) -> Optional[Tuple[str, Optional[datetime]]]:
    """
    Label key and date to show on an order card, by status.

    Cancelled orders show no date.
    """
    if order.status is OrderStatus.CANCELLED:
        return None
    if order.status is OrderStatus.PLACED:
        return "orders.date.placed", order.placed_at or order.created_at
    if order.status is OrderStatus.DONE:
        return "orders.date.done", order.done_at or order.placed_at or order.created_at
    if order.status is OrderStatus.EXPIRED:
        return "orders.date.expired", order.link_expires_at
    return "orders.date.created", order.created_at


def filter_customers(customers: Iterable[Customer], query: Optional[str]) -> List[Customer]:
    """Case-insensitive match on name, phone or email; blank query keeps all."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(customers)
    return [
        c for c in customers
        if needle in c.name.lower()
        or needle in c.phone_number.lower()
        or needle in c.email.lower()
    ]
