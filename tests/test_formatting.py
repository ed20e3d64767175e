"""
Unit tests for display formatting.
"""

from datetime import datetime
from decimal import Decimal

from conftest import make_order
from models.catalog import Customer
from models.order import OrderStatus
from modules.formatting import (
    filter_customers,
    format_date_long,
    format_date_short,
    format_price,
    order_card_date,
)


class TestFormatPrice:

    def test_thousands_and_two_decimals(self):
        assert format_price(Decimal("1234.5")) == "₪1,234.50"

    def test_rounds_half_up(self):
        assert format_price(Decimal("0.125")) == "₪0.13"

    def test_float_and_none(self):
        assert format_price(10.1) == "₪10.10"
        assert format_price(None) == "₪0.00"

    def test_negative(self):
        assert format_price(Decimal("-3")) == "-₪3.00"


class TestFormatDate:

    def test_short(self):
        assert format_date_short(datetime(2024, 3, 1, 9, 30)) == "01/03/24"

    def test_long(self):
        assert format_date_long(datetime(2024, 3, 1, 9, 30)) == "01/03/2024 09:30"

    def test_none(self):
        assert format_date_short(None) == ""
        assert format_date_long(None) == ""


class TestOrderCardDate:
    """The date shown on an order card depends on its status."""

    def test_placed(self):
        order = make_order()
        assert order_card_date(order) == ("orders.date.placed", datetime(2024, 3, 2, 12, 0))

    def test_empty_shows_creation(self):
        order = make_order(OrderStatus.EMPTY)
        assert order_card_date(order) == ("orders.date.created", datetime(2024, 3, 1, 9, 30))

    def test_done_falls_back_to_placed(self):
        order = make_order(OrderStatus.DONE)
        assert order_card_date(order) == ("orders.date.done", datetime(2024, 3, 2, 12, 0))

    def test_expired(self):
        expiry = datetime(2024, 3, 8, 9, 30)
        order = make_order(OrderStatus.EXPIRED, link_expires_at=expiry)
        assert order_card_date(order) == ("orders.date.expired", expiry)

    def test_cancelled_has_no_date(self):
        assert order_card_date(make_order(OrderStatus.CANCELLED)) is None


class TestFilterCustomers:

    CUSTOMERS = [
        Customer(id="1", name="Dana Levi", phone_number="0501234567", email="dana@example.com"),
        Customer(id="2", name="Avi Cohen", phone_number="0529876543"),
    ]

    def test_blank_query_keeps_all(self):
        assert filter_customers(self.CUSTOMERS, "  ") == self.CUSTOMERS

    def test_name_is_case_insensitive(self):
        assert [c.id for c in filter_customers(self.CUSTOMERS, "LEVI")] == ["1"]

    def test_phone(self):
        assert [c.id for c in filter_customers(self.CUSTOMERS, "9876")] == ["2"]

    def test_email(self):
        assert [c.id for c in filter_customers(self.CUSTOMERS, "example.com")] == ["1"]
