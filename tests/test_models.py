"""
Unit tests for backend payload models.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from models.catalog import Category, Customer, Manager, Product, ProductOverride
from models.order import LineItem, Order, OrderStatus, PlaceOrderRequest
from models.page import Page


ORDER_PAYLOAD = {
    "id": "9f1c2e3d-aaaa-bbbb-cccc-000000000042",
    "status": "PLACED",
    "products": [
        {"productId": "p-1", "productName": "Bread", "quantity": 2, "pricePerUnit": 10.1},
        {"productId": "p-2", "productName": "Milk", "quantity": 1, "pricePerUnit": 5},
    ],
    "discount": 2.5,
    "totalPrice": 22.7,
    "createdAt": "2024-03-01T09:30:00Z",
    "placedAt": "2024-03-02T12:00:00",
    "customerId": "c-7",
    "customerName": "Dana Levi",
    "customerPhone": "0501234567",
    "agentId": 3,
    "agentName": "Avi Cohen",
    "notes": "Leave at the door",
}


class TestOrder:
    """Test Order parsing and local transitions."""

    def test_from_dict(self):
        order = Order.from_dict(ORDER_PAYLOAD)

        assert order.status is OrderStatus.PLACED
        assert order.short_id == "9f1c2e3d"
        assert len(order.items) == 2
        assert order.items[0].unit_price == Decimal("10.1")
        assert order.subtotal == Decimal("25.2")
        assert order.discount == Decimal("2.5")
        assert order.total_price == Decimal("22.7")
        assert order.customer.name == "Dana Levi"
        assert order.agent.id == "3"
        assert order.created_at == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        assert order.placed_at.hour == 12
        assert order.done_at is None

    def test_minimal_payload(self):
        order = Order.from_dict({"id": "x", "status": "EMPTY"})
        assert order.items == ()
        assert order.customer is None
        assert order.agent is None
        assert order.discount == Decimal("0")

    def test_unknown_status_defaults_to_empty(self):
        assert Order.from_dict({"id": "x", "status": "archived"}).status is OrderStatus.EMPTY

    def test_status_parse_is_case_insensitive(self):
        assert OrderStatus.parse("done") is OrderStatus.DONE
        assert OrderStatus.parse("") is None

    def test_with_status_returns_new_order(self):
        order = Order.from_dict(ORDER_PAYLOAD)
        cancelled = order.with_status(OrderStatus.CANCELLED)

        assert cancelled.status is OrderStatus.CANCELLED
        assert order.status is OrderStatus.PLACED
        assert cancelled.items == order.items

    def test_with_discount_keeps_total(self):
        order = Order.from_dict(ORDER_PAYLOAD)
        discounted = order.with_discount(Decimal("5.00"))

        assert discounted.discount == Decimal("5.00")
        assert discounted.total_price == order.total_price

    def test_frozen(self):
        order = Order.from_dict(ORDER_PAYLOAD)
        with pytest.raises(AttributeError):
            order.status = OrderStatus.DONE

    def test_is_open(self):
        order = Order.from_dict(ORDER_PAYLOAD)
        assert order.is_open
        assert order.with_status(OrderStatus.EMPTY).is_open
        assert not order.with_status(OrderStatus.DONE).is_open
        assert not order.with_status(OrderStatus.EXPIRED).is_open

    def test_to_dict_uses_backend_names(self):
        data = Order.from_dict(ORDER_PAYLOAD).to_dict()
        assert data["status"] == "PLACED"
        assert data["customerId"] == "c-7"
        assert data["products"][0]["pricePerUnit"] == 10.1
        assert data["createdAt"].startswith("2024-03-01T09:30:00")


class TestLineItem:

    def test_subtotal(self):
        assert LineItem("Bread", 3, Decimal("1.10")).subtotal == Decimal("3.30")

    def test_from_dict_without_price(self):
        item = LineItem.from_dict({"productName": "Gift", "quantity": 1})
        assert item.unit_price == Decimal("0")


class TestPlaceOrderRequest:

    def test_optional_fields_omitted(self):
        request = PlaceOrderRequest(
            customer_name="Dana",
            customer_phone="0501234567",
            customer_street_address="Herzl 1",
            customer_city="Haifa",
            pickup_location_id=4,
            items=(LineItem("Bread", 2, Decimal("10.00"), product_id="p-1"),),
        )
        data = request.to_dict()

        assert data["pickupLocationId"] == 4
        assert data["products"] == [
            {"productId": "p-1", "productName": "Bread", "quantity": 2, "pricePerUnit": 10.0}
        ]
        assert "customerEmail" not in data
        assert "notes" not in data


class TestCatalog:

    def test_customer(self):
        customer = Customer.from_dict({"id": 5, "name": "Dana", "phoneNumber": "050", "agentId": "2"})
        assert customer.id == "5"
        assert customer.agent_id == 2
        assert customer.email == ""

    def test_category_name_field(self):
        assert Category.from_dict({"id": 1, "category": "Dairy"}).name == "Dairy"
        assert Category.from_dict({"id": 2, "name": "Bakery"}).name == "Bakery"

    def test_product_price(self):
        product = Product.from_dict({"id": "p-1", "name": "Bread", "originalPrice": 12, "specialPrice": 9.9})
        assert product.price == Decimal("9.9")
        assert Product.from_dict({"id": "p-2", "name": "Milk", "originalPrice": 6}).price == Decimal("6")

    def test_public_product_price_field(self):
        """Store endpoints return the customer's effective price as 'price'."""
        product = Product.from_dict({"id": "p-1", "name": "Bread", "price": 7.5})
        assert product.price == Decimal("7.5")

    def test_override_savings(self):
        override = ProductOverride.from_dict({
            "id": 11,
            "productId": "p-1",
            "customerId": "c-1",
            "overridePrice": 8,
            "originalPrice": 10.5,
        })
        assert override.savings == Decimal("2.5")
        assert override.agent_id is None

    def test_manager_profile_fields(self):
        manager = Manager.from_dict({
            "id": 4,
            "firstName": "Noa",
            "lastName": "Bar",
            "dateOfBirth": "1990-05-17T00:00:00",
            "businessName": "Bar Bakery",
        })
        assert manager.id == "4"
        assert manager.date_of_birth == "1990-05-17"
        form = manager.to_profile_form()
        assert form["businessName"] == "Bar Bakery"
        assert form["city"] == ""
        assert "email" not in form


class TestPage:

    def test_from_dict(self):
        data = {"content": [{"id": 1, "category": "Dairy"}], "totalPages": 3, "totalElements": 41}
        page = Page.from_dict(data, Category.from_dict, number=1, size=20)

        assert page.content == (Category(1, "Dairy"),)
        assert page.total_pages == 3
        assert page.number == 1
        assert page.has_previous
        assert page.has_next

    def test_last_page(self):
        page = Page.from_dict({"content": [], "totalPages": 2, "page": 1}, Category.from_dict)
        assert page.is_empty
        assert not page.has_next

    def test_empty_response(self):
        page = Page.from_dict(None, Category.from_dict)
        assert page.is_empty
        assert page.total_elements == 0
