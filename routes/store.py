"""
Public store routes (customer-facing, no login).

The customer opens the shareable link of an EMPTY order, picks
quantities from the seller's products (customer overrides already
applied by the backend), fills in contact details and a pickup location,
and places the order.

Orders in any other status only show their status.
"""

from typing import Dict, List

from flask import Blueprint, render_template, request

from core.exceptions import BusinessRuleError, ValidationError
from logging_config import get_logger
from models.order import LineItem, OrderStatus, PlaceOrderRequest
from modules.pricing import compute_subtotal
from modules.validation import (
    MAX_CITY_LENGTH,
    MAX_NAME_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_STREET_ADDRESS_LENGTH,
    validate_fields,
    validate_max_length,
    validate_optional_email,
    validate_phone,
    validate_required,
    validate_required_with_max_length,
)
from .helpers import api_client, backend_message, form_values


# Module logger
logger = get_logger(__name__)

store_bp = Blueprint("store", __name__)

CUSTOMER_FIELDS = (
    "customerName",
    "customerPhone",
    "customerEmail",
    "customerStreetAddress",
    "customerCity",
    "notes",
)

# Upper bound per line; larger values are treated as typos
MAX_QUANTITY = 10000


def _read_quantities(products) -> Dict[str, int]:
    quantities = {}
    for product in products:
        raw = request.form.get(f"qty-{product.id}", "").strip()
        if not raw:
            continue
        try:
            quantity = int(raw)
        except ValueError:
            raise ValidationError({f"qty-{product.id}": "validation.number"})
        if quantity < 0 or quantity > MAX_QUANTITY:
            raise ValidationError({f"qty-{product.id}": "validation.number"})
        if quantity:
            quantities[product.id] = quantity
    return quantities


def _build_items(products, quantities: Dict[str, int]) -> List[LineItem]:
    return [
        LineItem(
            product_name=product.name,
            quantity=quantities[product.id],
            unit_price=product.price,
            product_id=product.id,
        )
        for product in products
        if product.id in quantities
    ]


def _render_store(order, products=(), locations=(), values=None, errors=None,
                  quantities=None, status_code=200):
    return render_template(
        "store/order.html",
        order=order,
        products=products,
        locations=locations,
        values=values or {},
        errors=errors or {},
        quantities=quantities or {},
        is_open=order.status is OrderStatus.EMPTY,
    ), status_code


@store_bp.route("/store/order/<order_id>", methods=["GET"])
def view_store(order_id: str):
    order = api_client().public_get_order(order_id)
    if order.status is not OrderStatus.EMPTY:
        return _render_store(order)
    return _render_store(
        order,
        products=api_client().public_order_products(order_id),
        locations=api_client().public_order_locations(order_id),
    )


@store_bp.route("/store/order/<order_id>", methods=["POST"])
def place_order(order_id: str):
    """
    Place an EMPTY order.

    Quantities are read from qty-<productId> fields; prices always come
    from the backend's product list, never from the form.
    """
    api = api_client()
    order = api.public_get_order(order_id)
    if order.status is not OrderStatus.EMPTY:
        return _render_store(order, status_code=409)

    products = api.public_order_products(order_id)
    locations = api.public_order_locations(order_id)
    values = form_values(CUSTOMER_FIELDS)
    values["pickupLocationId"] = request.form.get("pickupLocationId", "").strip()
    quantities: Dict[str, int] = {}

    try:
        quantities = _read_quantities(products)
        location_ids = {str(loc.id) for loc in locations}
        validate_fields([
            ("items", None if quantities else "store.errors.no_items"),
            ("customerName", validate_required_with_max_length(values["customerName"], MAX_NAME_LENGTH)),
            ("customerPhone", validate_phone(values["customerPhone"])),
            ("customerEmail", validate_optional_email(values["customerEmail"])),
            ("customerStreetAddress", validate_required_with_max_length(
                values["customerStreetAddress"], MAX_STREET_ADDRESS_LENGTH)),
            ("customerCity", validate_required_with_max_length(values["customerCity"], MAX_CITY_LENGTH)),
            ("notes", validate_max_length(values["notes"], MAX_NOTES_LENGTH)),
            ("pickupLocationId", validate_required(values["pickupLocationId"])
                or (None if values["pickupLocationId"] in location_ids else "store.errors.location")),
        ])
    except ValidationError as e:
        return _render_store(order, products, locations, values, e.errors, quantities, 400)

    items = _build_items(products, quantities)
    place_request = PlaceOrderRequest(
        customer_name=values["customerName"],
        customer_phone=values["customerPhone"],
        customer_street_address=values["customerStreetAddress"],
        customer_city=values["customerCity"],
        pickup_location_id=int(values["pickupLocationId"]),
        items=tuple(items),
        customer_email=values["customerEmail"],
        notes=values["notes"],
    )

    try:
        api.public_place_order(order_id, place_request)
    except BusinessRuleError as e:
        errors = {"form": backend_message(e)}
        return _render_store(order, products, locations, values, errors, quantities, 400)

    logger.info(f"Order {order.short_id} placed with {len(items)} lines")
    return render_template(
        "store/placed.html",
        order=order,
        items=items,
        total=compute_subtotal(items),
    )
