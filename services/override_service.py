"""
Product override workflows.

An override is a customer-specific price for a product that supersedes
the catalog price. Managers see all overrides (filterable by product,
customer and agent, where agent "manager" means overrides the manager
created); agents see their own.
"""

from __future__ import annotations

from decimal import Decimal

from core.api_client import BackendAPIClient
from logging_config import get_logger
from models.catalog import ProductOverride
from models.page import Page
from modules.query import ListQuery, OVERRIDE_QUERY
from modules.validation import parse_price, validate_fields, validate_required


logger = get_logger(__name__)

# Prices closer than this are considered unchanged
PRICE_EPSILON = Decimal("0.001")


class OverrideService:
    """Role-scoped override operations with form validation."""

    def __init__(self, api_client: BackendAPIClient, role: str):
        self._api = api_client
        self.role = role

    def list(self, query: ListQuery = OVERRIDE_QUERY) -> Page:
        return self._api.list_overrides(query, role=self.role)

    def count_for_customer(self, customer_id: str) -> int:
        """Number of overrides a customer has (one-element page request)."""
        query = OVERRIDE_QUERY.with_filter("customerId", customer_id).with_size(2)
        return self._api.list_overrides(query, role=self.role).total_elements

    def create(self, product_id: str, customer_id: str, raw_price: str) -> None:
        """
        Raises:
            ValidationError: Missing product/customer or invalid price
        """
        price, price_error = parse_price(raw_price)
        validate_fields([
            ("productId", validate_required(product_id)),
            ("customerId", validate_required(customer_id)),
            ("overridePrice", price_error),
        ])
        self._api.create_override(product_id, customer_id, price, role=self.role)
        logger.info(f"Override created for product {product_id}, customer {customer_id}")

    def update(self, override: ProductOverride, raw_price: str) -> bool:
        """
        Change an override's price.

        Returns:
            False when the price is unchanged and no call was made

        Raises:
            ValidationError: Invalid price
        """
        price, price_error = parse_price(raw_price)
        validate_fields([("overridePrice", price_error)])

        if abs(price - override.override_price) <= PRICE_EPSILON:
            logger.debug(f"Override {override.id} unchanged; skipping update")
            return False

        self._api.update_override(override.id, price, role=self.role)
        logger.info(f"Override {override.id} price set to {price}")
        return True

    def delete(self, override_id: int) -> None:
        self._api.delete_override(override_id, role=self.role)
        logger.info(f"Override {override_id} deleted")
