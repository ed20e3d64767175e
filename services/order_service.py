"""
Order workflows for managers and agents.

Wraps the backend order endpoints for one role and applies the local
state transitions that follow a confirmed change:

    cancel    -> held order becomes CANCELLED (no refetch)
    done      -> held order becomes DONE
    discount  -> held order gets the submitted discount

Discounts are computed client-side (modules.pricing) and submitted as
an absolute amount rounded to cents. Backend rejections propagate as
BackendError subclasses; nothing is retried.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Tuple

from core.api_client import BackendAPIClient
from logging_config import get_logger
from models.catalog import Customer
from models.order import Order, OrderStatus
from models.page import Page
from modules.pricing import DiscountMode, compute_discount
from modules.query import ListQuery, ORDER_QUERY


logger = get_logger(__name__)


class OrderService:
    """
    Role-scoped order operations.

    Attributes:
        role: "manager" or "agent"
    """

    def __init__(self, api_client: BackendAPIClient, role: str, frontend_url: str = ""):
        self._api = api_client
        self.role = role
        self._frontend_url = frontend_url.rstrip("/")

    def list(self, query: ListQuery = ORDER_QUERY) -> Page:
        page = self._api.list_orders(query, role=self.role)
        logger.debug(
            f"Fetched {len(page.content)} orders (page {query.page + 1}/{page.total_pages})"
        )
        return page

    def get(self, order_id: str) -> Order:
        return self._api.get_order(order_id, role=self.role)

    def customers(self) -> List[Customer]:
        return self._api.list_customers(role=self.role)

    def create(self, customer_id: Optional[str] = None) -> Optional[str]:
        """
        Create an EMPTY order (a store link to share with the customer).

        Returns:
            The new order id as returned by the backend
        """
        customer_id = (customer_id or "").strip() or None
        created = self._api.create_order(customer_id, role=self.role)
        logger.info(f"Order created (customer={customer_id or 'none'})")
        # Backend answers with either the new order or its bare id
        if isinstance(created, dict):
            created = created.get("id")
        return str(created) if created else None

    def mark_done(self, order: Order) -> Order:
        self._api.mark_order_done(order.id, role=self.role)
        logger.info(f"Order {order.short_id} marked done")
        return order.with_status(OrderStatus.DONE)

    def cancel(self, order: Order) -> Order:
        self._api.mark_order_cancelled(order.id, role=self.role)
        logger.info(f"Order {order.short_id} cancelled")
        return order.with_status(OrderStatus.CANCELLED)

    def apply_discount(self, order: Order, raw_input: str, mode: DiscountMode) -> Tuple[Order, Decimal]:
        """
        Validate, compute and submit a discount.

        Args:
            order: Order being discounted (its line items set the subtotal)
            raw_input: Operator input
            mode: ABSOLUTE or PERCENTAGE

        Returns:
            (order with the new discount, submitted discount)

        Raises:
            ValidationError: Input rejected; nothing was submitted
            BackendError: Backend rejected or could not be reached
        """
        discount = compute_discount(order.items, raw_input, mode)
        self._api.update_order_discount(order.id, discount, role=self.role)
        logger.info(f"Order {order.short_id} discount set to {discount} ({mode.value} input)")
        return order.with_discount(discount), discount

    def store_link(self, order_id: str) -> str:
        """Shareable link the customer opens to place the order."""
        return f"{self._frontend_url}/store/order/{order_id}"
