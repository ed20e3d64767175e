"""
Data models for OrderDesk.

This module contains immutable dataclasses for:
- Order: Backend order with line items, discount and lifecycle status
- Customer / Product / Category / Location / Agent / Manager: Catalog records
- ProductOverride: Customer-specific product price
- Page: One page of a paginated list endpoint

All models are frozen; local state changes produce new instances.
"""

from .order import Order, OrderStatus, LineItem, CustomerRef, AgentRef, PlaceOrderRequest
from .catalog import (
    Agent,
    Category,
    Customer,
    Location,
    Manager,
    Product,
    ProductOverride,
)
from .page import Page

__all__ = [
    # Order models
    "Order",
    "OrderStatus",
    "LineItem",
    "CustomerRef",
    "AgentRef",
    "PlaceOrderRequest",
    # Catalog models
    "Agent",
    "Category",
    "Customer",
    "Location",
    "Manager",
    "Product",
    "ProductOverride",
    # Pagination
    "Page",
]
