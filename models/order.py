"""
Order data models.

These models mirror the order payloads returned by the backend API.
The lifecycle is owned by the server:

    EMPTY -> PLACED -> (DONE | EXPIRED | CANCELLED)

The client only moves its local copy forward after the server confirmed
a change (see Order.with_status / Order.with_discount).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple

from .fields import to_decimal, to_datetime, to_iso


class OrderStatus(Enum):
    """
    Status of an order.

    Lifecycle:
        EMPTY -> PLACED -> (DONE | EXPIRED | CANCELLED)
    """

    EMPTY = "EMPTY"
    """Link created, customer has not placed the order yet."""

    PLACED = "PLACED"
    """Customer placed the order through the store link."""

    DONE = "DONE"
    """Order fulfilled."""

    EXPIRED = "EXPIRED"
    """Store link expired before the order was placed."""

    CANCELLED = "CANCELLED"
    """Order cancelled by a manager or agent."""

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["OrderStatus"]:
        """Return the status for a (case-insensitive) name, or None."""
        if not value:
            return None
        try:
            return cls(str(value).upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class LineItem:
    """
    One product entry within an order.
    """

    product_name: str
    """Product name at the time the order was placed."""

    quantity: int
    """Number of units (positive)."""

    unit_price: Decimal
    """Price per unit (non-negative)."""

    product_id: str = ""
    """Backend product identifier."""

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the backend's ProductDataForOrder shape."""
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "quantity": self.quantity,
            "pricePerUnit": float(self.unit_price),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineItem":
        """Create from a backend payload."""
        return cls(
            product_id=str(data.get("productId", "") or ""),
            product_name=data.get("productName", ""),
            quantity=int(data.get("quantity", 0) or 0),
            unit_price=to_decimal(data.get("pricePerUnit")),
        )


@dataclass(frozen=True)
class CustomerRef:
    """Snapshot of the customer linked to an order."""

    id: str
    name: str = ""
    phone: str = ""
    email: str = ""
    street_address: str = ""
    city: str = ""


@dataclass(frozen=True)
class AgentRef:
    """Agent that created the order (None for manager-created orders)."""

    id: str
    name: str = ""


@dataclass(frozen=True)
class Order:
    """
    An order as returned by the backend.

    This is a FROZEN dataclass. Local state changes (after a confirmed
    cancel, done or discount update) produce a new instance.
    """

    id: str
    status: OrderStatus
    items: Tuple[LineItem, ...] = ()
    discount: Decimal = Decimal("0")
    total_price: Decimal = Decimal("0")
    """Server-computed total, displayed as-is."""

    created_at: Optional[datetime] = None
    placed_at: Optional[datetime] = None
    done_at: Optional[datetime] = None
    link_expires_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    delivery_date: Optional[str] = None

    customer: Optional[CustomerRef] = None
    agent: Optional[AgentRef] = None
    notes: str = ""
    products_version: int = 0

    @property
    def subtotal(self) -> Decimal:
        """Sum of line-item subtotals (before discount)."""
        return sum((item.subtotal for item in self.items), Decimal("0"))

    @property
    def is_open(self) -> bool:
        """True while the order can still be cancelled or completed."""
        return self.status in (OrderStatus.EMPTY, OrderStatus.PLACED)

    @property
    def short_id(self) -> str:
        return self.id[:8]

    def with_status(self, status: OrderStatus) -> "Order":
        """Copy of this order with a new status."""
        return replace(self, status=status)

    def with_discount(self, discount: Decimal) -> "Order":
        """Copy of this order with a new discount; total price is kept."""
        return replace(self, discount=discount)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary (backend field names)."""
        data: Dict[str, Any] = {
            "id": self.id,
            "status": self.status.value,
            "products": [item.to_dict() for item in self.items],
            "discount": float(self.discount),
            "totalPrice": float(self.total_price),
            "createdAt": to_iso(self.created_at),
            "placedAt": to_iso(self.placed_at),
            "doneAt": to_iso(self.done_at),
            "linkExpiresAt": to_iso(self.link_expires_at),
            "updatedAt": to_iso(self.updated_at),
            "deliveryDate": self.delivery_date,
            "notes": self.notes,
            "productsVersion": self.products_version,
        }
        if self.customer:
            data.update({
                "customerId": self.customer.id,
                "customerName": self.customer.name,
                "customerPhone": self.customer.phone,
                "customerEmail": self.customer.email,
                "customerStreetAddress": self.customer.street_address,
                "customerCity": self.customer.city,
            })
        if self.agent:
            data.update({"agentId": self.agent.id, "agentName": self.agent.name})
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        """
        Create Order from a backend payload.

        Args:
            data: Order JSON object

        Returns:
            Order instance
        """
        customer = None
        if data.get("customerId"):
            customer = CustomerRef(
                id=str(data["customerId"]),
                name=data.get("customerName") or "",
                phone=data.get("customerPhone") or "",
                email=data.get("customerEmail") or "",
                street_address=data.get("customerStreetAddress") or "",
                city=data.get("customerCity") or "",
            )

        agent = None
        if data.get("agentId"):
            agent = AgentRef(
                id=str(data["agentId"]),
                name=data.get("agentName") or "",
            )

        items: List[LineItem] = [
            LineItem.from_dict(p) for p in (data.get("products") or [])
        ]

        return cls(
            id=str(data.get("id", "")),
            status=OrderStatus.parse(data.get("status")) or OrderStatus.EMPTY,
            items=tuple(items),
            discount=to_decimal(data.get("discount")),
            total_price=to_decimal(data.get("totalPrice")),
            created_at=to_datetime(data.get("createdAt")),
            placed_at=to_datetime(data.get("placedAt")),
            done_at=to_datetime(data.get("doneAt")),
            link_expires_at=to_datetime(data.get("linkExpiresAt")),
            updated_at=to_datetime(data.get("updatedAt")),
            delivery_date=data.get("deliveryDate"),
            customer=customer,
            agent=agent,
            notes=data.get("notes") or "",
            products_version=int(data.get("productsVersion", 0) or 0),
        )


@dataclass(frozen=True)
class PlaceOrderRequest:
    """
    Payload a customer submits from the store link to place an order.
    """

    customer_name: str
    customer_phone: str
    customer_street_address: str
    customer_city: str
    pickup_location_id: int
    items: Tuple[LineItem, ...] = field(default_factory=tuple)
    customer_email: str = ""
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "customerName": self.customer_name,
            "customerPhone": self.customer_phone,
            "customerStreetAddress": self.customer_street_address,
            "customerCity": self.customer_city,
            "pickupLocationId": self.pickup_location_id,
            "products": [item.to_dict() for item in self.items],
        }
        if self.customer_email:
            data["customerEmail"] = self.customer_email
        if self.notes:
            data["notes"] = self.notes
        return data
