"""
Catalog and account models.

Plain immutable records for customers, products, categories, locations,
agents, managers and per-customer product overrides, as returned by the
backend API.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any, Optional

from .fields import to_decimal


@dataclass(frozen=True)
class Customer:
    """A customer belonging to a manager (and optionally an agent)."""

    id: str
    name: str
    phone_number: str = ""
    email: str = ""
    street_address: str = ""
    city: str = ""
    user_id: str = ""
    agent_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Customer":
        agent_id = data.get("agentId")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            phone_number=data.get("phoneNumber") or "",
            email=data.get("email") or "",
            street_address=data.get("streetAddress") or "",
            city=data.get("city") or "",
            user_id=str(data.get("userId") or data.get("managerId") or ""),
            agent_id=int(agent_id) if agent_id not in (None, "") else None,
        )


@dataclass(frozen=True)
class Category:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(id=int(data.get("id", 0)), name=data.get("category") or data.get("name") or "")


@dataclass(frozen=True)
class Product:
    """
    Catalog product.

    special_price is the selling price; original_price is shown crossed out
    when higher. Overrides supersede special_price for one customer.
    """

    id: str
    name: str
    original_price: Decimal = Decimal("0")
    special_price: Decimal = Decimal("0")
    category_id: Optional[int] = None
    description: str = ""

    @property
    def price(self) -> Decimal:
        """Price a customer pays (special price when set)."""
        return self.special_price if self.special_price > 0 else self.original_price

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        category_id = data.get("categoryId")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            original_price=to_decimal(data.get("originalPrice")),
            special_price=to_decimal(data.get("specialPrice", data.get("price"))),
            category_id=int(category_id) if category_id not in (None, "") else None,
            description=data.get("description") or "",
        )


@dataclass(frozen=True)
class Location:
    """Pickup location of a seller."""

    id: int
    name: str
    street_address: str = ""
    city: str = ""
    phone_number: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        return cls(
            id=int(data.get("id", 0)),
            name=data.get("name") or "",
            street_address=data.get("streetAddress") or "",
            city=data.get("city") or "",
            phone_number=data.get("phoneNumber") or "",
        )


@dataclass(frozen=True)
class Agent:
    """Sales agent working for a manager."""

    id: int
    first_name: str
    last_name: str
    email: str = ""
    phone_number: str = ""
    street_address: str = ""
    city: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Agent":
        return cls(
            id=int(data.get("id", 0)),
            first_name=data.get("firstName") or "",
            last_name=data.get("lastName") or "",
            email=data.get("email") or "",
            phone_number=data.get("phoneNumber") or "",
            street_address=data.get("streetAddress") or "",
            city=data.get("city") or "",
        )


@dataclass(frozen=True)
class Manager:
    """Business owner account, administered by the admin."""

    id: str
    first_name: str
    last_name: str
    email: str = ""
    phone_number: str = ""
    date_of_birth: str = ""
    """ISO date (YYYY-MM-DD) as sent by the backend, or empty"""
    street_address: str = ""
    city: str = ""
    business_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Manager":
        return cls(
            id=str(data.get("id", "")),
            first_name=data.get("firstName") or "",
            last_name=data.get("lastName") or "",
            email=data.get("email") or "",
            phone_number=data.get("phoneNumber") or "",
            date_of_birth=str(data.get("dateOfBirth") or "")[:10],
            street_address=data.get("streetAddress") or "",
            city=data.get("city") or "",
            business_name=data.get("businessName") or "",
        )

    def to_profile_form(self) -> Dict[str, str]:
        """Form values for the profile page, keyed by backend field name."""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phoneNumber": self.phone_number,
            "dateOfBirth": self.date_of_birth,
            "streetAddress": self.street_address,
            "city": self.city,
            "businessName": self.business_name,
        }


@dataclass(frozen=True)
class ProductOverride:
    """
    A customer-specific price for a product.

    Supersedes the product's catalog price for that customer only.
    """

    id: int
    product_id: str
    customer_id: str
    override_price: Decimal
    original_price: Decimal = Decimal("0")
    agent_id: Optional[int] = None
    product_name: str = ""
    customer_name: str = ""

    @property
    def savings(self) -> Decimal:
        """Difference between catalog and override price (may be negative)."""
        return self.original_price - self.override_price

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductOverride":
        agent_id = data.get("agentId")
        return cls(
            id=int(data.get("id", 0)),
            product_id=str(data.get("productId", "")),
            customer_id=str(data.get("customerId", "")),
            override_price=to_decimal(data.get("overridePrice")),
            original_price=to_decimal(data.get("originalPrice")),
            agent_id=int(agent_id) if agent_id not in (None, "") else None,
            product_name=data.get("productName") or "",
            customer_name=data.get("customerName") or "",
        )
