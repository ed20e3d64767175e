"""
Shared fixtures for the OrderDesk test suite.

The backend is never contacted: routes get a MagicMock in place of the
BackendAPIClient, and the API client tests mock requests.Session.
"""

import time
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from jose import jwt

from app import create_app
from config import TestingConfig
from core.api_client import BackendAPIClient
from models.order import CustomerRef, LineItem, Order, OrderStatus


def make_token(role="MANAGER", user_id="user-1", expires_in=3600, **extra_claims):
    """Build a signed JWT shaped like the backend's tokens."""
    claims = {"roles": [role], "userId": user_id, "exp": int(time.time()) + expires_in}
    claims.update(extra_claims)
    return jwt.encode(claims, "test-signing-key", algorithm="HS256")


def make_order(status=OrderStatus.PLACED, order_id="a1b2c3d4-0000-0000-0000-000000000001", **kwargs):
    """Order with [2 x 10.00, 1 x 5.00] (subtotal 25.00)."""
    defaults = dict(
        id=order_id,
        status=status,
        items=(
            LineItem("Bread", 2, Decimal("10.00"), product_id="p-1"),
            LineItem("Milk", 1, Decimal("5.00"), product_id="p-2"),
        ),
        total_price=Decimal("25.00"),
        created_at=datetime(2024, 3, 1, 9, 30),
        placed_at=datetime(2024, 3, 2, 12, 0) if status is not OrderStatus.EMPTY else None,
        customer=CustomerRef(id="c-1", name="Dana Levi", phone="0501234567"),
    )
    defaults.update(kwargs)
    return Order(**defaults)


@pytest.fixture
def api():
    """Mock backend client with the real client's interface."""
    return MagicMock(spec=BackendAPIClient)


@pytest.fixture
def app(api):
    """Flask app in testing mode wired to the mock backend client."""
    app = create_app(TestingConfig)
    app.config["API_CLIENT"] = api
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def login_as(client, role="manager", token=None, language="en"):
    """Put a token and role into the test client's session."""
    with client.session_transaction() as sess:
        sess["auth_token"] = token or make_token(role.upper())
        sess["user_role"] = role
        sess["language"] = language


@pytest.fixture
def manager_client(client):
    login_as(client, "manager")
    return client


@pytest.fixture
def agent_client(client):
    login_as(client, "agent")
    return client
