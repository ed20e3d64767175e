"""
Backend REST API client.

This module wraps the order-management backend's HTTP API. One client is
created per application and shared by all request handlers; the bearer
token is looked up per call through a token provider, so each request
uses the token of the user making it.

ROLE SCOPING:
    Managers and agents see the same resources through different path
    prefixes:
        manager: /orders, /customers, /product-overrides
        agent:   /agent/orders, /agent/customers, /agent/product-overrides

ERROR MAPPING:
    connection error / timeout      -> BackendUnavailableError
    401 / 403                       -> AuthorizationError
    404                             -> NotFoundError
    other 4xx                       -> BusinessRuleError (userMessage)
    5xx with userMessage            -> BusinessRuleError
    5xx without userMessage         -> BackendUnavailableError

No retries: a failed call raises and the user re-triggers the action.

Usage:
    client = BackendAPIClient(
        "http://localhost:8080/api",
        token_provider=lambda: session.get("auth_token"),
    )
    page = client.list_orders(ORDER_QUERY, role="agent")
    client.update_order_discount(order.id, Decimal("2.50"), role="agent")
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

import requests

from logging_config import get_logger
from models.catalog import (
    Agent,
    Category,
    Customer,
    Location,
    Manager,
    Product,
    ProductOverride,
)
from models.order import Order, PlaceOrderRequest
from models.page import Page
from modules.query import ListQuery
from .exceptions import (
    AuthorizationError,
    BackendUnavailableError,
    BusinessRuleError,
    NotFoundError,
)


ROLE_MANAGER = "manager"
ROLE_AGENT = "agent"
ROLE_ADMIN = "admin"

TokenProvider = Callable[[], Optional[str]]


class BackendAPIClient:
    """
    HTTP client for the order-management backend.

    Attributes:
        base_url: API root, e.g. "http://localhost:8080/api"
        timeout: Seconds before a call is abandoned
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root URL (trailing slash optional)
            token_provider: Callable returning the current bearer token or None
            timeout: Per-request timeout in seconds
            session: requests.Session to use (a new one by default)
            logger: Logger instance (creates default if not provided)

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url:
            raise ValueError("base_url is required - set API_BASE_URL")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token_provider = token_provider or (lambda: None)
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        self._logger = logger or get_logger(__name__)

    # =========================================================================
    # LOW-LEVEL REQUEST HANDLING
    # =========================================================================

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        authenticated: bool = True,
    ) -> Any:
        """
        Perform a request and return the decoded body.

        Returns:
            Parsed JSON, plain text for non-JSON bodies, or None when empty

        Raises:
            BackendError subclasses (see module docstring)
        """
        url = f"{self.base_url}{path}"
        headers = {}
        if authenticated:
            token = self._token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        self._logger.debug(f"{method} {path} params={params or {}}")

        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout:
            self._logger.error(f"{method} {path} timed out after {self.timeout}s")
            raise BackendUnavailableError(f"Request timed out: {method} {path}")
        except requests.RequestException as e:
            self._logger.error(f"{method} {path} failed: {e}")
            raise BackendUnavailableError(f"Request failed: {method} {path}")

        if response.status_code >= 400:
            self._raise_for_status(method, path, response)

        return self._decode(response)

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return None
        content_type = response.headers.get("Content-Type", "")
        if "json" in content_type:
            try:
                return response.json()
            except ValueError:
                raise BackendUnavailableError(
                    "Invalid JSON in backend response", status_code=response.status_code
                )
        return response.text

    def _raise_for_status(self, method: str, path: str, response: requests.Response) -> None:
        status = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = None
        user_message = None
        if isinstance(body, dict):
            user_message = body.get("userMessage") or body.get("message")

        if status in (401, 403):
            self._logger.warning(f"{method} {path} rejected with HTTP {status}")
            raise AuthorizationError(status_code=status, user_message=user_message)

        if status == 404:
            self._logger.warning(f"{method} {path} not found")
            raise NotFoundError(
                f"Not found: {path}", status_code=status, user_message=user_message
            )

        if status >= 500 and not user_message:
            self._logger.error(f"{method} {path} failed with HTTP {status}")
            raise BackendUnavailableError(f"Backend error on {method} {path}", status_code=status)

        self._logger.info(f"{method} {path} rejected (HTTP {status}): {user_message}")
        raise BusinessRuleError(
            f"Request rejected: {method} {path}",
            status_code=status,
            user_message=user_message,
        )

    @staticmethod
    def _scoped(path: str, role: str) -> str:
        """Prefix resource paths with /agent for agent sessions."""
        if role == ROLE_AGENT:
            return f"/agent{path}"
        return path

    def _get_page(self, path: str, query: ListQuery, factory, authenticated: bool = True) -> Page:
        data = self._request("GET", path, params=query.to_params(), authenticated=authenticated)
        return Page.from_dict(data or {}, factory, number=query.page, size=query.size)

    # =========================================================================
    # AUTH
    # =========================================================================

    def _login(self, path: str, payload: Dict[str, Any]) -> str:
        data = self._request("POST", path, json=payload, authenticated=False)
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise BackendUnavailableError("Login response did not contain a token")
        self._logger.info(f"Login succeeded via {path}")
        return token

    def login_manager(self, email: str, password: str) -> str:
        return self._login("/auth/login/manager", {"email": email, "password": password})

    def login_agent(self, email: str, password: str) -> str:
        return self._login("/auth/login/agent", {"email": email, "password": password})

    def login_admin(self, username: str, password: str) -> str:
        return self._login("/auth/login/admin", {"adminUserName": username, "password": password})

    # =========================================================================
    # MANAGERS (admin) AND AGENTS (manager)
    # =========================================================================

    def list_managers(self) -> List[Manager]:
        return [Manager.from_dict(m) for m in self._request("GET", "/users") or []]

    def create_manager(self, payload: Dict[str, Any]) -> Any:
        return self._request("POST", "/users", json=payload)

    def delete_manager(self, manager_id: str, email: str) -> Any:
        """The backend identifies the account by id and email together."""
        return self._request("DELETE", "/users", params={"id": manager_id, "email": email})

    def reset_manager_password(self, email: str, new_password: str) -> Any:
        return self._request(
            "PUT", "/users/reset-password", params={"email": email, "newPassword": new_password}
        )

    def get_current_user(self) -> Manager:
        return Manager.from_dict(self._request("GET", "/users/me") or {})

    def update_current_user(self, payload: Dict[str, Any]) -> Any:
        return self._request("PUT", "/users/me", json=payload)

    def update_current_user_password(
        self, old_password: str, new_password: str, confirmation: str
    ) -> Any:
        """Passwords travel as query params, as the backend expects."""
        return self._request(
            "PUT",
            "/users/me/update-password",
            params={
                "old_password": old_password,
                "new_password": new_password,
                "new_password_confirmation": confirmation,
            },
        )

    def list_agents(self) -> List[Agent]:
        return [Agent.from_dict(a) for a in self._request("GET", "/agents") or []]

    def create_agent(self, payload: Dict[str, Any]) -> Any:
        return self._request("POST", "/agents", json=payload)

    def update_agent(self, agent_id: int, payload: Dict[str, Any]) -> Any:
        return self._request("PUT", f"/agents/{agent_id}", json=payload)

    def delete_agent(self, agent_id: int) -> Any:
        return self._request("DELETE", f"/agents/{agent_id}")

    # =========================================================================
    # CUSTOMERS
    # =========================================================================

    def list_customers(self, role: str = ROLE_MANAGER) -> List[Customer]:
        data = self._request("GET", self._scoped("/customers", role)) or []
        return [Customer.from_dict(c) for c in data]

    def get_customer(self, customer_id: str, role: str = ROLE_MANAGER) -> Customer:
        return Customer.from_dict(self._request("GET", self._scoped(f"/customers/{customer_id}", role)))

    def create_customer(self, payload: Dict[str, Any], role: str = ROLE_MANAGER) -> Any:
        return self._request("POST", self._scoped("/customers", role), json=payload)

    def update_customer(self, customer_id: str, payload: Dict[str, Any], role: str = ROLE_MANAGER) -> Any:
        return self._request("PUT", self._scoped(f"/customers/{customer_id}", role), json=payload)

    def delete_customer(self, customer_id: str, role: str = ROLE_MANAGER) -> Any:
        return self._request("DELETE", self._scoped(f"/customers/{customer_id}", role))

    # =========================================================================
    # CATEGORIES AND LOCATIONS
    # =========================================================================

    def list_categories(self) -> List[Category]:
        return [Category.from_dict(c) for c in self._request("GET", "/categories") or []]

    def create_category(self, name: str) -> Any:
        return self._request("POST", "/categories", json={"category": name})

    def update_category(self, category_id: int, name: str) -> Any:
        return self._request("PUT", f"/categories/{category_id}", json={"category": name})

    def delete_category(self, category_id: int) -> Any:
        return self._request("DELETE", f"/categories/{category_id}")

    def list_locations(self) -> List[Location]:
        return [Location.from_dict(loc) for loc in self._request("GET", "/locations") or []]

    def create_location(self, payload: Dict[str, Any]) -> Any:
        return self._request("POST", "/locations", json=payload)

    def update_location(self, location_id: int, payload: Dict[str, Any]) -> Any:
        return self._request("PUT", f"/locations/{location_id}", json=payload)

    def delete_location(self, location_id: int) -> Any:
        return self._request("DELETE", f"/locations/{location_id}")

    # =========================================================================
    # PRODUCTS
    # =========================================================================

    def list_products(self, query: ListQuery, role: str = ROLE_MANAGER) -> Page:
        return self._get_page(self._scoped("/products", role), query, Product.from_dict)

    def get_product(self, product_id: str) -> Product:
        return Product.from_dict(self._request("GET", f"/products/{product_id}") or {})

    def create_product(self, payload: Dict[str, Any]) -> Any:
        return self._request("POST", "/products", json=payload)

    def update_product(self, product_id: str, payload: Dict[str, Any]) -> Any:
        return self._request("PUT", f"/products/{product_id}", json=payload)

    def delete_product(self, product_id: str) -> Any:
        return self._request("DELETE", f"/products/{product_id}")

    # =========================================================================
    # ORDERS
    # =========================================================================

    def list_orders(self, query: ListQuery, role: str = ROLE_MANAGER) -> Page:
        return self._get_page(self._scoped("/orders", role), query, Order.from_dict)

    def get_order(self, order_id: str, role: str = ROLE_MANAGER) -> Order:
        return Order.from_dict(self._request("GET", self._scoped(f"/orders/{order_id}", role)))

    def create_order(self, customer_id: Optional[str], role: str = ROLE_MANAGER) -> Any:
        """Create an EMPTY order (store link), optionally tied to a customer."""
        return self._request("POST", self._scoped("/orders", role), json={"customerId": customer_id})

    def mark_order_done(self, order_id: str, role: str = ROLE_MANAGER) -> Any:
        return self._request("PUT", self._scoped(f"/orders/{order_id}/status/done", role))

    def mark_order_cancelled(self, order_id: str, role: str = ROLE_MANAGER) -> Any:
        return self._request("PUT", self._scoped(f"/orders/{order_id}/status/cancelled", role))

    def update_order_discount(self, order_id: str, discount: Decimal, role: str = ROLE_MANAGER) -> Any:
        """Submit an absolute discount (already rounded to cents)."""
        return self._request(
            "PUT",
            self._scoped(f"/orders/{order_id}/discount", role),
            json={"discount": float(discount)},
        )

    # =========================================================================
    # PRODUCT OVERRIDES
    # =========================================================================

    def list_overrides(self, query: ListQuery, role: str = ROLE_MANAGER) -> Page:
        return self._get_page(self._scoped("/product-overrides", role), query, ProductOverride.from_dict)

    def create_override(
        self,
        product_id: str,
        customer_id: str,
        override_price: Decimal,
        role: str = ROLE_MANAGER
    ) -> Any:
        payload = {
            "productId": product_id,
            "customerId": customer_id,
            "overridePrice": float(override_price),
        }
        return self._request("POST", self._scoped("/product-overrides", role), json=payload)

    def update_override(self, override_id: int, override_price: Decimal, role: str = ROLE_MANAGER) -> Any:
        return self._request(
            "PUT",
            self._scoped(f"/product-overrides/override/{override_id}", role),
            json={"overridePrice": float(override_price)},
        )

    def delete_override(self, override_id: int, role: str = ROLE_MANAGER) -> Any:
        return self._request("DELETE", self._scoped(f"/product-overrides/override/{override_id}", role))

    # =========================================================================
    # PUBLIC (customer store link, no authentication)
    # =========================================================================

    def public_get_order(self, order_id: str) -> Order:
        return Order.from_dict(self._request("GET", f"/public/orders/{order_id}", authenticated=False))

    def public_order_products(self, order_id: str) -> List[Product]:
        """Products for an order's store page, with the customer's overrides applied."""
        data = self._request("GET", f"/public/products/order/{order_id}", authenticated=False) or []
        return [Product.from_dict(p) for p in data]

    def public_order_locations(self, order_id: str) -> List[Location]:
        data = self._request("GET", f"/public/locations/order/{order_id}", authenticated=False) or []
        return [Location.from_dict(loc) for loc in data]

    def public_place_order(self, order_id: str, request: PlaceOrderRequest) -> Any:
        return self._request(
            "PUT",
            f"/public/orders/{order_id}/place",
            json=request.to_dict(),
            authenticated=False,
        )

    # =========================================================================
    # HEALTH
    # =========================================================================

    def ping(self) -> bool:
        """True when the backend answers at all (any HTTP status)."""
        try:
            self._session.request("GET", f"{self.base_url}/public/health", timeout=self.timeout)
            return True
        except requests.RequestException:
            return False
