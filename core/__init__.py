"""
Core module for OrderDesk.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
- api_client: HTTP client for the order-management backend
"""

from .exceptions import (
    OrderDeskError,
    ValidationError,
    BackendError,
    AuthorizationError,
    BusinessRuleError,
    NotFoundError,
    BackendUnavailableError,
)
from .api_client import BackendAPIClient, ROLE_ADMIN, ROLE_AGENT, ROLE_MANAGER

__all__ = [
    "OrderDeskError",
    "ValidationError",
    "BackendError",
    "AuthorizationError",
    "BusinessRuleError",
    "NotFoundError",
    "BackendUnavailableError",
    "BackendAPIClient",
    "ROLE_ADMIN",
    "ROLE_AGENT",
    "ROLE_MANAGER",
]
