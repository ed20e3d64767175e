"""
Services layer for OrderDesk.

This module contains the workflow services used by the routes:
- auth_service: Session token storage and login_required guard
- OrderService: Role-scoped order operations and discount submission
- OverrideService: Role-scoped product override operations

Request Model:
    One HTTP request -> sequential backend calls -> render.
    Services are created per request with the caller's role; the shared
    BackendAPIClient reads the caller's token from the session.
"""

from .order_service import OrderService
from .override_service import OverrideService

__all__ = [
    "OrderService",
    "OverrideService",
]
