"""
Shared helpers for route handlers.

Services live in app.config (like the API client) or are built per request
for the caller's role.
"""

from typing import Dict, Iterable, Optional

from flask import current_app, flash, request, session, url_for

from core.api_client import BackendAPIClient
from core.exceptions import BackendError
from modules.i18n import DEFAULT_LANGUAGE, translate_backend_message
from modules.validation import sanitize_text
from services import OrderService, OverrideService
from services.auth_service import current_role


def api_client() -> BackendAPIClient:
    return current_app.config["API_CLIENT"]


def current_language() -> str:
    return session.get("language", current_app.config.get("DEFAULT_LANGUAGE", DEFAULT_LANGUAGE))


def order_service() -> OrderService:
    return OrderService(api_client(), current_role(), current_app.config.get("FRONTEND_URL", ""))


def override_service() -> OverrideService:
    return OverrideService(api_client(), current_role())


def backend_message(error: BackendError, fallback_key: str = "errors.generic") -> str:
    """User-facing text for a backend rejection (translated when known)."""
    return translate_backend_message(error.user_message, current_language()) or fallback_key


def flash_backend_error(error: BackendError, fallback_key: str = "errors.generic") -> None:
    flash(backend_message(error, fallback_key), "error")


def form_values(fields: Iterable[str], max_lengths: Optional[Dict[str, int]] = None) -> Dict[str, str]:
    """
    Read and sanitize text fields from the submitted form.

    Passwords are passed through untouched.
    """
    max_lengths = max_lengths or {}
    values = {}
    for name in fields:
        raw = request.form.get(name, "")
        if "password" in name.lower():
            values[name] = raw
        else:
            values[name] = sanitize_text(raw, max_lengths.get(name))
    return values


def list_url(endpoint: str, query, page: Optional[int] = None, **values) -> str:
    """URL of a list page that keeps the current sort, size and filters."""
    if page is not None:
        query = query.goto(page)
    args = query.to_args()
    args.update(values)
    return url_for(endpoint, **args)
