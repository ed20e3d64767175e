"""
Session authentication.

The backend issues a bearer token at login. OrderDesk keeps it, together
with the role flag, in the signed Flask session and attaches it to every
authenticated backend call. Logout, expiry or a 401 from the backend clear
both and send the user to the login page of their role.

Roles:
    manager -> /login/manager
    agent   -> /login/agent
    admin   -> /admin
"""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import flash, redirect, session, url_for

from core.api_client import BackendAPIClient, ROLE_ADMIN, ROLE_AGENT, ROLE_MANAGER
from logging_config import get_logger
from modules import auth_token


logger = get_logger(__name__)

SESSION_TOKEN_KEY = "auth_token"
SESSION_ROLE_KEY = "user_role"

LOGIN_ENDPOINTS = {
    ROLE_MANAGER: "auth.login_manager",
    ROLE_AGENT: "auth.login_agent",
    ROLE_ADMIN: "auth.login_admin",
}

HOME_ENDPOINTS = {
    ROLE_MANAGER: "orders.list_orders",
    ROLE_AGENT: "orders.list_orders",
    ROLE_ADMIN: "managers.list_managers",
}


def get_token() -> Optional[str]:
    """Bearer token of the current session (used as the API token provider)."""
    return session.get(SESSION_TOKEN_KEY)


def current_role() -> Optional[str]:
    return session.get(SESSION_ROLE_KEY)


def login(api_client: BackendAPIClient, role: str, identifier: str, password: str) -> str:
    """
    Log in against the backend and store the token in the session.

    Args:
        api_client: Backend client
        role: "manager", "agent" or "admin"
        identifier: Email (manager/agent) or admin user name
        password: Password

    Returns:
        The stored role

    Raises:
        ValueError: Unknown role
        BackendError: Login rejected or backend unavailable
    """
    if role == ROLE_MANAGER:
        token = api_client.login_manager(identifier, password)
    elif role == ROLE_AGENT:
        token = api_client.login_agent(identifier, password)
    elif role == ROLE_ADMIN:
        token = api_client.login_admin(identifier, password)
    else:
        raise ValueError(f"Unknown role: {role}")

    # The role claim wins when present; the login page chosen is the fallback
    stored_role = auth_token.get_role(token) or role
    if stored_role not in LOGIN_ENDPOINTS:
        stored_role = role

    language = session.get("language")
    session.clear()
    if language:
        session["language"] = language
    session[SESSION_TOKEN_KEY] = token
    session[SESSION_ROLE_KEY] = stored_role
    session.modified = True
    logger.info(f"Logged in as {stored_role} (user {auth_token.get_user_id(token) or 'unknown'})")
    return stored_role


def logout() -> Optional[str]:
    """Clear token and role; returns the role that was logged in."""
    role = session.pop(SESSION_ROLE_KEY, None)
    session.pop(SESSION_TOKEN_KEY, None)
    session.modified = True
    return role


def login_url(role: Optional[str]) -> str:
    return url_for(LOGIN_ENDPOINTS.get(role or ROLE_MANAGER, LOGIN_ENDPOINTS[ROLE_MANAGER]))


def home_url(role: Optional[str]) -> str:
    return url_for(HOME_ENDPOINTS.get(role or ROLE_MANAGER, HOME_ENDPOINTS[ROLE_MANAGER]))


def login_required(*roles: str):
    """
    Require a live session with one of the given roles.

    A missing or expired token, or a role that is not allowed, clears the
    session and redirects to the login page of the first allowed role.
    """
    allowed = roles or tuple(LOGIN_ENDPOINTS)

    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            token = get_token()
            role = current_role()
            if not token or auth_token.is_expired(token) or role not in allowed:
                if token:
                    logger.info(f"Session rejected for role={role}; redirecting to login")
                    flash("auth.session_expired", "warning")
                logout()
                return redirect(login_url(allowed[0]))
            return view(*args, **kwargs)
        return wrapped
    return decorator
