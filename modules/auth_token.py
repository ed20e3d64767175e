"""
Bearer token helpers.

Reads claims from the backend-issued JWT WITHOUT verifying the signature.
This is only used to decide what to display and when to send the user
back to the login page; the backend validates every request.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

from jose import jwt
from jose.exceptions import JOSEError


def decode_claims(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """Return the token's claims, or None if it is missing or malformed."""
    if not token:
        return None
    try:
        return jwt.get_unverified_claims(token)
    except (JOSEError, ValueError):
        return None


def get_role(token: Optional[str]) -> Optional[str]:
    """First entry of the 'roles' claim, lower-cased."""
    claims = decode_claims(token)
    if not claims:
        return None
    roles = claims.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    if not roles:
        return None
    return str(roles[0]).lower()


def get_user_id(token: Optional[str]) -> Optional[str]:
    claims = decode_claims(token)
    if not claims:
        return None
    user_id = claims.get("userId")
    return str(user_id) if user_id else None


def is_expired(token: Optional[str], now: Optional[float] = None) -> bool:
    """
    True when the token is missing, malformed, has no 'exp' claim, or
    'exp' (seconds since epoch) is not in the future.
    """
    claims = decode_claims(token)
    if not claims or not claims.get("exp"):
        return True
    current = time.time() if now is None else now
    try:
        return current >= float(claims["exp"])
    except (TypeError, ValueError):
        return True
