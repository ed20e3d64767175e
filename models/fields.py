"""Parsing helpers shared by the backend payload models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional


def to_decimal(value: Any, default: str = "0") -> Decimal:
    """
    Convert a JSON number (or numeric string) to Decimal.

    Floats go through str() so 10.1 becomes Decimal("10.1"), not its
    binary expansion.
    """
    if value is None or value == "":
        return Decimal(default)
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(default)


def to_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the backend, or None."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
