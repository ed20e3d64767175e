"""Helper modules for the OrderDesk application."""

__all__ = [
    "auth_token",
    "formatting",
    "i18n",
    "pricing",
    "query",
    "validation",
]
