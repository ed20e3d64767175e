"""
Custom exceptions for OrderDesk.

Exception Hierarchy:
    OrderDeskError (base)
    ├── ValidationError          - Client-side input rejected (shown inline)
    └── BackendError             - Backend call failed
        ├── AuthorizationError   - 401/403, session must be cleared
        ├── BusinessRuleError    - Backend rejected the request with a user message
        ├── NotFoundError        - Resource does not exist (404)
        └── BackendUnavailableError - Network failure, timeout or 5xx

Usage:
    Validation errors never reach the backend.
    Backend errors are local to the operation that triggered them; nothing
    is retried automatically.
"""

from typing import Optional, Dict, Any


class OrderDeskError(Exception):
    """
    Base exception for all OrderDesk errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# CLIENT-SIDE ERRORS - Request is never sent
# =============================================================================

class ValidationError(OrderDeskError):
    """
    User input failed client-side validation.

    Carries a mapping of field name -> translation key so forms can show
    each error next to its field.
    """

    def __init__(self, errors: Dict[str, str], message: str = "Invalid input"):
        super().__init__(message, {"fields": dict(errors)})
        self.errors = dict(errors)

    @property
    def first_error(self) -> Optional[str]:
        """Translation key of the first failing field, if any."""
        return next(iter(self.errors.values()), None)


# =============================================================================
# BACKEND ERRORS - Request was sent and failed
# =============================================================================

class BackendError(OrderDeskError):
    """
    Base class for failed backend calls.

    Attributes:
        status_code: HTTP status (None when no response was received)
        user_message: Backend-provided message meant for the end user
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if status_code is not None:
            error_details["status_code"] = status_code
        super().__init__(message, error_details)
        self.status_code = status_code
        self.user_message = user_message


class AuthorizationError(BackendError):
    """
    Backend refused the bearer token (401) or the role (403).

    The stored token is cleared and the user is sent to the login page
    matching their role.
    """

    def __init__(self, status_code: int = 401, user_message: Optional[str] = None):
        super().__init__(
            f"Not authorized (HTTP {status_code})",
            status_code=status_code,
            user_message=user_message,
            details={"resolution": "Log in again"},
        )


class BusinessRuleError(BackendError):
    """
    Backend rejected the request for a business reason.

    The backend's userMessage is shown to the user, translated when a
    known phrase matches.
    """


class NotFoundError(BackendError):
    """Requested resource does not exist on the backend."""


class BackendUnavailableError(BackendError):
    """
    Backend could not be reached or failed internally.

    Covers connection errors, timeouts, undecodable responses and 5xx
    responses without a user message. Shown as a generic failure.
    """

    def __init__(
        self,
        message: str = "Backend is not available",
        status_code: Optional[int] = None
    ):
        super().__init__(
            message,
            status_code=status_code,
            details={"resolution": "Check that the backend API is running"},
        )
