"""
Noteful API — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError          → 400 Bad Request
    ├── RegistrationError        → 422 Unprocessable Entity
    ├── AuthenticationError      → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

Services never build HTTP responses themselves; raising one of these is
the only way a handler reports a client or server error.
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned where a handler
                  explicitly opts in)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when a request body, path or query fails validation.

    HTTP: 400 Bad Request

    Covers malformed identifiers, missing titles/names, and folder or tag
    references that do not belong to the authenticated user.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class RegistrationError(NotefulError):
    """
    Raised when a registration payload is rejected.

    HTTP: 422 Unprocessable Entity

    The response carries `reason` and `location` so a signup form can
    highlight the offending field.
    """

    reason = "ValidationError"

    def __init__(
        self,
        message: str,
        location: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if location:
            ctx["location"] = location
        super().__init__(message=message, context=ctx)
        self.location = location


class AuthenticationError(NotefulError):
    """
    Raised when a request has no usable credentials.

    HTTP: 401 Unauthorized

    When: missing/expired/forged bearer token, or bad login credentials.
    The message never distinguishes "unknown user" from "wrong password".
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(NotefulError):
    """
    Raised when a requested resource does not exist for the current user.

    HTTP: 404 Not Found

    Lookups are always scoped by user id, so a record owned by somebody
    else produces exactly the same error as a record that does not exist.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotefulError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error

    The message returned to the client is always generic. Details are
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
