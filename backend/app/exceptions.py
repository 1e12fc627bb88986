"""
Catalog Backend - Custom Exception Hierarchy
=============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{statusCode, message, error}` JSON bodies.
Who:   Raised by routes, DAOs, the auth service and the auth dependency.

Exception Hierarchy:
    CatalogError (base)
    ├── ValidationError       → 400 Bad Request (client can fix)
    ├── AuthenticationError   → 401 Unauthorized
    ├── NotFoundError         → 404 Not Found
    ├── ConflictError         → 409 Conflict
    └── DatabaseError         → 500 Internal Server Error

Absence is NOT an exception at the DAO level: DAOs return None and the
route decides whether that means NotFoundError.
"""

from typing import Any, Dict, List, Optional


class CatalogError(Exception):
    """
    Base exception for all catalog application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CatalogError):
    """
    Raised when client input fails validation.

    Carries a list of human-readable violations; the response body's
    `message` is that list, e.g. ["limit cannot exceed 100", "invalid sortBy field"].
    """

    status_code = 400
    error = "Bad Request"

    def __init__(
        self,
        messages: List[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.messages = list(messages)
        super().__init__(message="; ".join(self.messages), context=context)


class AuthenticationError(CatalogError):
    """
    Raised for bad credentials and for missing, invalid or expired tokens.

    The message never says which part of the credentials was wrong.
    """

    status_code = 401
    error = "Unauthorized"

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(CatalogError):
    """
    Raised when a requested resource does not exist.

    Message format: "<Resource> with ID <id> not found".
    """

    status_code = 404
    error = "Not Found"

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with ID {resource_id} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(CatalogError):
    """
    Raised when a write collides with a uniqueness constraint.

    When: Duplicate (name, service) version pair, duplicate username.
    """

    status_code = 409
    error = "Conflict"

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(CatalogError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always the generic
    "Internal server error"; the original error is kept in `context`
    and logged server-side only.
    """

    status_code = 500
    error = "Internal Server Error"

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
