"""
ENotebook Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every failure the API reports.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) map them to HTTP
       status codes and JSON error envelopes.
Who:   Raised by services and the auth guard; caught by global handlers.

Exception Hierarchy:
    ENotebookError (base)
    ├── DuplicateEmailError      → 400 Bad Request
    ├── InvalidCredentialsError  → 400 Bad Request
    ├── InvalidIdError           → 400 Bad Request
    ├── UnauthorizedError        → 401 Unauthorized
    ├── InvalidTokenError        → 401 Unauthorized (wrapped by the auth guard)
    ├── ForbiddenError           → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    └── ConfigurationError       → 500 Internal Server Error / startup failure

`status_code` lives on each class so the exception handler in main.py can
stay a single function for the simple cases.
"""

from typing import Any, Dict, Optional


class ENotebookError(Exception):
    """
    Base exception for all ENotebook application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class DuplicateEmailError(ENotebookError):
    """
    Raised when registering (or updating to) an email that is already taken.

    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Sorry a user with this email already exists!",
            context=context,
        )


class InvalidCredentialsError(ENotebookError):
    """
    Raised on login with an unknown email or a wrong password.

    HTTP:    400 Bad Request

    The message is identical for both cases so the response cannot be used
    to discover which emails are registered.
    """

    status_code = 400

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid user credentials", context=context)


class InvalidIdError(ENotebookError):
    """Raised when a path identifier is not a well-formed UUID. HTTP 400."""

    status_code = 400

    def __init__(self, resource: str = "resource", raw_id: Optional[str] = None):
        super().__init__(
            message=f"Invalid {resource} id",
            context={"resource": resource, "raw_id": raw_id},
        )


class UnauthorizedError(ENotebookError):
    """
    Raised when a protected route is called without a valid identity token.

    HTTP:    401 Unauthorized
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Please authenticate using a valid token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidTokenError(ENotebookError):
    """
    Raised by the token service when a token fails verification.

    Bad signature, malformed structure, missing claims and (when expiry is
    configured) expired tokens all end up here. The auth guard converts it
    into UnauthorizedError.
    """

    status_code = 401

    def __init__(self, reason: str = "invalid token"):
        super().__init__(message="Invalid token", context={"reason": reason})
        self.reason = reason


class ForbiddenError(ENotebookError):
    """
    Raised when an authenticated user touches a resource they do not own.

    HTTP:    403 Forbidden
    """

    status_code = 403

    def __init__(
        self,
        message: str = "Not authorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ENotebookError):
    """
    Raised when a requested resource does not exist.

    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; services convert that None
    into this exception.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(ENotebookError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. Driver errors,
        SQL and constraint names are logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(ENotebookError):
    """Raised when a required setting (e.g. JWT_SECRET) is missing."""

    status_code = 500

    def __init__(
        self,
        message: str = "Server is misconfigured",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
