"""
Vidly Backend — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the different failure classes.
Why:   Services raise these instead of building responses, and the global
       handlers registered in main.py turn each class into one HTTP status.
How:   Each exception carries a user-facing message and an optional context
       dict. The message is returned verbatim; the context is for logs.

Exception Hierarchy:
    VidlyError (base)
    ├── ValidationError          → 400 Bad Request (bad payload or reference)
    ├── InvalidTokenError        → 400 Bad Request (token present but unusable)
    ├── AuthenticationError      → 401 Unauthorized (no token at all)
    ├── PermissionDeniedError    → 403 Forbidden (authenticated, not admin)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

The three auth-related codes (400/401/403) are distinct on purpose and must
never be collapsed into a single "unauthorized" response.
"""

from typing import Any, Dict, Optional


class VidlyError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(VidlyError):
    """
    Raised when client input cannot be accepted.

    Covers payload constraint failures, references to entities that do not
    exist ("Invalid genre."), business-rule rejections ("Movie not in stock.")
    and bad login credentials.
    HTTP:    400 Bad Request
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


class InvalidTokenError(VidlyError):
    """
    Raised when an auth token is present but fails verification.

    HTTP:    400 Bad Request
    Why not 401: the client did send credentials; they are malformed, which
    is a bad request rather than a missing login.
    """

    def __init__(
        self,
        message: str = "Invalid token.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(VidlyError):
    """Raised when a protected route is called without a token. HTTP 401."""

    def __init__(
        self,
        message: str = "Access denied. No token provided.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(VidlyError):
    """Raised when the verified claims lack the required privilege. HTTP 403."""

    def __init__(
        self,
        message: str = "Access denied.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(VidlyError):
    """
    Raised when a resource addressed by identifier does not exist.

    What:    The path identifier was malformed or nothing matched it.
    HTTP:    404 Not Found

    Message:
        With a resource name: "The <resource> with the given ID was not found."
        A fully custom message can be passed instead (e.g. "Invalid ID.").
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The {resource} with the given ID was not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(VidlyError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. Driver errors
        can include hostnames, collection names or document contents, so
        they are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
