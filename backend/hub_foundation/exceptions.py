"""
Hub Foundation: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for every way a resource read can fail.
Why:   Each failure carries a typed `ErrorKind`, so the HTTP boundary can map
       kinds to status codes in one table instead of per-route try/except.
How:   Each exception class carries a message, an optional context dict, and
       its `kind`. The handler registered in main.py looks the kind up in
       `ERROR_STATUS` and returns a structured JSON error response.
Who:   Raised by the resource controller and model accessors; caught by the
       global handler.
When:  At the point of detection. Nothing below the boundary catches these.

Exception Hierarchy:
    HubFoundationError (base)
    ├── MethodNotAllowedError    → 405 (non-GET reached a read operation)
    ├── InvalidSyntaxError       → 400 (identifier failed validate_id)
    ├── ItemNotFoundError        → 404 (single lookup returned nothing)
    ├── BigLimitError            → 403 (?limit= above LIMIT_MAX)
    ├── TooManyIdsError          → 403 (?ids= longer than LIMIT_MAX)
    ├── ConfigurationError       → 500 (developer mistake, not user input)
    │   └── ScopeNotFoundError   → 500 (route wired to an unregistered scope)
    └── DatabaseError            → 500 (query execution failed)
"""

import enum
from typing import Any, Dict, Optional


class ErrorKind(str, enum.Enum):
    """Typed taxonomy of resource-read failures."""

    METHOD_NOT_ALLOWED = "method_not_allowed"
    INVALID_SYNTAX = "invalid_syntax"
    ITEM_NOT_FOUND = "item_not_found"
    BIG_LIMIT = "big_limit"
    TOO_MANY_IDS = "too_many_ids"
    CONFIGURATION = "configuration_error"
    DATABASE = "database_error"
    INTERNAL = "internal_error"


# What: Transport mapping used by the exception handler in main.py
# Client-input kinds are 4xx; configuration and database faults are 5xx
ERROR_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.INVALID_SYNTAX: 400,
    ErrorKind.ITEM_NOT_FOUND: 404,
    ErrorKind.BIG_LIMIT: 403,
    ErrorKind.TOO_MANY_IDS: 403,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.DATABASE: 500,
    ErrorKind.INTERNAL: 500,
}


class HubFoundationError(Exception):
    """
    Base exception for all Hub Foundation application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
        kind:     ErrorKind used by the boundary to pick a status code
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.kind]

    @property
    def is_client_error(self) -> bool:
        return self.status_code < 500


class MethodNotAllowedError(HubFoundationError):
    """
    Raised when a non-read request reaches a read-only operation.

    Routes only bind GET, so in practice this is unreachable. The guard stays
    so the controller is safe to mount under any router.
    """

    kind = ErrorKind.METHOD_NOT_ALLOWED

    def __init__(
        self,
        method: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if method:
            ctx["method"] = method
        super().__init__(message="Method not allowed.", context=ctx)


class InvalidSyntaxError(HubFoundationError):
    """
    Raised when an identifier (or ?limit=) is malformed.

    Raised before any query reaches the database: a bad id never costs a
    round trip.
    """

    kind = ErrorKind.INVALID_SYNTAX

    def __init__(
        self,
        message: str = "The identifier is invalid.",
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if value is not None:
            ctx["value"] = str(value)
        super().__init__(message=message, context=ctx)


class ItemNotFoundError(HubFoundationError):
    """
    Raised when a single-item lookup yields nothing.

    SQLAlchemy returns None for missing records (not an exception); the
    controller converts None into this error.
    """

    kind = ErrorKind.ITEM_NOT_FOUND

    def __init__(
        self,
        resource: str = "item",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = "The item you requested cannot be found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class BigLimitError(HubFoundationError):
    """Raised when ?limit= exceeds LIMIT_MAX."""

    kind = ErrorKind.BIG_LIMIT

    def __init__(
        self,
        limit: Optional[int] = None,
        limit_max: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if limit is not None:
            ctx["limit"] = limit
        if limit_max is not None:
            ctx["limit_max"] = limit_max
        super().__init__(
            message=(
                "You have requested too many resources per page. "
                "Please set a smaller limit."
            ),
            context=ctx,
        )


class TooManyIdsError(HubFoundationError):
    """Raised when ?ids= lists more than LIMIT_MAX identifiers."""

    kind = ErrorKind.TOO_MANY_IDS

    def __init__(
        self,
        count: Optional[int] = None,
        limit_max: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if count is not None:
            ctx["count"] = count
        if limit_max is not None:
            ctx["limit_max"] = limit_max
        super().__init__(
            message="You have requested too many ids. Please send a smaller amount.",
            context=ctx,
        )


class ConfigurationError(HubFoundationError):
    """
    Raised when the application itself is wired incorrectly.

    Never caused by client input. The boundary answers 500 and logs at ERROR
    so the mistake surfaces in monitoring rather than looking like a 404.
    """

    kind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str = "The server is misconfigured.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ScopeNotFoundError(ConfigurationError):
    """Raised when a route resolves to a scope the model accessor never registered."""

    def __init__(
        self,
        model: str,
        scope: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["model"] = model
        ctx["scope"] = scope
        super().__init__(
            message=f"Class {model} has no scope named `{scope}`",
            context=ctx,
        )
        self.model = model
        self.scope = scope


class DatabaseError(HubFoundationError):
    """
    Raised when database operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic.
        Detailed error info (SQL, constraint names) is logged server-side only.
    """

    kind = ErrorKind.DATABASE

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
