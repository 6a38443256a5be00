"""
Notes API - Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the few error scenarios the API has.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by validators (via the pipeline), services, and security.
When:  During request processing.

Exception Hierarchy:
    NotesError (base)
    ├── ValidationError              → 400 Bad Request, list of field failures
    ├── UnsupportedApiVersionError   → 400 Bad Request
    ├── AuthenticationError          → 401 Unauthorized
    └── NotFoundError                → 404 Not Found (absent OR not owned)

Anything else (including SQLAlchemy errors) is deliberately left unwrapped and
reaches the catch-all handler as a 500.
"""

from typing import Any, Dict, List, Optional

from notes_api.schemas.note import ValidationFailure


class NotesError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  Error description returned in the response body
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesError):
    """
    Raised by the request pipeline when one or more validators fail.

    HTTP:  400 Bad Request
    Body:  the failures themselves, e.g.
        [
            {"field": "title", "message": "'Title' must not be empty."},
            {"field": "userId", "message": "'User Id' must not be equal to '...'."}
        ]
    """

    def __init__(
        self,
        failures: List[ValidationFailure],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.failures = list(failures)
        summary = "; ".join(f"{f.field}: {f.message}" for f in self.failures)
        super().__init__(message=f"Validation failed: {summary}", context=context)


class NotFoundError(NotesError):
    """
    Raised when a note does not exist or belongs to another user.

    HTTP:  404 Not Found

    Both cases produce the same message so a caller cannot probe for the
    existence of other users' notes.
    """

    def __init__(
        self,
        name: str,
        key: Any,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["entity"] = name
        ctx["key"] = str(key)
        super().__init__(message=f'Entity "{name}" ({key}) not found.', context=ctx)
        self.name = name
        self.key = key


class AuthenticationError(NotesError):
    """
    Raised when a request carries no usable bearer token.

    HTTP:  401 Unauthorized, with `WWW-Authenticate: Bearer`
    When:  Missing header, bad signature, expired token, wrong audience or
           issuer, or a user-id claim that is absent or not a UUID.
    """

    def __init__(
        self,
        message: str = "Not authenticated",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnsupportedApiVersionError(NotesError):
    """Raised when the `{version}` path segment is not a configured API version."""

    def __init__(
        self,
        version: str,
        supported: List[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["supported"] = supported
        message = (
            f"The HTTP resource does not support the API version '{version}'. "
            f"Supported versions: {', '.join(supported)}"
        )
        super().__init__(message=message, context=ctx)
        self.version = version
