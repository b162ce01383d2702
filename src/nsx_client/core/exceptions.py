"""
NSX Client - Exception Hierarchy

This module contains all custom exceptions raised by the NSX client library.
"""

from datetime import datetime
from typing import Any


class NSXError(Exception):
    """Base exception for all NSX-related errors with enhanced context."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }


class ConfigurationError(NSXError):
    """Client not configured or invalid configuration."""


class ValidationError(NSXError):
    """One or more input parameters failed validation.

    Every violated field is reported, not just the first one found.
    """

    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.errors = errors or []


class RemoteError(NSXError):
    """The NSX manager answered with a non-2xx status or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.status_code = status_code
        self.response_text = response_text


class AuthenticationError(RemoteError):
    """Authentication failed."""


class AuthorizationError(RemoteError):
    """User doesn't have permission for the requested operation."""


class ResourceNotFoundError(RemoteError):
    """Requested API resource not found."""


class NetworkError(RemoteError):
    """Network communication error."""


class StructuralError(NSXError):
    """An XML document is malformed or lacks the elements an operation needs."""


class NotFoundError(NSXError):
    """Expected XML element is absent."""
