"""
NSX Client - Core Infrastructure

This package contains the transport, configuration, models and exceptions.
"""

from .client import NSXClient, RequestResponseLogger
from .config_loader import ConfigLoader
from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    NetworkError,
    NotFoundError,
    NSXError,
    RemoteError,
    ResourceNotFoundError,
    StructuralError,
    ValidationError,
)
from .models import APIResponse, NSXConfig

__all__ = [
    # Exceptions
    "NSXError",
    "ConfigurationError",
    "ValidationError",
    "RemoteError",
    "AuthenticationError",
    "AuthorizationError",
    "ResourceNotFoundError",
    "NetworkError",
    "StructuralError",
    "NotFoundError",
    # Models
    "NSXConfig",
    "APIResponse",
    # Client
    "NSXClient",
    "RequestResponseLogger",
    "ConfigLoader",
]
