"""
NSX Client

Client library for the NSX manager REST API. Creates virtual wires, edge
interfaces, DHCP relay agents and DHCP IP pools idempotently: an object that
already exists under its natural key is returned instead of duplicated.
"""

__version__ = "1.0.0"

from .core.client import NSXClient
from .core.config_loader import ConfigLoader
from .core.exceptions import (
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
from .core.models import (
    APIResponse,
    ControlPlaneMode,
    DhcpIpPool,
    DhcpRelayAgent,
    EdgeInterface,
    InterfaceType,
    NSXConfig,
    VirtualWire,
)
from .domains.dhcp import DhcpIpPoolManager, DhcpRelayAgentManager
from .domains.edge_interface import EdgeInterfaceManager
from .domains.virtual_wire import VirtualWireManager

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
    "ControlPlaneMode",
    "InterfaceType",
    "VirtualWire",
    "EdgeInterface",
    "DhcpRelayAgent",
    "DhcpIpPool",
    # Client
    "NSXClient",
    "ConfigLoader",
    # Managers
    "VirtualWireManager",
    "EdgeInterfaceManager",
    "DhcpRelayAgentManager",
    "DhcpIpPoolManager",
]
