"""
NSX Client - Domain Modules

One manager per NSX object type, each implementing create-if-absent.
"""

from .dhcp import DhcpIpPoolManager, DhcpRelayAgentManager
from .edge_interface import EdgeInterfaceManager
from .virtual_wire import VirtualWireManager

__all__ = [
    "DhcpIpPoolManager",
    "DhcpRelayAgentManager",
    "EdgeInterfaceManager",
    "VirtualWireManager",
]
