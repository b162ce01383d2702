"""
Edge Interface Domain

Attaches edge interfaces to virtual wires or port groups. An edge gets at
most one interface per connected network.
"""

from typing import Optional, Union

from ..core.client import NSXClient
from ..core.models import EdgeInterface
from ..shared.constants import API_EDGE_INTERFACES, API_EDGE_INTERFACES_PATCH
from ..shared.rendering import INTERFACE_TEMPLATE, render_template
from ..shared.validation import build_model
from ..shared.xml_utils import XmlInput, child_text, extract_text, list_elements, strip_declaration
from .base import BaseManager


def check_interface_exists(client: NSXClient, edge_id: str, connected_to_id: str) -> Optional[str]:
    """Find the interface of ``edge_id`` attached to ``connected_to_id``.

    Args:
        client: NSX client
        edge_id: Edge to inspect
        connected_to_id: ID of the virtual wire or port group

    Returns:
        XML configuration of the interface if it exists; otherwise None
    """
    response = client.get(
        API_EDGE_INTERFACES.format(edge_id=edge_id),
        operation="list_edge_interfaces",
    )
    for interface in list_elements(response.body, "interface"):
        if child_text(interface, "connectedToId") == connected_to_id:
            return strip_declaration(interface)
    return None


class EdgeInterfaceManager(BaseManager):
    """Manages interfaces on NSX edges."""

    def attach_interface(
        self,
        edge_id: str,
        name: str,
        primary_address: str,
        subnet_mask: str,
        connected_to_id: str,
        interface_type: str,
        mtu: Optional[Union[int, str]] = None,
    ) -> str:
        """Attach an interface to the specified edge.

        The interface set is patched (``action=patch``), leaving the other
        interfaces of the edge untouched.

        Args:
            edge_id: Edge to attach the interface to
            name: Name of the interface
            primary_address: Primary IP address of the interface
            subnet_mask: Subnet mask of the attached network
            connected_to_id: ID of the virtual wire or port group
            interface_type: internal or uplink
            mtu: Maximum transmission unit, defaults to 1500

        Returns:
            Interface XML from the NSX API; the existing interface when the
            network is already attached

        Raises:
            ValidationError: If any argument is missing or invalid
            RemoteError: If the NSX manager rejects a request
        """
        interface = build_model(
            EdgeInterface,
            "attach_interface",
            edge_id=edge_id,
            name=name,
            primary_address=primary_address,
            subnet_mask=subnet_mask,
            mtu=mtu,
            connected_to_id=connected_to_id,
            interface_type=interface_type,
        )

        self.logger.info(f"Checking if interface already exists on edge: {edge_id}")
        existing = check_interface_exists(self.client, interface.edge_id, interface.connected_to_id)
        if existing is not None:
            self.logger.info(
                f"Skipping interface - interface already exists "
                f"(edgeId: {edge_id} connectedToId: {connected_to_id})"
            )
            return existing

        self.logger.info(f"Adding interface (edgeId: {edge_id} connectedToId: {connected_to_id})")
        payload = render_template(INTERFACE_TEMPLATE, interface)
        response = self.client.post(
            API_EDGE_INTERFACES_PATCH.format(edge_id=interface.edge_id),
            payload,
            operation="attach_interface",
        )
        return response.body

    @staticmethod
    def vnic_index_from_response(interface_xml: XmlInput) -> str:
        """Return the vNIC index from an interface configuration.

        The index is needed to add a DHCP relay agent for the interface.

        Raises:
            NotFoundError: If the document carries no index
        """
        return extract_text(interface_xml, "index")
