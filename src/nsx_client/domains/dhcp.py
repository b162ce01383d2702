"""
Edge DHCP Domain

DHCP relay agents and simple DHCP IP pools on NSX edges.

The relay configuration can only be replaced as a whole: adding an agent
reads the current document, splices the agent in and PUTs everything back.
That read-modify-write is not atomic. Two concurrent calls against the same
edge can both read the same document and the later PUT drops the agent added
by the earlier one. Serialize relay changes per edge on the caller side.
"""

from typing import Optional, Union

from ..core.client import NSXClient
from ..core.models import DhcpIpPool, DhcpRelayAgent
from ..shared.constants import (
    API_EDGE_DHCP_CONFIG,
    API_EDGE_DHCP_IPPOOLS,
    API_EDGE_DHCP_RELAY,
    RELAY_AGENTS_TAG,
    RELAY_ROOT_TAG,
)
from ..shared.rendering import DHCP_POOL_TEMPLATE, RELAY_AGENT_TEMPLATE, render_template
from ..shared.validation import build_model
from ..shared.xml_utils import (
    XmlInput,
    child_text,
    extract_text,
    inject_child,
    list_elements,
    strip_declaration,
    to_xml_string,
)
from .base import BaseManager


def check_dhcp_agent_exists(
    relay_xml: XmlInput, vnic_index: Union[int, str], gi_address: str
) -> Optional[str]:
    """Find a relay agent in an already fetched relay configuration.

    Args:
        relay_xml: Relay configuration document of the edge
        vnic_index: vNIC index the agent is bound to
        gi_address: Gateway IP address of the agent

    Returns:
        XML of the matching relay agent; otherwise None
    """
    vnic_index = str(vnic_index)
    for agent in list_elements(relay_xml, "relayAgent"):
        if (child_text(agent, "vnicIndex") == vnic_index
                and child_text(agent, "giAddress") == gi_address):
            return strip_declaration(agent)
    return None


def check_dhcp_pool_exists(client: NSXClient, edge_id: str, ip_range: str) -> Optional[str]:
    """Find the DHCP IP pool of ``edge_id`` serving exactly ``ip_range``.

    Returns:
        The pool ID if it exists; otherwise None

    Raises:
        NotFoundError: If a pool matches but carries no poolId
    """
    response = client.get(
        API_EDGE_DHCP_CONFIG.format(edge_id=edge_id),
        operation="get_dhcp_config",
    )
    for ip_pool in list_elements(response.body, "ipPool"):
        if child_text(ip_pool, "ipRange") == ip_range:
            return extract_text(ip_pool, "poolId")
    return None


def _id_from_location(headers: dict) -> Optional[str]:
    for key, value in headers.items():
        if key.lower() == "location" and value:
            return value.rstrip("/").rsplit("/", 1)[-1]
    return None


class DhcpRelayAgentManager(BaseManager):
    """Manages DHCP relay agents on NSX edges. Not safe to run concurrently."""

    def add_relay_agent(self, edge_id: str, vnic_index: Union[int, str], gi_address: str) -> str:
        """Add a DHCP relay agent to the specified edge for the specified vNIC.

        Args:
            edge_id: Edge to add the agent to
            vnic_index: vNIC index of the interface on the edge
            gi_address: Gateway IP address

        Returns:
            XML of the relay agent, existing or added

        Raises:
            ValidationError: If any argument is missing or invalid
            StructuralError: If the relay document has no <relay> element
            RemoteError: If the NSX manager rejects a request
        """
        agent = build_model(
            DhcpRelayAgent,
            "add_relay_agent",
            edge_id=edge_id,
            vnic_index=vnic_index,
            gi_address=gi_address,
        )
        api_endpoint = API_EDGE_DHCP_RELAY.format(edge_id=agent.edge_id)

        # PUT replaces the whole relay configuration, so start from the current one
        current = self.client.get(api_endpoint, operation="get_dhcp_relay")

        self.logger.info(f"Checking if DHCP agent already exists on edge: {edge_id}")
        existing = check_dhcp_agent_exists(current.body, agent.vnic_index, agent.gi_address)
        if existing is not None:
            self.logger.info(
                f"Skipping Agent - DHCP agent already exists "
                f"(vnicIndex: {agent.vnic_index} giAddress {agent.gi_address})"
            )
            return existing

        self.logger.info(f"Adding Agent (vnicIndex: {agent.vnic_index} giAddress {agent.gi_address})")
        agent_xml = render_template(RELAY_AGENT_TEMPLATE, agent)

        # <relayAgents> is omitted when the edge has no agents yet
        doc = inject_child(current.body, RELAY_ROOT_TAG, RELAY_AGENTS_TAG, agent_xml)
        payload = strip_declaration(to_xml_string(doc, xml_declaration=True))

        self.client.put(api_endpoint, payload, operation="add_relay_agent")
        return strip_declaration(to_xml_string(agent_xml))


class DhcpIpPoolManager(BaseManager):
    """Manages simple DHCP IP pools on NSX edges."""

    def add_ip_pool(
        self,
        edge_id: str,
        ip_range: str,
        default_gateway: str,
        domain_name: str,
        primary_name_server: str,
        secondary_name_server: str,
        lease_time: Optional[Union[int, str]] = None,
    ) -> str:
        """Add a DHCP IP pool to the specified edge.

        Only a small subset of the pool options can be set.

        Args:
            edge_id: Edge to add the pool to
            ip_range: Addresses to hand out, e.g. 192.168.10.2-192.168.10.62
            default_gateway: Default gateway of the served network
            domain_name: DNS domain name
            primary_name_server: Primary DNS
            secondary_name_server: Secondary DNS
            lease_time: Lease time in seconds, defaults to 3600

        Returns:
            The pool ID, existing or newly created

        Raises:
            ValidationError: If any argument is missing or invalid
            NotFoundError: If a pool with the same range carries no poolId
            RemoteError: If the NSX manager rejects a request
        """
        pool = build_model(
            DhcpIpPool,
            "add_ip_pool",
            edge_id=edge_id,
            ip_range=ip_range,
            default_gateway=default_gateway,
            domain_name=domain_name,
            primary_name_server=primary_name_server,
            secondary_name_server=secondary_name_server,
            lease_time=lease_time,
        )

        self.logger.info(f"Checking if DHCP IP pool already exists on edge: {edge_id}")
        pool_id = check_dhcp_pool_exists(self.client, pool.edge_id, pool.ip_range)
        if pool_id is not None:
            self.logger.info(
                f"Skipping DHCP IP Pool - already exists (edgeId: {edge_id} ipRange: {ip_range})"
            )
            return pool_id

        self.logger.info(f"Adding DHCP IP Pool (edgeId: {edge_id} ipRange: {ip_range})")
        payload = render_template(DHCP_POOL_TEMPLATE, pool)
        response = self.client.post(
            API_EDGE_DHCP_IPPOOLS.format(edge_id=pool.edge_id),
            payload,
            operation="add_ip_pool",
        )
        return _id_from_location(response.headers) or response.body.strip()
