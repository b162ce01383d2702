"""
NSX Client - Object Commands

One command per object manager operation. Every create command is safe to
re-run: an existing object is reported instead of duplicated.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import typer

from ..core.client import NSXClient
from ..core.config_loader import ConfigLoader
from ..core.exceptions import NSXError, RemoteError, ValidationError
from ..domains.dhcp import DhcpIpPoolManager, DhcpRelayAgentManager
from ..domains.edge_interface import EdgeInterfaceManager
from ..domains.virtual_wire import VirtualWireManager

PROFILE_OPTION = typer.Option("default", "--profile", "-p", help="Credential profile to use")


@contextmanager
def open_client(profile: str) -> Iterator[NSXClient]:
    """Load ``profile`` and yield a client, turning library errors into exit code 1."""
    try:
        config = ConfigLoader.load(profile)
        with NSXClient(config) as client:
            yield client
    except ValidationError as e:
        typer.echo(f"❌ {typer.style('Invalid arguments', fg=typer.colors.RED, bold=True)}",
                   err=True)
        for error in e.errors or [e.message]:
            typer.echo(f"   • {error}", err=True)
        raise typer.Exit(1)
    except RemoteError as e:
        typer.echo(f"❌ NSX API error: {e.message}", err=True)
        if e.response_text:
            typer.echo(f"   Response: {e.response_text}", err=True)
        raise typer.Exit(1)
    except NSXError as e:
        typer.echo(f"❌ Error: {e.message}", err=True)
        raise typer.Exit(1)


def create_virtualwire_command(
    name: str = typer.Option(..., "--name", help="Name of the virtual wire"),
    scope_id: str = typer.Option(..., "--scope-id", help="vdnscope to add the virtual wire to"),
    description: Optional[str] = typer.Option(None, "--description", help="Description"),
    tenant_id: Optional[str] = typer.Option(None, "--tenant-id", help="Tenant ID"),
    control_plane_mode: Optional[str] = typer.Option(
        None, "--control-plane-mode", help="unicast, multicast or hybrid (default: unicast)"
    ),
    profile: str = PROFILE_OPTION,
):
    """
    Create a virtual wire.

    Examples:
        nsx-client create-virtualwire --name web-tier --scope-id vdnscope-1
    """
    with open_client(profile) as client:
        vwire_id = VirtualWireManager(client).create(
            name=name,
            scope_id=scope_id,
            description=description,
            tenant_id=tenant_id,
            control_plane_mode=control_plane_mode,
        )
    typer.echo(vwire_id)


def delete_virtualwire_command(
    virtualwire_id: str = typer.Argument(..., help="ID of the virtual wire"),
    profile: str = PROFILE_OPTION,
):
    """
    Delete a virtual wire.

    Examples:
        nsx-client delete-virtualwire virtualwire-12
    """
    with open_client(profile) as client:
        VirtualWireManager(client).delete(virtualwire_id)
    typer.echo(f"✅ Deleted {virtualwire_id}")


def attach_interface_command(
    edge_id: str = typer.Option(..., "--edge-id", help="Edge to attach the interface to"),
    name: str = typer.Option(..., "--name", help="Name of the interface"),
    primary_address: str = typer.Option(..., "--primary-address", help="Primary IP address"),
    subnet_mask: str = typer.Option(..., "--subnet-mask", help="Subnet mask"),
    connected_to_id: str = typer.Option(
        ..., "--connected-to-id", help="Virtual wire or port group ID"
    ),
    interface_type: str = typer.Option("internal", "--type", help="internal or uplink"),
    mtu: Optional[int] = typer.Option(None, "--mtu", help="MTU (default: 1500)"),
    profile: str = PROFILE_OPTION,
):
    """
    Attach an interface to an edge.

    Examples:
        nsx-client attach-interface --edge-id edge-1 --name web-lif \\
            --primary-address 10.0.1.1 --subnet-mask 255.255.255.0 \\
            --connected-to-id virtualwire-12
    """
    with open_client(profile) as client:
        interface_xml = EdgeInterfaceManager(client).attach_interface(
            edge_id=edge_id,
            name=name,
            primary_address=primary_address,
            subnet_mask=subnet_mask,
            connected_to_id=connected_to_id,
            interface_type=interface_type,
            mtu=mtu,
        )
    typer.echo(interface_xml)


def add_dhcp_relay_command(
    edge_id: str = typer.Option(..., "--edge-id", help="Edge to add the relay agent to"),
    vnic_index: int = typer.Option(..., "--vnic-index", help="vNIC index of the interface"),
    gi_address: str = typer.Option(..., "--gi-address", help="Gateway IP address"),
    profile: str = PROFILE_OPTION,
):
    """
    Add a DHCP relay agent to an edge.

    Examples:
        nsx-client add-dhcp-relay --edge-id edge-1 --vnic-index 10 --gi-address 10.0.1.1
    """
    with open_client(profile) as client:
        agent_xml = DhcpRelayAgentManager(client).add_relay_agent(edge_id, vnic_index, gi_address)
    typer.echo(agent_xml)


def add_dhcp_pool_command(
    edge_id: str = typer.Option(..., "--edge-id", help="Edge to add the pool to"),
    ip_range: str = typer.Option(..., "--ip-range", help="e.g. 10.0.1.10-10.0.1.200"),
    default_gateway: str = typer.Option(..., "--default-gateway", help="Default gateway"),
    domain_name: str = typer.Option(..., "--domain-name", help="DNS domain name"),
    primary_name_server: str = typer.Option(..., "--primary-dns", help="Primary DNS"),
    secondary_name_server: str = typer.Option(..., "--secondary-dns", help="Secondary DNS"),
    lease_time: Optional[int] = typer.Option(None, "--lease-time", help="Seconds (default: 3600)"),
    profile: str = PROFILE_OPTION,
):
    """
    Add a DHCP IP pool to an edge.

    Examples:
        nsx-client add-dhcp-pool --edge-id edge-2 --ip-range 10.0.1.10-10.0.1.200 \\
            --default-gateway 10.0.1.1 --domain-name corp.local \\
            --primary-dns 10.0.0.53 --secondary-dns 10.0.0.54
    """
    with open_client(profile) as client:
        pool_id = DhcpIpPoolManager(client).add_ip_pool(
            edge_id=edge_id,
            ip_range=ip_range,
            default_gateway=default_gateway,
            domain_name=domain_name,
            primary_name_server=primary_name_server,
            secondary_name_server=secondary_name_server,
            lease_time=lease_time,
        )
    typer.echo(pool_id)
