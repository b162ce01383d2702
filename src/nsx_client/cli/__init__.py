"""
NSX Client - CLI Interface

Command-line front end: credential profile management plus one command per
object manager operation.
"""

import logging
import sys

import typer

from ..core.exceptions import NSXError
from ..shared.constants import LOGGER_NAME
from .delete import delete_command
from .list import list_command
from .objects import (
    add_dhcp_pool_command,
    add_dhcp_relay_command,
    attach_interface_command,
    create_virtualwire_command,
    delete_virtualwire_command,
)
from .setup import setup_command
from .test import test_command

app = typer.Typer(
    name="nsx-client",
    help="NSX manager client - idempotent creation of virtual wires, edge interfaces and DHCP",
    add_completion=False
)


@app.callback()
def configure_logging(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.INFO)


# Profile management
app.command(name="setup", help="Configure NSX manager connection credentials")(setup_command)
app.command(name="list-profiles", help="List all configured profiles")(list_command)
app.command(name="test-connection", help="Test connection to the NSX manager")(test_command)
app.command(name="delete-profile", help="Delete a credential profile")(delete_command)

# Object managers
app.command(name="create-virtualwire", help="Create a virtual wire unless it exists")(
    create_virtualwire_command
)
app.command(name="delete-virtualwire", help="Delete a virtual wire")(delete_virtualwire_command)
app.command(name="attach-interface", help="Attach an interface to an edge unless attached")(
    attach_interface_command
)
app.command(name="add-dhcp-relay", help="Add a DHCP relay agent to an edge unless present")(
    add_dhcp_relay_command
)
app.command(name="add-dhcp-pool", help="Add a DHCP IP pool to an edge unless present")(
    add_dhcp_pool_command
)


def main():
    """CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\n\nOperation cancelled by user")
        sys.exit(1)
    except NSXError as e:
        typer.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
