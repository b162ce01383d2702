"""
NSX Client - Test Connection Command

Test connection to the NSX manager.
"""

import typer

from ..core.client import NSXClient
from ..core.config_loader import ConfigLoader
from ..core.exceptions import AuthenticationError, ConfigurationError, RemoteError
from ..shared.constants import API_GLOBAL_CONFIG


def test_command(
    profile: str = typer.Option("default", "--profile", "-p", help="Profile name to test")
):
    """
    Test connection to the NSX manager.

    Examples:
        nsx-client test-connection --profile production
    """
    typer.echo("\n🔍 Testing NSX Connection\n")
    typer.echo(f"Profile: {typer.style(profile, fg=typer.colors.CYAN, bold=True)}\n")

    try:
        config = ConfigLoader.load(profile)
    except ConfigurationError as e:
        typer.echo(f"❌ Configuration error: {e}", err=True)
        typer.echo("\n💡 Run 'nsx-client setup' to configure credentials")
        raise typer.Exit(1)

    typer.echo(f"URL: {config.url}")
    typer.echo(f"SSL Verification: {'Enabled' if config.verify_ssl else 'Disabled'}\n")

    typer.echo("🔌 Connecting to NSX manager...")
    try:
        with NSXClient(config) as client:
            client.get(API_GLOBAL_CONFIG, operation="test_connection")
    except AuthenticationError as e:
        _report_failure(f"Authentication failed: {e.message}")
    except RemoteError as e:
        _report_failure(str(e))

    typer.echo(f"\n✅ {typer.style('Connection successful!', fg=typer.colors.GREEN, bold=True)}")


def _report_failure(error: str):
    typer.echo(f"\n❌ {typer.style('Connection failed', fg=typer.colors.RED, bold=True)}")
    typer.echo(f"\nError: {error}")
    typer.echo("\n💡 Troubleshooting tips:")
    typer.echo("   • Verify the manager URL is correct and reachable")
    typer.echo("   • Check the username and password")
    typer.echo("   • Try --no-verify-ssl during setup if the manager uses a self-signed certificate")
    raise typer.Exit(1)
