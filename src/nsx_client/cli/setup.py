"""
NSX Client - Setup Command

Interactive setup for configuring NSX manager credentials.
"""

import getpass

import typer

from ..core.config_loader import ConfigLoader
from ..core.models import NSXConfig


def setup_command(
    profile: str = typer.Option(
        "default", "--profile", "-p", help="Profile name (default, production, lab, etc.)"
    ),
    url: str | None = typer.Option(None, "--url", help="NSX manager host or URL"),
    username: str | None = typer.Option(None, "--username", help="NSX username"),
    password: str | None = typer.Option(None, "--password", help="NSX password"),
    verify_ssl: bool = typer.Option(
        True, "--verify-ssl/--no-verify-ssl", help="Verify SSL certificates"
    ),
    use_keyring: bool = typer.Option(
        False, "--keyring/--no-keyring", help="Store the password in the system keyring"
    ),
    interactive: bool = typer.Option(
        True, "--interactive/--non-interactive", help="Interactive mode with prompts"
    ),
):
    """
    Configure NSX manager connection credentials.

    Examples:
        # Interactive setup
        nsx-client setup

        # Non-interactive setup
        nsx-client setup --url nsx.example.com --username admin --password SECRET --non-interactive
    """
    typer.echo("\n🔧 NSX Client - Credential Setup\n")
    typer.echo(f"Profile: {typer.style(profile, fg=typer.colors.CYAN, bold=True)}\n")

    if interactive:
        if not url:
            url = typer.prompt("NSX manager (e.g., nsx.example.com)")

        if not username:
            username = typer.prompt("Username")

        if not password:
            password = getpass.getpass("Password (hidden): ")

        if not typer.confirm("Verify SSL certificates?", default=verify_ssl):
            verify_ssl = False

    elif not all([url, username, password]):
        typer.echo(
            "❌ Error: In non-interactive mode, all parameters (--url, --username, --password) are required",
            err=True,
        )
        raise typer.Exit(1)

    try:
        config = NSXConfig(url=url, username=username, password=password, verify_ssl=verify_ssl)
    except ValueError as e:
        typer.echo(f"❌ Invalid configuration: {e}", err=True)
        raise typer.Exit(1)

    try:
        ConfigLoader.save_profile(profile, config, use_keyring=use_keyring)
    except Exception as e:
        typer.echo(f"\n❌ Error saving profile: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"\n✅ Profile '{profile}' saved successfully!")
    typer.echo(f"\n📍 Config location: {ConfigLoader.DEFAULT_CONFIG_FILE}")
    typer.echo("🔒 File permissions: 0600 (owner read/write only)")
    typer.echo(f"\n   • Test connection: nsx-client test-connection --profile {profile}")
