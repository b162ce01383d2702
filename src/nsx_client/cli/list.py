"""
NSX Client - List Profiles Command

List all configured credential profiles.
"""

import typer

from ..core.config_loader import ConfigLoader


def list_command(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show detailed information for each profile"
    )
):
    """
    List all configured NSX profiles.

    Examples:
        nsx-client list-profiles --verbose
    """
    typer.echo("\n📋 Configured NSX Profiles\n")

    try:
        profiles = ConfigLoader.list_profiles()
    except Exception as e:
        typer.echo(f"❌ Error listing profiles: {e}", err=True)
        raise typer.Exit(1)

    if not profiles:
        typer.echo("❌ No profiles configured yet")
        typer.echo("\n💡 Tip: Run 'nsx-client setup' to configure your first profile")
        return

    typer.echo(f"Found {len(profiles)} profile(s):\n")

    for profile in profiles:
        if not verbose:
            typer.echo(f"  • {profile}")
            continue

        info = ConfigLoader.get_profile_info(profile)
        typer.echo(f"📦 {typer.style(profile, fg=typer.colors.CYAN, bold=True)}")
        typer.echo(f"   URL: {info['url']}")
        typer.echo(f"   Username: {info['username']}")
        typer.echo(f"   Password: {'keyring' if info['password_in_keyring'] else 'config file'}")
        typer.echo(f"   SSL Verification: {'✓' if info['verify_ssl'] else '✗'}")
        typer.echo()

    typer.echo(f"\n📍 Config file: {ConfigLoader.DEFAULT_CONFIG_FILE}")
