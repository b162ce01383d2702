"""
NSX Client - Delete Profile Command

Remove an NSX manager profile from the config file, together with a password
it kept in the system keyring.
"""

import typer

from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError


def _describe(profile: str, info: dict) -> None:
    typer.echo(f"Profile:  {typer.style(profile, fg=typer.colors.YELLOW, bold=True)}")
    typer.echo(f"Manager:  {info['url']}")
    typer.echo(f"Username: {info['username']}")
    where = "system keyring" if info["password_in_keyring"] else "config file"
    typer.echo(f"Password: {where}\n")


def delete_command(
    profile: str = typer.Argument(..., help="Profile name to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
):
    """
    Delete an NSX manager profile.

    Examples:
        nsx-client delete-profile lab
        nsx-client delete-profile lab --force
    """
    typer.echo("\n🗑️  Delete NSX Manager Profile\n")

    try:
        profiles = ConfigLoader.list_profiles()
        if profile not in profiles:
            typer.echo(f"❌ Profile '{profile}' not found", err=True)
            typer.echo(f"\n📋 Available profiles: {', '.join(profiles) if profiles else 'None'}")
            raise typer.Exit(1)

        info = ConfigLoader.get_profile_info(profile)
        _describe(profile, info)

        if not force and not typer.confirm(
            f"⚠️  Forget the credentials for {info['url']} stored as '{profile}'?", default=False
        ):
            typer.echo("Operation cancelled")
            raise typer.Exit(0)

        removed_from_keyring = ConfigLoader.delete_profile(profile)
    except ConfigurationError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"\n✅ Profile '{profile}' deleted successfully")
    if removed_from_keyring:
        typer.echo("🔑 Password removed from the system keyring")
    elif info["password_in_keyring"]:
        typer.echo("🔑 Keyring password kept (still used by another profile or not removable)")
