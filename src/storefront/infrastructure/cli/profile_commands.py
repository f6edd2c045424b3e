"""CLI commands for the stored user profile."""

from __future__ import annotations

import click

from storefront.domain.model.profile import UserProfile
from storefront.infrastructure.bootstrap import profile_repository


@click.command("set")
@click.option("--name", "full_name", required=True, help="Full name.")
@click.option("--email", required=True, help="Email address.")
@click.option("--username", default="", help="Username.")
@click.option("--token", default=None, help="Bearer token for the backend API.")
def profile_set(full_name: str, email: str, username: str, token: str | None) -> None:
    """Store the logged-in user's profile."""
    repo = profile_repository()
    try:
        repo.save(UserProfile(email=email, full_name=full_name, username=username), token=token)
    except OSError as exc:
        raise click.ClickException(f"Could not save the profile: {exc}")
    click.echo(f"Profile saved for {full_name} <{email}>")


@click.command("show")
def profile_show() -> None:
    """Show the stored profile."""
    profile = profile_repository().get_profile()
    if profile is None:
        click.echo("Not logged in.")
        return
    click.echo(f"Name:     {profile.display_name}")
    click.echo(f"Email:    {profile.email}")
    if profile.role:
        click.echo(f"Role:     {profile.role}")


@click.command("clear")
def profile_clear() -> None:
    """Forget the stored profile and token."""
    try:
        profile_repository().clear()
    except OSError as exc:
        raise click.ClickException(f"Could not clear the profile: {exc}")
    click.echo("Logged out.")
