"""ABOUTME: CLI commands for user management operations
ABOUTME: Provides commands to add and list users"""

import click

from planit.domain.result import Err
from planit.domain.validators import UserRegisterInput
from planit.service_layer.user_service import register_user

from . import get_uow


@click.group()
def users() -> None:
    """User management commands."""
    pass


@users.command("add")
@click.option("--username", required=True, help="Username, 5 to 20 characters")
@click.option("--name", required=True, help="Display name")
@click.option("--email", required=True, help="User email address")
@click.option("--password", help="Password (will prompt if not provided)")
@click.pass_context
def add_user(ctx: click.Context, username: str, name: str, email: str, password: str | None) -> None:
    """Add a new user to the system."""
    # Prompt for password if not provided
    if not password:
        password = click.prompt("Password", hide_input=True, confirmation_prompt=True)

    result = register_user(
        get_uow(ctx), UserRegisterInput(username=username, name=name, email=email, password=password)
    )
    if isinstance(result, Err):
        click.echo(click.style(f"✗ Error: {result.error.message}", "red"))
        raise click.Abort()

    user = result.value
    click.echo(click.style("✓ User created successfully:", "green"))
    click.echo(f"  ID: {user.id}")
    click.echo(f"  Username: {user.username}")
    click.echo(f"  Email: {user.email}")


@users.command("list")
@click.pass_context
def list_users(ctx: click.Context) -> None:
    """List all users."""
    uow = get_uow(ctx)
    with uow:
        all_users = list(uow.users.all())

    if not all_users:
        click.echo("No users found.")
        return

    click.echo(f"Found {len(all_users)} user(s):")
    for user in all_users:
        status = "active" if user.is_active else "inactive"
        click.echo(f"  {user.id}  {user.username:<20} {user.email:<30} {status}")
