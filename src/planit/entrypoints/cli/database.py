"""ABOUTME: CLI commands for database management operations
ABOUTME: Creates the tables, or drops and recreates them when explicitly allowed"""

import os

import click
from sqlalchemy.exc import SQLAlchemyError

from planit.adapters.database import create_tables, drop_tables

from . import get_session_factory


@click.group()
def database() -> None:
    """Database management commands."""
    pass


@database.command("init")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create any tables that do not exist yet."""
    try:
        create_tables(get_session_factory(ctx))
    except SQLAlchemyError as e:
        click.echo(click.style(f"✗ Error creating tables: {e}", "red"))
        raise click.Abort() from e
    click.echo(click.style("✓ Database tables created.", "green"))


@database.command("reset")
@click.pass_context
def reset_db(ctx: click.Context) -> None:
    """Reset the database (drop all tables and recreate)."""
    if os.environ.get("ALLOW_RESET_DB", "") != "DANGEROUS":
        click.echo("Resetting the database is a dangerous operation. In order to enable it set the")
        click.echo("environment variable ALLOW_RESET_DB to DANGEROUS.")
        return

    click.echo(click.style("⚠️  WARNING: This will destroy ALL data in the database!", "red"))
    delete_confirm = click.prompt("Type 'delete everything' if you want to continue.")
    if delete_confirm != "delete everything":
        click.echo("Operation cancelled.")
        return

    try:
        session_factory = get_session_factory(ctx)
        drop_tables(session_factory)
        create_tables(session_factory)
    except SQLAlchemyError as e:
        click.echo(click.style(f"✗ Error resetting database: {e}", "red"))
        raise click.Abort() from e

    click.echo(click.style("✓ Database reset successfully.", "green"))
