"""ABOUTME: Main CLI entry point using Click for PlanIt administration
ABOUTME: Provides subcommands for database, user and category management"""

import click
from sqlalchemy.orm import sessionmaker

from planit import bootstrap
from planit.adapters.database import create_session_factory, start_mappers
from planit.config import APP_VERSION, APPLICATION_NAME, get_config
from planit.service_layer.unit_of_work import AbstractUnitOfWork


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """PlanIt administration CLI."""
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Initialize configuration and database mappers
    ctx.obj.setdefault("config", get_config())
    start_mappers()


def get_session_factory(ctx: click.Context) -> sessionmaker:
    obj = ctx.find_root().obj
    if obj.get("session_factory") is None:
        obj["session_factory"] = create_session_factory(obj["config"].SQLALCHEMY_DATABASE_URI)
    return obj["session_factory"]


def get_uow(ctx: click.Context) -> AbstractUnitOfWork:
    return bootstrap.bootstrap(session_factory=get_session_factory(ctx))


@cli.command()
def version() -> None:
    """Show PlanIt version."""
    click.echo(f"{APPLICATION_NAME} {APP_VERSION}")


# Import subcommands to register them
from .categories import categories  # noqa: E402
from .database import database  # noqa: E402
from .users import users  # noqa: E402

cli.add_command(categories)
cli.add_command(database)
cli.add_command(users)


if __name__ == "__main__":
    cli()
