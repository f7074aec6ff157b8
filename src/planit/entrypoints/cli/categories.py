"""ABOUTME: CLI command that shows the configured event categories
ABOUTME: Reads the same categories file the web application uses"""

import click

from planit.domain.categories import CategoryConfigError, load_category_catalogue


@click.group()
def categories() -> None:
    """Category configuration commands."""
    pass


@categories.command("list")
@click.pass_context
def list_categories(ctx: click.Context) -> None:
    """List categories and their subcategories."""
    path = ctx.find_root().obj["config"].CATEGORIES_PATH
    try:
        catalogue = load_category_catalogue(path)
    except CategoryConfigError as e:
        click.echo(click.style(f"✗ Error: {e}", "red"))
        raise click.Abort() from e

    for name in catalogue.names:
        subcategories = catalogue.subcategories(name)
        click.echo(f"{name}: {', '.join(subcategories) if subcategories else '-'}")
