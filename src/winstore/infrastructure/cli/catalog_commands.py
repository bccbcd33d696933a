"""CLI commands for categories, factories and database setup."""

from __future__ import annotations

import click

from winstore.application.authorization import Role, require_role
from winstore.application.manage_catalog import CatalogHandler
from winstore.application.seed_catalog import SeedCatalogHandler
from winstore.domain.exceptions import DomainException, InfrastructureError
from winstore.infrastructure.bootstrap import engine, settings, unit_of_work
from winstore.infrastructure.cli.order_commands import ROLE_OPTION, failure


@click.command("list")
def category_list() -> None:
    """List product categories."""
    try:
        categories = CatalogHandler(unit_of_work(read_only=True)).list_categories()
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    if not categories:
        click.echo("No categories found.")
        return
    for c in categories:
        click.echo(f"{c.id:<6} {c.name:<24} {c.description or ''}")


@click.command("add")
@click.option("--name", required=True, help="Category name.")
@click.option("--description", default=None, help="Category description.")
@ROLE_OPTION
def category_add(name: str, description: str | None, role: str) -> None:
    """Add a product category (admin)."""
    try:
        require_role(role, Role.ADMIN)
        category = CatalogHandler(unit_of_work()).add_category(name, description)
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    click.echo(f"Category #{category.id} '{category.name}' added")


@click.command("list")
def factory_list() -> None:
    """List factories."""
    try:
        factories = CatalogHandler(unit_of_work(read_only=True)).list_factories()
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    if not factories:
        click.echo("No factories found.")
        return
    for f in factories:
        click.echo(f"{f.id:<6} {f.name:<24} {f.location}")


@click.command("show")
@click.option("--id", "factory_id", required=True, type=int, help="Factory ID.")
def factory_show(factory_id: int) -> None:
    """Show one factory."""
    try:
        f = CatalogHandler(unit_of_work(read_only=True)).get_factory(factory_id)
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    click.echo(f"Factory #{f.id}: {f.name}")
    click.echo(f"Location: {f.location}")
    if f.description:
        click.echo(f.description)


@click.command("add")
@click.option("--name", required=True, help="Factory name.")
@click.option("--location", required=True, help="City, country.")
@click.option("--description", default="", help="Short description.")
@ROLE_OPTION
def factory_add(name: str, location: str, description: str, role: str) -> None:
    """Add a factory (admin)."""
    try:
        require_role(role, Role.ADMIN)
        factory = CatalogHandler(unit_of_work()).add_factory(name, location, description)
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    click.echo(f"Factory #{factory.id} '{factory.name}' added")


@click.command("init")
def db_init() -> None:
    """Create the database tables."""
    try:
        engine()
    except InfrastructureError as exc:
        raise failure(exc)
    click.echo(f"Database ready at {settings().database_url}")


@click.command("seed")
def db_seed() -> None:
    """Load the sample catalogue into an empty database."""
    try:
        result = SeedCatalogHandler(unit_of_work()).handle()
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    if result.skipped:
        click.echo("Catalogue already populated; nothing to do.")
    else:
        click.echo(
            f"Seeded {result.factories} factories, {result.categories} categories "
            f"and {result.products} products."
        )
