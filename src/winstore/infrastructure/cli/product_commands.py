"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from winstore.application.add_product import AddProductHandler
from winstore.application.authorization import Role, require_role
from winstore.application.delete_product import DeleteProductHandler
from winstore.application.list_products import ListProductsHandler
from winstore.application.update_product import UpdateProductHandler
from winstore.domain.exceptions import DomainException, InfrastructureError
from winstore.domain.repository.product_repository import SORT_KEYS
from winstore.infrastructure.bootstrap import unit_of_work
from winstore.infrastructure.cli.order_commands import ROLE_OPTION, failure


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--name-ar", default=None, help="Arabic product name.")
@click.option("--price", required=True, help="Sale price (e.g. 15.00).")
@click.option("--original-price", default=None, help="Reference price before discount.")
@click.option("--category-id", required=True, type=int, help="Category ID.")
@click.option("--factory-id", default=None, type=int, help="Factory ID.")
@click.option("--stock", default=0, show_default=True, type=int, help="Initial stock.")
@click.option("--description", default="", help="Product description.")
@click.option("--vendor", "vendor_id", default=None, help="Owning vendor user id.")
@ROLE_OPTION
def product_add(
    name: str,
    name_ar: str | None,
    price: str,
    original_price: str | None,
    category_id: int,
    factory_id: int | None,
    stock: int,
    description: str,
    vendor_id: str | None,
    role: str,
) -> None:
    """Add a new product to the catalogue (vendor/admin)."""
    try:
        if require_role(role, Role.VENDOR, Role.ADMIN) is Role.VENDOR and not vendor_id:
            raise click.UsageError("Vendors must pass --vendor")
        product = AddProductHandler(unit_of_work()).handle(
            name=name,
            price=price,
            category_id=category_id,
            stock=stock,
            original_price=original_price,
            factory_id=factory_id,
            vendor_id=vendor_id,
            name_ar=name_ar,
            description=description,
        )
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    click.echo(f"Product #{product.id} '{product.name}' added at ${product.price}")


@click.command("list")
@click.option("--category", "category_id", default=None, type=int, help="Category ID.")
@click.option("--search", default=None, help="Case-insensitive name match.")
@click.option("--sort", type=click.Choice(SORT_KEYS), default=None)
def product_list(category_id: int | None, search: str | None, sort: str | None) -> None:
    """List products in the catalogue."""
    try:
        products = ListProductsHandler(unit_of_work(read_only=True)).handle(
            category_id=category_id, search=search, sort=sort
        )
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Price':>10} {'Was':>10} {'Stock':>7}")
    click.echo("-" * 65)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<28} {p.price:>10} {p.original_price:>10} {p.stock:>7}")


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show one product."""
    try:
        p = ListProductsHandler(unit_of_work(read_only=True)).get(product_id)
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    click.echo(f"Product #{p.id}: {p.name}" + (f" / {p.name_ar}" if p.name_ar else ""))
    if p.description:
        click.echo(p.description)
    click.echo(f"Price:    ${p.price}  (was ${p.original_price}, save {p.savings_percent}%)")
    click.echo(f"Stock:    {p.stock}")
    click.echo(f"Category: {p.category_name or '#' + str(p.category_id)}")
    if p.factory is not None:
        click.echo(f"Factory:  {p.factory.name} ({p.factory.location})")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--vendor", "vendor_id", default=None, help="Acting vendor user id.")
@ROLE_OPTION
def product_update(
    product_id: int, price: str | None, stock: int | None, vendor_id: str | None, role: str
) -> None:
    """Update a product's price and/or stock (vendor/admin)."""
    try:
        if require_role(role, Role.VENDOR, Role.ADMIN) is Role.VENDOR and not vendor_id:
            raise click.UsageError("Vendors must pass --vendor")
        dto = UpdateProductHandler(unit_of_work()).handle(
            product_id=product_id,
            new_price=price,
            new_stock=stock,
            vendor_id=vendor_id if role == Role.VENDOR.value else None,
        )
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    click.echo(f"Product #{dto.id} updated: price ${dto.price}, stock {dto.stock}")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@ROLE_OPTION
def product_delete(product_id: int, role: str) -> None:
    """Remove a product from the catalogue (admin)."""
    try:
        require_role(role, Role.ADMIN)
        DeleteProductHandler(unit_of_work()).handle(product_id)
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    click.echo(f"Product #{product_id} deleted.")
