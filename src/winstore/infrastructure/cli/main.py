import logging

import click

from winstore.infrastructure.bootstrap import configure_logging, settings
from winstore.infrastructure.cli.catalog_commands import (
    category_add,
    category_list,
    db_init,
    db_seed,
    factory_add,
    factory_list,
    factory_show,
)
from winstore.infrastructure.cli.order_commands import (
    order_approve,
    order_list,
    order_place,
    order_set_status,
    order_show,
)
from winstore.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """Win-Store: factory-direct storefront"""
    try:
        current = settings()
    except ValueError as exc:
        raise click.UsageError(str(exc))
    configure_logging(logging.DEBUG if verbose else current.log_level)


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def product() -> None:
    """Manage the product catalogue."""


@cli.group()
def category() -> None:
    """Manage product categories."""


@cli.group()
def factory() -> None:
    """Manage factories."""


@cli.group()
def db() -> None:
    """Database setup."""


# Register subcommands
order.add_command(order_approve)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_set_status)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
category.add_command(category_add)
category.add_command(category_list)
factory.add_command(factory_add)
factory.add_command(factory_list)
factory.add_command(factory_show)
db.add_command(db_init)
db.add_command(db_seed)
