"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from winstore.application.authorization import Role, require_role
from winstore.application.dto import OrderDTO, OrderItemSpec
from winstore.application.list_orders import ListOrdersHandler
from winstore.application.place_order import PlaceOrderHandler
from winstore.application.set_order_status import SetOrderStatusHandler
from winstore.application.show_order import ShowOrderHandler
from winstore.domain.exceptions import DomainException, InfrastructureError
from winstore.domain.model.order import OrderStatus, PaymentMethod
from winstore.infrastructure.bootstrap import unit_of_work

ROLE_OPTION = click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.USER.value,
    show_default=True,
    help="Role of the caller.",
)


def failure(exc: Exception) -> click.ClickException:
    """Turn a handler error into a CLI error message."""
    if isinstance(exc, InfrastructureError):
        return click.ClickException(f"{exc}\nNothing was changed; the command can be retried.")
    return click.ClickException(str(exc))


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:20,2:10' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        id_str, qty_str = pair.split(":", 1)
        try:
            product_id = int(id_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}': product id and quantity must be integers."
            )
        specs.append(OrderItemSpec(product_id=product_id, quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_method})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<28} {'Qty':>6} {'Price':>12} {'Total':>14}")
    click.echo(f"  {'-'*63}")
    for item in dto.items:
        # Deleted products keep their order lines but lose their name.
        label = item.product_name or f"#{item.product_id}"
        click.echo(f"  {label[:28]:<28} {item.quantity:>6} {item.price:>12} {item.line_total:>14}")
    click.echo(f"  {'-'*63}")
    click.echo(f"  {'Order Total':<48} {dto.total:>14}")


@click.command("place")
@click.option("--user", "user_id", required=True, help="Authenticated user id.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option(
    "--payment",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="Payment method (recorded, not charged).",
)
def order_place(user_id: str, items: str, payment: str) -> None:
    """Place an order (at least 30 units in total)."""
    specs = _parse_items(items)
    try:
        handler = PlaceOrderHandler(unit_of_work())
        dto = handler.handle(user_id=user_id, item_specs=specs, payment_method=payment)
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    click.echo(f"Order #{dto.id} placed  (status={dto.status})")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--user", "user_id", default=None, help="Only show the order if this user owns it.")
def order_show(order_id: int, user_id: str | None) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(unit_of_work(read_only=True)).handle(order_id, user_id=user_id)
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="List this user's orders.")
@click.option("--all", "all_orders", is_flag=True, default=False, help="List every order (admin).")
@click.option("--status", type=click.Choice([s.value for s in OrderStatus]), default=None)
@ROLE_OPTION
def order_list(user_id: str | None, all_orders: bool, status: str | None, role: str) -> None:
    """List orders, newest first."""
    if bool(user_id) == all_orders:
        raise click.UsageError("Give exactly one of --user or --all")

    try:
        handler = ListOrdersHandler(unit_of_work(read_only=True))
        if all_orders:
            require_role(role, Role.ADMIN)
            orders = handler.all(status=status)
        else:
            orders = handler.for_user(user_id)  # type: ignore[arg-type]
            if status:
                orders = [o for o in orders if o.status == status]
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'User':<20} {'Status':<10} {'Payment':<8} {'Total':>12}  Created")
    click.echo("-" * 80)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.user_id:<20} {o.status:<10} {o.payment_method:<8} {o.total:>12}  {o.created_at}"
        )


@click.command("set-status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--status", required=True, type=click.Choice([s.value for s in OrderStatus]))
@ROLE_OPTION
def order_set_status(order_id: int, status: str, role: str) -> None:
    """Move an order to a new status (admin)."""
    try:
        require_role(role, Role.ADMIN)
        dto = SetOrderStatusHandler(unit_of_work()).handle(order_id, status)
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    click.echo(f"Order #{dto.id} is now {dto.status}.")


@click.command("approve")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to approve.")
@ROLE_OPTION
def order_approve(order_id: int, role: str) -> None:
    """Approve a pending order (admin)."""
    try:
        require_role(role, Role.ADMIN)
        dto = SetOrderStatusHandler(unit_of_work()).approve(order_id)
    except (DomainException, InfrastructureError) as exc:
        raise failure(exc)

    click.echo(f"Order #{dto.id} approved.")
