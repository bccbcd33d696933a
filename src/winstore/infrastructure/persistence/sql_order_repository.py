"""SQL implementation of OrderRepository."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Select, insert, select, update
from sqlalchemy.engine import Connection, RowMapping

from winstore.domain.model.order import Order, OrderItem, OrderStatus, PaymentMethod
from winstore.domain.model.value_objects import Money, Quantity
from winstore.domain.repository.order_repository import OrderRepository
from winstore.infrastructure.persistence.tables import order_items, orders, products


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> Order:
        result = self._connection.execute(insert(orders).values(**self._to_row(order)))
        order_id = result.inserted_primary_key[0]

        items: list[OrderItem] = []
        for item in order.items:
            item_result = self._connection.execute(
                insert(order_items).values(
                    order_id=order_id,
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    price=item.price.amount,
                )
            )
            items.append(replace(item, id=item_result.inserted_primary_key[0], order_id=order_id))

        order.id = order_id
        order.items = items
        return order

    def get_by_id(self, order_id: int, for_update: bool = False) -> Order | None:
        query = select(orders).where(orders.c.id == order_id)
        if for_update:
            query = query.with_for_update()
        found = self._load(query)
        return found[0] if found else None

    def list_for_user(self, user_id: str) -> list[Order]:
        return self._load(self._newest_first(select(orders).where(orders.c.user_id == user_id)))

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        query = select(orders)
        if status is not None:
            query = query.where(orders.c.status == status.value)
        return self._load(self._newest_first(query))

    def update_status(self, order: Order) -> None:
        self._connection.execute(
            update(orders).where(orders.c.id == order.id).values(status=order.status.value)
        )

    # --- Loading --------------------------------------------------------------

    @staticmethod
    def _newest_first(query: Select) -> Select:
        return query.order_by(orders.c.created_at.desc(), orders.c.id.desc())

    def _load(self, query: Select) -> list[Order]:
        headers = list(self._connection.execute(query).mappings())
        if not headers:
            return []

        items_by_order: dict[int, list[OrderItem]] = defaultdict(list)
        item_rows = self._connection.execute(
            select(order_items, products.c.name.label("product_name"))
            .outerjoin(products, products.c.id == order_items.c.product_id)
            .where(order_items.c.order_id.in_([h["id"] for h in headers]))
            .order_by(order_items.c.id)
        ).mappings()
        for row in item_rows:
            items_by_order[row["order_id"]].append(self._item_to_domain(row))

        return [self._to_domain(h, items_by_order[h["id"]]) for h in headers]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> dict:
        return {
            "user_id": order.user_id,
            "total": order.total.amount,
            "status": order.status.value,
            "payment_method": order.payment_method.value,
            "created_at": order.created_at,
        }

    @staticmethod
    def _item_to_domain(row: RowMapping) -> OrderItem:
        return OrderItem(
            id=row["id"],
            order_id=row["order_id"],
            product_id=row["product_id"],
            quantity=Quantity(row["quantity"]),
            price=Money(Decimal(row["price"])),
            product_name=row["product_name"],
        )

    @staticmethod
    def _to_domain(row: RowMapping, items: list[OrderItem]) -> Order:
        created_at: datetime = row["created_at"]
        if created_at.tzinfo is None:
            # SQLite drops the offset; everything is written in UTC.
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=row["id"],
            user_id=row["user_id"],
            items=items,
            total=Money(Decimal(row["total"])),
            payment_method=PaymentMethod(row["payment_method"]),
            status=OrderStatus(row["status"]),
            created_at=created_at,
        )
