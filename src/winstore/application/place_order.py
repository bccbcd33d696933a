"""Application service: Place Order use case.

The checkout transaction.  Turns a cart into a persisted order while
holding a lock on every product row it touches, so two concurrent
checkouts can never sell the same unit twice:

1. Validate quantities, payment method and the minimum order quantity
   *before* touching the store.
2. Inside one unit of work, lock the referenced product rows (ascending
   ID order), then walk the lines in input order: check stock, decrement
   it, snapshot the price read under the lock.
3. Insert the order header and one item per line, then commit.

Any failure leaves the store exactly as it was: the unit of work rolls
back every stock decrement made by earlier lines.
"""

from __future__ import annotations

import logging

from winstore.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from winstore.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InfrastructureError,
    ValidationError,
)
from winstore.domain.model.order import (
    Order,
    OrderItem,
    PaymentMethod,
    check_minimum_order_quantity,
)
from winstore.domain.model.value_objects import Quantity
from winstore.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str,
        item_specs: list[OrderItemSpec],
        payment_method: str = PaymentMethod.CASH.value,
    ) -> OrderDTO:
        user_id = (user_id or "").strip()
        try:
            if not user_id:
                raise ValidationError("User id is required")
            if not item_specs:
                raise ValidationError("Order must contain at least one item")

            quantities = [Quantity(spec.quantity) for spec in item_specs]
            method = PaymentMethod.parse(payment_method)
            check_minimum_order_quantity(sum(q.value for q in quantities))

            order = self._place(user_id, item_specs, quantities, method)
        except DomainException as exc:
            logger.warning("Order rejected for user %s: %s", user_id, exc)
            raise
        except InfrastructureError:
            logger.exception("Order placement failed for user %s, rolled back", user_id)
            raise

        logger.info(
            "Order #%s placed by %s: %d line(s), %d unit(s), total %s",
            order.id,
            order.user_id,
            len(order.items),
            order.total_quantity,
            order.total,
        )
        return order_to_dto(order)

    def _place(
        self,
        user_id: str,
        item_specs: list[OrderItemSpec],
        quantities: list[Quantity],
        method: PaymentMethod,
    ) -> Order:
        with self._uow as uow:
            locked = uow.products.lock_by_ids({spec.product_id for spec in item_specs})

            line_items: list[OrderItem] = []
            for spec, quantity in zip(item_specs, quantities):
                product = locked.get(spec.product_id)
                if product is None:
                    raise EntityNotFoundError.for_entity("Product", spec.product_id)

                price = product.price  # snapshot under the row lock
                product.decrement_stock(quantity.value)
                uow.products.update_stock(product)

                line_items.append(
                    OrderItem(
                        product_id=spec.product_id,
                        quantity=quantity,
                        price=price,
                        product_name=product.name,
                    )
                )

            order = uow.orders.add(
                Order.create(user_id=user_id, items=line_items, payment_method=method)
            )
            uow.commit()
        return order
