"""Application service: Set Order Status use case (admin only).

The single place where an order's status changes after checkout.  The
order row is locked for the duration of the change so two administrators
cannot both move an order out of the same state.  Stock and totals are
never touched.
"""

from __future__ import annotations

import logging

from winstore.application.dto import OrderDTO, order_to_dto
from winstore.domain.exceptions import EntityNotFoundError
from winstore.domain.model.order import OrderStatus
from winstore.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SetOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, new_status: str) -> OrderDTO:
        status = OrderStatus.parse(new_status)

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise EntityNotFoundError.for_entity("Order", order_id)

            previous = order.status
            order.transition_to(status)
            uow.orders.update_status(order)
            uow.commit()

        logger.info("Order #%s status changed: %s -> %s", order_id, previous.value, status.value)
        return order_to_dto(order)

    def approve(self, order_id: int) -> OrderDTO:
        """The dashboard's "Approve" action."""
        return self.handle(order_id, OrderStatus.APPROVED.value)
