"""Application service: Show Order use case (query)."""

from __future__ import annotations

from winstore.application.dto import OrderDTO, order_to_dto
from winstore.domain.exceptions import AuthorizationError, EntityNotFoundError
from winstore.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, user_id: str | None = None) -> OrderDTO:
        """Return one order.  When ``user_id`` is given it must own the order."""
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError.for_entity("Order", order_id)
        if user_id is not None and order.user_id != user_id.strip():
            raise AuthorizationError(f"Order #{order_id} belongs to another user")
        return order_to_dto(order)
