"""Application service: List Orders use case (query)."""

from __future__ import annotations

from winstore.application.dto import OrderDTO, order_to_dto
from winstore.domain.exceptions import ValidationError
from winstore.domain.model.order import OrderStatus
from winstore.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def for_user(self, user_id: str) -> list[OrderDTO]:
        """A customer's order history, newest first."""
        if not user_id or not user_id.strip():
            raise ValidationError("User id is required")
        with self._uow as uow:
            orders = uow.orders.list_for_user(user_id.strip())
        return [order_to_dto(o) for o in orders]

    def all(self, status: str | None = None) -> list[OrderDTO]:
        """Every order in the store (admin view), newest first."""
        wanted = OrderStatus.parse(status) if status else None
        with self._uow as uow:
            orders = uow.orders.list_all(status=wanted)
        return [order_to_dto(o) for o in orders]
