"""Abstract repository for Order aggregate.

Orders are append-only: the only update after insertion is the status.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from winstore.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> Order:
        """Insert the order header and its items; return it with IDs assigned."""

    @abstractmethod
    def get_by_id(self, order_id: int, for_update: bool = False) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Order]:
        """Return a user's orders, newest first."""

    @abstractmethod
    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        """Return every order (optionally of one status), newest first."""

    @abstractmethod
    def update_status(self, order: Order) -> None:
        """Persist ``order.status`` only."""
