"""Abstract unit of work: one all-or-nothing transaction over the store.

Usage::

    with uow:
        product = uow.products.get_for_update(1)
        ...
        uow.commit()

Leaving the ``with`` block without calling ``commit()`` (including
leaving it through an exception) rolls everything back.  A unit of work
may be entered again after it exits; each entry is a fresh transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from winstore.domain.repository.catalog_repository import CatalogRepository
from winstore.domain.repository.order_repository import OrderRepository
from winstore.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository
    catalog: CatalogRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change of this transaction durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes; a no-op after ``commit()``."""
