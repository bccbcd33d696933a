"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.

Every repository works inside the transaction of the unit of work that
created it; nothing here commits.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from winstore.domain.model.product import Product

SORT_KEYS = ("price_asc", "price_desc", "newest")


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_for_update(self, product_id: int) -> Product | None:
        """Return a product and hold an exclusive lock on its row."""

    @abstractmethod
    def lock_by_ids(self, product_ids: Iterable[int]) -> dict[int, Product]:
        """Lock every existing row among ``product_ids``, in ascending ID order.

        Missing IDs are simply absent from the returned mapping.
        """

    @abstractmethod
    def find(
        self,
        category_id: int | None = None,
        search: str | None = None,
        sort: str | None = None,
    ) -> list[Product]:
        """Return catalogue products, optionally filtered and sorted."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Insert a new product and return it with its ID assigned."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist every mutable field of an existing product."""

    @abstractmethod
    def update_stock(self, product: Product) -> None:
        """Persist ``product.stock`` only."""

    @abstractmethod
    def delete(self, product_id: int) -> bool:
        """Remove a product; return False if it did not exist."""
