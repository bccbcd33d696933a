"""In-memory fakes for testing.

These implement the same abstract interfaces as the SQL repositories but
keep everything in dicts.  FakeUnitOfWork snapshots the stores when a
``with`` block starts and restores them on rollback, so the fakes honour
the same all-or-nothing contract as a real transaction.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from dataclasses import replace

from winstore.domain.exceptions import InfrastructureError
from winstore.domain.model.catalog import Category, Factory
from winstore.domain.model.order import Order, OrderStatus
from winstore.domain.model.product import Product
from winstore.domain.repository.catalog_repository import CatalogRepository
from winstore.domain.repository.order_repository import OrderRepository
from winstore.domain.repository.product_repository import ProductRepository
from winstore.domain.repository.unit_of_work import UnitOfWork


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[int, Product] = {}
        self.locked_ids: list[int] = []
        for p in products or []:
            self._store[p.id] = copy.deepcopy(p)

    def get_by_id(self, product_id: int) -> Product | None:
        product = self._store.get(product_id)
        return copy.deepcopy(product) if product is not None else None

    def get_for_update(self, product_id: int) -> Product | None:
        self.locked_ids.append(product_id)
        return self.get_by_id(product_id)

    def lock_by_ids(self, product_ids: Iterable[int]) -> dict[int, Product]:
        locked = {}
        for product_id in sorted(set(product_ids)):
            self.locked_ids.append(product_id)
            if product_id in self._store:
                locked[product_id] = copy.deepcopy(self._store[product_id])
        return locked

    def find(
        self,
        category_id: int | None = None,
        search: str | None = None,
        sort: str | None = None,
    ) -> list[Product]:
        found = [copy.deepcopy(p) for p in self._store.values()]
        if category_id is not None:
            found = [p for p in found if p.category_id == category_id]
        if search:
            found = [p for p in found if search.lower() in p.name.lower()]
        if sort == "price_asc":
            found.sort(key=lambda p: (p.price.amount, p.id))
        elif sort == "price_desc":
            found.sort(key=lambda p: (-p.price.amount, p.id))
        elif sort == "newest":
            found.sort(key=lambda p: -p.id)
        else:
            found.sort(key=lambda p: p.id)
        return found

    def add(self, product: Product) -> Product:
        product.id = max(self._store, default=0) + 1
        self._store[product.id] = copy.deepcopy(product)
        return product

    def save(self, product: Product) -> None:
        self._store[product.id] = copy.deepcopy(product)

    def update_stock(self, product: Product) -> None:
        self._store[product.id].stock = product.stock

    def delete(self, product_id: int) -> bool:
        return self._store.pop(product_id, None) is not None


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        # Set by FakeUnitOfWork; used to attach product names on read.
        self.products: FakeProductRepository | None = None
        self._next_id = 1
        self._next_item_id = 1

    def add(self, order: Order) -> Order:
        order.id = self._next_id
        self._next_id += 1
        items = []
        for item in order.items:
            items.append(replace(item, id=self._next_item_id, order_id=order.id))
            self._next_item_id += 1
        order.items = items
        self._store[order.id] = copy.deepcopy(order)
        return order

    def get_by_id(self, order_id: int, for_update: bool = False) -> Order | None:
        order = self._store.get(order_id)
        return self._with_names(order) if order is not None else None

    def list_for_user(self, user_id: str) -> list[Order]:
        return self._newest_first(o for o in self._store.values() if o.user_id == user_id)

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        return self._newest_first(
            o for o in self._store.values() if status is None or o.status == status
        )

    def update_status(self, order: Order) -> None:
        self._store[order.id].status = order.status

    def _newest_first(self, orders: Iterable[Order]) -> list[Order]:
        return [self._with_names(o) for o in sorted(orders, key=lambda o: (o.created_at, o.id), reverse=True)]

    def _with_names(self, order: Order) -> Order:
        order = copy.deepcopy(order)
        catalogue = self.products._store if self.products is not None else {}
        order.items = [
            replace(
                item,
                product_name=catalogue[item.product_id].name if item.product_id in catalogue else None,
            )
            for item in order.items
        ]
        return order


class FailingOrderRepository(FakeOrderRepository):
    """Simulates the store dropping the connection while the order is written."""

    def add(self, order: Order) -> Order:
        raise InfrastructureError("connection lost")


class FakeCatalogRepository(CatalogRepository):

    def __init__(
        self,
        categories: list[Category] | None = None,
        factories: list[Factory] | None = None,
    ) -> None:
        self._categories: dict[int, Category] = {c.id: c for c in categories or []}
        self._factories: dict[int, Factory] = {f.id: f for f in factories or []}

    def get_category(self, category_id: int) -> Category | None:
        return self._categories.get(category_id)

    def list_categories(self) -> list[Category]:
        return list(self._categories.values())

    def add_category(self, category: Category) -> Category:
        category = replace(category, id=max(self._categories, default=0) + 1)
        self._categories[category.id] = category
        return category

    def get_factory(self, factory_id: int) -> Factory | None:
        return self._factories.get(factory_id)

    def list_factories(self) -> list[Factory]:
        return list(self._factories.values())

    def add_factory(self, factory: Factory) -> Factory:
        factory = replace(factory, id=max(self._factories, default=0) + 1)
        self._factories[factory.id] = factory
        return factory


class FakeUnitOfWork(UnitOfWork):

    def __init__(
        self,
        products: list[Product] | None = None,
        categories: list[Category] | None = None,
        factories: list[Factory] | None = None,
        orders: FakeOrderRepository | None = None,
    ) -> None:
        self.products = FakeProductRepository(products)
        self.orders = orders or FakeOrderRepository()
        self.orders.products = self.products
        self.catalog = FakeCatalogRepository(categories, factories)
        self.commits = 0
        self.rollbacks = 0
        self._snapshot: dict | None = None

    def __enter__(self) -> FakeUnitOfWork:
        self._snapshot = copy.deepcopy(self._state())
        return self

    def commit(self) -> None:
        self._snapshot = None
        self.commits += 1

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        state = self._snapshot
        self.products._store = state["products"]
        self.orders._store = state["orders"]
        self.orders._next_id = state["next_order_id"]
        self.catalog._categories = state["categories"]
        self.catalog._factories = state["factories"]
        self._snapshot = None
        self.rollbacks += 1

    def _state(self) -> dict:
        return {
            "products": self.products._store,
            "orders": self.orders._store,
            "next_order_id": self.orders._next_id,
            "categories": self.catalog._categories,
            "factories": self.catalog._factories,
        }
