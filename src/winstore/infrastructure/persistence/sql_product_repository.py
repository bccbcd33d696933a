"""SQL implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Connection, RowMapping

from winstore.domain.model.product import Product
from winstore.domain.model.value_objects import Money
from winstore.domain.repository.product_repository import ProductRepository
from winstore.infrastructure.persistence.tables import products


class SqlProductRepository(ProductRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._connection.execute(
            select(products).where(products.c.id == product_id)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def get_for_update(self, product_id: int) -> Product | None:
        row = self._connection.execute(
            select(products).where(products.c.id == product_id).with_for_update()
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def lock_by_ids(self, product_ids: Iterable[int]) -> dict[int, Product]:
        ids = sorted(set(product_ids))
        if not ids:
            return {}
        rows = self._connection.execute(
            select(products)
            .where(products.c.id.in_(ids))
            .order_by(products.c.id)
            .with_for_update()
        ).mappings()
        return {row["id"]: self._to_domain(row) for row in rows}

    def find(
        self,
        category_id: int | None = None,
        search: str | None = None,
        sort: str | None = None,
    ) -> list[Product]:
        query = select(products)
        if category_id is not None:
            query = query.where(products.c.category_id == category_id)
        if search:
            query = query.where(
                func.lower(products.c.name).contains(search.lower(), autoescape=True)
            )

        if sort == "price_asc":
            query = query.order_by(products.c.price, products.c.id)
        elif sort == "price_desc":
            query = query.order_by(products.c.price.desc(), products.c.id)
        elif sort == "newest":
            query = query.order_by(products.c.id.desc())
        else:
            query = query.order_by(products.c.id)

        rows = self._connection.execute(query).mappings()
        return [self._to_domain(row) for row in rows]

    def add(self, product: Product) -> Product:
        result = self._connection.execute(insert(products).values(**self._to_row(product)))
        product.id = result.inserted_primary_key[0]
        return product

    def save(self, product: Product) -> None:
        self._connection.execute(
            update(products).where(products.c.id == product.id).values(**self._to_row(product))
        )

    def update_stock(self, product: Product) -> None:
        self._connection.execute(
            update(products).where(products.c.id == product.id).values(stock=product.stock)
        )

    def delete(self, product_id: int) -> bool:
        result = self._connection.execute(delete(products).where(products.c.id == product_id))
        return result.rowcount > 0

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(product: Product) -> dict:
        return {
            "name": product.name,
            "name_ar": product.name_ar,
            "description": product.description,
            "price": product.price.amount,
            "original_price": product.original_price.amount,
            "stock": product.stock,
            "category_id": product.category_id,
            "factory_id": product.factory_id,
            "vendor_id": product.vendor_id,
        }

    @staticmethod
    def _to_domain(row: RowMapping) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            name_ar=row["name_ar"],
            description=row["description"],
            price=Money(Decimal(row["price"])),
            original_price=Money(Decimal(row["original_price"])),
            stock=row["stock"],
            category_id=row["category_id"],
            factory_id=row["factory_id"],
            vendor_id=row["vendor_id"],
        )
