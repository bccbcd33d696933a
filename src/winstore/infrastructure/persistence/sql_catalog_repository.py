"""SQL implementation of CatalogRepository."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection, RowMapping

from winstore.domain.model.catalog import Category, Factory
from winstore.domain.repository.catalog_repository import CatalogRepository
from winstore.infrastructure.persistence.tables import categories, factories


class SqlCatalogRepository(CatalogRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    # --- Categories -----------------------------------------------------------

    def get_category(self, category_id: int) -> Category | None:
        row = self._connection.execute(
            select(categories).where(categories.c.id == category_id)
        ).mappings().first()
        return self._category(row) if row is not None else None

    def list_categories(self) -> list[Category]:
        rows = self._connection.execute(select(categories).order_by(categories.c.id)).mappings()
        return [self._category(row) for row in rows]

    def add_category(self, category: Category) -> Category:
        result = self._connection.execute(
            insert(categories).values(name=category.name, description=category.description)
        )
        return replace(category, id=result.inserted_primary_key[0])

    # --- Factories ------------------------------------------------------------

    def get_factory(self, factory_id: int) -> Factory | None:
        row = self._connection.execute(
            select(factories).where(factories.c.id == factory_id)
        ).mappings().first()
        return self._factory(row) if row is not None else None

    def list_factories(self) -> list[Factory]:
        rows = self._connection.execute(select(factories).order_by(factories.c.id)).mappings()
        return [self._factory(row) for row in rows]

    def add_factory(self, factory: Factory) -> Factory:
        result = self._connection.execute(
            insert(factories).values(
                name=factory.name, location=factory.location, description=factory.description
            )
        )
        return replace(factory, id=result.inserted_primary_key[0])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _category(row: RowMapping) -> Category:
        return Category(id=row["id"], name=row["name"], description=row["description"])

    @staticmethod
    def _factory(row: RowMapping) -> Factory:
        return Factory(
            id=row["id"],
            name=row["name"],
            location=row["location"],
            description=row["description"],
        )
