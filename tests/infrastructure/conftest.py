"""Fixtures for tests that run against a real SQLite database file."""

import pytest

from winstore.domain.model.catalog import Category
from winstore.domain.model.product import Product
from winstore.domain.model.value_objects import Money
from winstore.infrastructure.config import Settings
from winstore.infrastructure.persistence.engine import create_engine_from_settings, create_schema
from winstore.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite:///{tmp_path / 'store.db'}", lock_timeout=10.0)


@pytest.fixture
def engine(settings):
    engine = create_engine_from_settings(settings)
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def make_uow(engine, settings):
    def factory() -> SqlUnitOfWork:
        return SqlUnitOfWork(engine, lock_timeout=settings.lock_timeout)
    return factory


@pytest.fixture
def add_products(make_uow):
    """Insert products as ``(name, price, stock)`` tuples under one category; returns their ids."""

    def add(*rows: tuple[str, str, int]) -> list[int]:
        with make_uow() as uow:
            category = uow.catalog.add_category(Category(id=None, name="General"))
            ids = [
                uow.products.add(
                    Product(
                        id=None,
                        name=name,
                        price=Money.of(price),
                        original_price=Money.of(price),
                        stock=stock,
                        category_id=category.id,
                    )
                ).id
                for name, price, stock in rows
            ]
            uow.commit()
        return ids

    return add
