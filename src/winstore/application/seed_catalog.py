"""Application service: load the sample catalogue into an empty store."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from winstore.domain.model.catalog import Category, Factory
from winstore.domain.model.product import Product
from winstore.domain.model.value_objects import Money
from winstore.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

SAMPLE_FACTORIES = [
    ("Summit Textiles", "Guimarães, Portugal",
     "A family-owned mill in Portugal specializing in sustainable cotton."),
    ("Nordic Woodworks", "Tallinn, Estonia",
     "Master craftsmen creating timeless furniture from responsibly sourced timber."),
    ("TechZen Electronics", "Shenzhen, China",
     "High-precision audio engineering lab formerly supplying major audiophile brands."),
]

SAMPLE_CATEGORIES = [
    ("Home & Living", "Premium essentials for your sanctuary."),
    ("Electronics", "Cutting-edge tech, factory direct pricing."),
    ("Apparel", "Luxury fabrics without the luxury markup."),
]

# name, price, original price, factory index, category index, stock
SAMPLE_PRODUCTS = [
    ("The Cloud Comforter", "85.00", "250.00", 0, 0, 150),
    ("Nordic Minimalist Chair", "145.00", "399.00", 1, 0, 50),
    ("SonicPro ANC Headphones", "79.00", "220.00", 2, 1, 200),
    ("Premium Cotton Tee", "18.00", "55.00", 0, 2, 500),
    ("Organic Face Serum", "25.00", "75.00", 0, 0, 100),
    ("Whole Grain Granola", "12.00", "30.00", 0, 0, 300),
]


@dataclass(frozen=True)
class SeedResult:
    factories: int
    categories: int
    products: int

    @property
    def skipped(self) -> bool:
        return not (self.factories or self.categories or self.products)


class SeedCatalogHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> SeedResult:
        """Insert the sample data unless factories already exist."""
        with self._uow as uow:
            if uow.catalog.list_factories():
                logger.info("Catalogue already populated, skipping seed")
                return SeedResult(0, 0, 0)

            factories = [
                uow.catalog.add_factory(Factory(id=None, name=n, location=loc, description=d))
                for n, loc, d in SAMPLE_FACTORIES
            ]
            categories = [
                uow.catalog.add_category(Category(id=None, name=n, description=d))
                for n, d in SAMPLE_CATEGORIES
            ]
            for name, price, original, f_idx, c_idx, stock in SAMPLE_PRODUCTS:
                uow.products.add(
                    Product(
                        id=None,
                        name=name,
                        price=Money.of(price),
                        original_price=Money.of(original),
                        stock=stock,
                        category_id=categories[c_idx].id,  # type: ignore[arg-type]
                        factory_id=factories[f_idx].id,
                    )
                )
            uow.commit()

        result = SeedResult(len(SAMPLE_FACTORIES), len(SAMPLE_CATEGORIES), len(SAMPLE_PRODUCTS))
        logger.info("Seeded %s", result)
        return result
