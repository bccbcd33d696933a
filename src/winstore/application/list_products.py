"""Application service: product catalogue queries."""

from __future__ import annotations

from winstore.application.dto import ProductDTO, product_to_dto
from winstore.domain.exceptions import EntityNotFoundError, ValidationError
from winstore.domain.repository.product_repository import SORT_KEYS
from winstore.domain.repository.unit_of_work import UnitOfWork


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        category_id: int | None = None,
        search: str | None = None,
        sort: str | None = None,
    ) -> list[ProductDTO]:
        """List the catalogue.

        ``category_id`` is an integer ID; category names are not accepted
        here rather than being silently ignored.
        """
        if sort is not None and sort not in SORT_KEYS:
            raise ValidationError(f"Unknown sort '{sort}' (expected one of: {', '.join(SORT_KEYS)})")
        if search is not None:
            search = search.strip() or None

        with self._uow as uow:
            products = uow.products.find(category_id=category_id, search=search, sort=sort)
            categories = {c.id: c for c in uow.catalog.list_categories()}
            factories = {f.id: f for f in uow.catalog.list_factories()}
        return [
            product_to_dto(p, categories.get(p.category_id), factories.get(p.factory_id))
            for p in products
        ]

    def get(self, product_id: int) -> ProductDTO:
        """One product with its category name and factory attached."""
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError.for_entity("Product", product_id)
            category = uow.catalog.get_category(product.category_id)
            factory = (
                uow.catalog.get_factory(product.factory_id)
                if product.factory_id is not None
                else None
            )
        return product_to_dto(product, category, factory)
