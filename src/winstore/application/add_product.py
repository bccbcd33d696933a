"""Application service: Add Product use case (vendor/admin)."""

from __future__ import annotations

import logging

from winstore.application.dto import ProductDTO, product_to_dto
from winstore.domain.exceptions import EntityNotFoundError, ValidationError
from winstore.domain.model.product import Product
from winstore.domain.model.value_objects import Money
from winstore.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        name: str,
        price: str,
        category_id: int,
        stock: int = 0,
        original_price: str | None = None,
        factory_id: int | None = None,
        vendor_id: str | None = None,
        name_ar: str | None = None,
        description: str = "",
    ) -> ProductDTO:
        """Add a new product to the catalogue.

        ``original_price`` defaults to ``price`` (no advertised saving).
        """
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        sale_price = Money.of(price)
        if sale_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        product = Product(
            id=None,
            name=name.strip(),
            price=sale_price,
            original_price=Money.of(original_price) if original_price is not None else sale_price,
            stock=stock,
            category_id=category_id,
            factory_id=factory_id,
            vendor_id=vendor_id,
            name_ar=name_ar.strip() if name_ar else None,
            description=description,
        )

        with self._uow as uow:
            if uow.catalog.get_category(category_id) is None:
                raise EntityNotFoundError.for_entity("Category", category_id)
            if factory_id is not None and uow.catalog.get_factory(factory_id) is None:
                raise EntityNotFoundError.for_entity("Factory", factory_id)
            product = uow.products.add(product)
            uow.commit()

        logger.info("Product #%s '%s' added at %s", product.id, product.name, product.price)
        return product_to_dto(product)
