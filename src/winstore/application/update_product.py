"""Application service: Update Product use case (vendor/admin)."""

from __future__ import annotations

import logging

from winstore.application.dto import ProductDTO, product_to_dto
from winstore.domain.exceptions import AuthorizationError, EntityNotFoundError, ValidationError
from winstore.domain.model.value_objects import Money
from winstore.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: int,
        new_price: str | None = None,
        new_stock: int | None = None,
        vendor_id: str | None = None,
    ) -> ProductDTO:
        """Change a product's price and/or stock level.

        A price change does NOT affect any existing orders; they
        captured a price snapshot at creation time.  The row is locked
        so a stock adjustment cannot interleave with a checkout.

        When ``vendor_id`` is given the product must belong to that vendor.
        """
        if new_price is None and new_stock is None:
            raise ValidationError("Nothing to update: give a new price or stock level")

        with self._uow as uow:
            product = uow.products.get_for_update(product_id)
            if product is None:
                raise EntityNotFoundError.for_entity("Product", product_id)
            if vendor_id is not None and product.vendor_id != vendor_id:
                raise AuthorizationError(f"Product #{product_id} belongs to another vendor")

            if new_price is not None:
                product.update_price(Money.of(new_price))
            if new_stock is not None:
                product.set_stock(new_stock)
            uow.products.save(product)
            uow.commit()

        logger.info(
            "Product #%s updated: price=%s stock=%d", product_id, product.price, product.stock
        )
        return product_to_dto(product)
