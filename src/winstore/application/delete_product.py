"""Application service: Delete Product use case (admin).

Order items keep their product id and price snapshot; deleting the
product leaves order history untouched.
"""

from __future__ import annotations

import logging

from winstore.domain.exceptions import EntityNotFoundError
from winstore.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> None:
        with self._uow as uow:
            if not uow.products.delete(product_id):
                raise EntityNotFoundError.for_entity("Product", product_id)
            uow.commit()
        logger.info("Product #%s deleted", product_id)
