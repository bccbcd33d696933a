"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is replenished, products are removed from the
catalogue.  Orders only ever hold a price snapshot and a product id.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from winstore.domain.exceptions import InsufficientStockError, ValidationError
from winstore.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalogue.

    ``stock`` is the only field that checkout mutates, and it may never
    drop below zero.
    """

    id: int | None
    name: str
    price: Money
    original_price: Money
    stock: int
    category_id: int
    factory_id: int | None = None
    vendor_id: str | None = None
    name_ar: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {self.stock}")

    # --- Mutations ------------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def set_stock(self, level: int) -> None:
        if level < 0:
            raise ValidationError(f"Stock cannot be negative, got {level}")
        self.stock = level

    def decrement_stock(self, quantity: int) -> None:
        """Take ``quantity`` units out of stock for an order line."""
        if quantity <= 0:
            raise ValidationError(f"Quantity must be positive, got {quantity}")
        if self.stock < quantity:
            raise InsufficientStockError(
                product_id=self.id,  # type: ignore[arg-type]
                product_name=self.name,
                requested=quantity,
                available=self.stock,
            )
        self.stock -= quantity

    # --- Display helpers ------------------------------------------------------

    @property
    def savings(self) -> Money:
        if self.original_price <= self.price:
            return Money.zero()
        return self.original_price - self.price

    @property
    def savings_percent(self) -> int:
        if self.original_price.amount == 0 or self.original_price <= self.price:
            return 0
        return int(self.savings.amount * Decimal(100) / self.original_price.amount)
