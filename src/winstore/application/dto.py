"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the boundary (CLI, or any web layer) and the
application layer without exposing domain internals.  Amounts are plain
decimal strings ("300.00") so they serialise to JSON without loss.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from winstore.domain.model.catalog import Category, Factory
from winstore.domain.model.order import Order
from winstore.domain.model.product import Product


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    id: int
    product_id: int
    quantity: int
    price: str
    line_total: str
    product_name: str | None = None


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order header with its line items."""

    id: int
    user_id: str
    status: str
    payment_method: str
    total: str
    created_at: str
    items: list[OrderItemDTO]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CategoryDTO:
    id: int
    name: str
    description: str | None


@dataclass(frozen=True)
class FactoryDTO:
    id: int
    name: str
    location: str
    description: str


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    name_ar: str | None
    description: str
    price: str
    original_price: str
    savings_percent: int
    stock: int
    category_id: int
    factory_id: int | None
    vendor_id: str | None
    category_name: str | None = None
    factory: FactoryDTO | None = None

    def to_dict(self) -> dict:
        return asdict(self)


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        payment_method=order.payment_method.value,
        total=str(order.total.amount),
        created_at=order.created_at.isoformat(),
        items=[
            OrderItemDTO(
                id=item.id,  # type: ignore[arg-type]
                product_id=item.product_id,
                quantity=item.quantity.value,
                price=str(item.price.amount),
                line_total=str(item.line_total.amount),
                product_name=item.product_name,
            )
            for item in order.items
        ],
    )


def product_to_dto(
    product: Product,
    category: Category | None = None,
    factory: Factory | None = None,
) -> ProductDTO:
    """Map a product, attaching its category name and factory when given."""
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        name_ar=product.name_ar,
        description=product.description,
        price=str(product.price.amount),
        original_price=str(product.original_price.amount),
        savings_percent=product.savings_percent,
        stock=product.stock,
        category_id=product.category_id,
        factory_id=product.factory_id,
        vendor_id=product.vendor_id,
        category_name=category.name if category is not None else None,
        factory=factory_to_dto(factory) if factory is not None else None,
    )


def category_to_dto(category: Category) -> CategoryDTO:
    return CategoryDTO(id=category.id, name=category.name, description=category.description)  # type: ignore[arg-type]


def factory_to_dto(factory: Factory) -> FactoryDTO:
    return FactoryDTO(
        id=factory.id,  # type: ignore[arg-type]
        name=factory.name,
        location=factory.location,
        description=factory.description,
    )
