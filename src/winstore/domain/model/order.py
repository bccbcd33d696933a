"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items.  Everything
except ``status`` is fixed at creation; the status only moves along the
transition table below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from winstore.domain.exceptions import (
    InvalidTransitionError,
    PolicyViolationError,
    ValidationError,
)
from winstore.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, raw: str) -> OrderStatus:
        try:
            return cls(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(f"Unknown order status '{raw}' (expected one of: {allowed})")

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]


class PaymentMethod(Enum):
    CASH = "cash"
    VISA = "visa"

    @classmethod
    def parse(cls, raw: str) -> PaymentMethod:
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown payment method '{raw}' (expected cash or visa)")


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.APPROVED, OrderStatus.CANCELLED}),
    OrderStatus.APPROVED: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MIN_ORDER_QUANTITY = 30


def check_minimum_order_quantity(total_quantity: int) -> None:
    """Reject carts whose units add up to less than the wholesale minimum."""
    if total_quantity < MIN_ORDER_QUANTITY:
        raise PolicyViolationError(required=MIN_ORDER_QUANTITY, submitted=total_quantity)


@dataclass(frozen=True)
class OrderItem:
    """One order line with the product price captured at checkout.

    Frozen: the snapshot never changes, whatever happens to the product.
    """

    product_id: int
    quantity: Quantity
    price: Money  # locked at order-creation time
    id: int | None = None
    order_id: int | None = None
    # Read from the product when loaded; None once the product is deleted.
    product_name: str | None = field(default=None, compare=False)

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it computes the
    total from the line snapshots.  The repository reconstitutes persisted
    orders through ``__init__`` without recomputing anything.
    """

    id: int | None
    user_id: str
    items: list[OrderItem]
    total: Money
    payment_method: PaymentMethod = PaymentMethod.CASH
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderItem],
        payment_method: PaymentMethod = PaymentMethod.CASH,
    ) -> Order:
        if not user_id or not user_id.strip():
            raise ValidationError("User id is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Order(
            id=None,
            user_id=user_id.strip(),
            items=list(items),
            total=total,
            payment_method=payment_method,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, new_status: OrderStatus) -> None:
        if not self.can_transition_to(new_status):
            raise InvalidTransitionError(self.status.value, new_status.value)
        self.status = new_status

    def approve(self) -> None:
        self.transition_to(OrderStatus.APPROVED)

    # --- Computed properties --------------------------------------------------

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity.value for item in self.items)
