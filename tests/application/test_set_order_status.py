"""Integration tests for the SetOrderStatus use case."""

import pytest

from winstore.application.dto import OrderItemSpec
from winstore.application.place_order import PlaceOrderHandler
from winstore.application.set_order_status import SetOrderStatusHandler
from winstore.domain.exceptions import EntityNotFoundError, InvalidTransitionError, ValidationError
from winstore.domain.model.order import OrderStatus
from winstore.domain.model.product import Product
from winstore.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork


def _setup():
    uow = FakeUnitOfWork(products=[
        Product(id=1, name="Tee", price=Money.of("18.00"), original_price=Money.of("55.00"),
                stock=500, category_id=1),
    ])
    dto = PlaceOrderHandler(uow).handle("user-1", [OrderItemSpec(1, 30)])
    return SetOrderStatusHandler(uow), uow, dto.id


class TestSetOrderStatus:

    def test_approve_pending_order(self):
        handler, uow, order_id = _setup()
        dto = handler.approve(order_id)
        assert dto.status == "approved"
        assert uow.orders.get_by_id(order_id).status == OrderStatus.APPROVED

    def test_complete_after_approval(self):
        handler, uow, order_id = _setup()
        handler.handle(order_id, "approved")
        dto = handler.handle(order_id, "completed")
        assert dto.status == "completed"

    def test_cancel_pending_order(self):
        handler, _, order_id = _setup()
        assert handler.handle(order_id, "cancelled").status == "cancelled"

    def test_status_change_leaves_stock_and_total_alone(self):
        handler, uow, order_id = _setup()
        before = uow.orders.get_by_id(order_id)
        handler.handle(order_id, "cancelled")
        after = uow.orders.get_by_id(order_id)
        assert after.total == before.total
        assert after.items == before.items
        assert uow.products.get_by_id(1).stock == 470

    def test_backwards_transition_rejected_and_not_persisted(self):
        handler, uow, order_id = _setup()
        handler.approve(order_id)
        with pytest.raises(InvalidTransitionError):
            handler.handle(order_id, "pending")
        assert uow.orders.get_by_id(order_id).status == OrderStatus.APPROVED

    def test_terminal_state_rejects_changes(self):
        handler, _, order_id = _setup()
        handler.handle(order_id, "cancelled")
        with pytest.raises(InvalidTransitionError, match="cancelled to approved"):
            handler.approve(order_id)

    def test_unknown_order(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Order #42 not found"):
            handler.approve(42)

    def test_unknown_status(self):
        handler, _, order_id = _setup()
        with pytest.raises(ValidationError, match="Unknown order status"):
            handler.handle(order_id, "shipped")
