"""Integration tests for the PlaceOrder use case.

Uses the in-memory fake unit of work, no database.
"""

import pytest

from winstore.application.dto import OrderItemSpec
from winstore.application.place_order import PlaceOrderHandler
from winstore.domain.exceptions import (
    EntityNotFoundError,
    InfrastructureError,
    InsufficientStockError,
    PolicyViolationError,
    ValidationError,
)
from winstore.domain.model.product import Product
from winstore.domain.model.value_objects import Money
from tests.fakes import FailingOrderRepository, FakeUnitOfWork


def _product(product_id: int, stock: int, price: str) -> Product:
    return Product(
        id=product_id,
        name=f"Product {product_id}",
        price=Money.of(price),
        original_price=Money.of(price),
        stock=stock,
        category_id=1,
    )


def _setup(products: list[Product] | None = None) -> tuple[PlaceOrderHandler, FakeUnitOfWork]:
    if products is None:
        products = [
            _product(1, stock=100, price="10.00"),
            _product(2, stock=40, price="4.25"),
            _product(3, stock=5, price="99.99"),
        ]
    uow = FakeUnitOfWork(products=products)
    return PlaceOrderHandler(uow), uow


def _stock(uow: FakeUnitOfWork, product_id: int) -> int:
    return uow.products.get_by_id(product_id).stock


class TestPlaceOrderHappyPath:

    def test_creates_order_with_snapshot_total(self):
        handler, uow = _setup()
        dto = handler.handle("user-1", [OrderItemSpec(1, 30)])

        assert dto.id == 1
        assert dto.status == "pending"
        assert dto.payment_method == "cash"
        assert dto.total == "300.00"
        assert len(dto.items) == 1
        assert dto.items[0].price == "10.00"
        assert dto.items[0].quantity == 30
        assert dto.items[0].product_name == "Product 1"
        assert _stock(uow, 1) == 70
        assert uow.commits == 1

    def test_records_payment_method(self):
        handler, _ = _setup()
        dto = handler.handle("user-1", [OrderItemSpec(1, 30)], payment_method="visa")
        assert dto.payment_method == "visa"

    def test_multi_line_order(self):
        handler, uow = _setup()
        dto = handler.handle("user-1", [OrderItemSpec(1, 20), OrderItemSpec(2, 10)])
        assert dto.total == "242.50"
        assert _stock(uow, 1) == 80
        assert _stock(uow, 2) == 30

    def test_duplicate_lines_are_independent(self):
        handler, uow = _setup()
        dto = handler.handle("user-1", [OrderItemSpec(2, 20), OrderItemSpec(2, 20)])
        assert [i.quantity for i in dto.items] == [20, 20]
        assert dto.total == "170.00"
        assert _stock(uow, 2) == 0

    def test_duplicate_lines_cannot_oversell_together(self):
        handler, uow = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle("user-1", [OrderItemSpec(2, 25), OrderItemSpec(2, 25)])
        assert _stock(uow, 2) == 40

    def test_locks_rows_in_ascending_id_order(self):
        handler, uow = _setup()
        handler.handle("user-1", [OrderItemSpec(2, 15), OrderItemSpec(1, 15)])
        assert uow.products.locked_ids == [1, 2]

    def test_items_keep_input_order(self):
        handler, _ = _setup()
        dto = handler.handle("user-1", [OrderItemSpec(2, 15), OrderItemSpec(1, 15)])
        assert [i.product_id for i in dto.items] == [2, 1]

    def test_total_equals_sum_of_lines(self):
        products = [_product(i, stock=10, price="0.07") for i in range(1, 41)]
        handler, _ = _setup(products)
        dto = handler.handle("user-1", [OrderItemSpec(i, 1) for i in range(1, 41)])
        assert dto.total == "2.80"


class TestMinimumOrderQuantity:

    def test_below_minimum_rejected_before_touching_store(self):
        handler, uow = _setup()
        with pytest.raises(PolicyViolationError, match="Minimum order quantity is 30"):
            handler.handle("user-1", [OrderItemSpec(1, 5)])
        assert uow.products.locked_ids == []
        assert uow.orders.list_all() == []
        assert _stock(uow, 1) == 100

    def test_minimum_counts_units_across_lines(self):
        handler, _ = _setup()
        dto = handler.handle("user-1", [OrderItemSpec(1, 15), OrderItemSpec(2, 15)])
        assert dto.id is not None

    def test_twenty_nine_units_rejected(self):
        handler, _ = _setup()
        with pytest.raises(PolicyViolationError) as info:
            handler.handle("user-1", [OrderItemSpec(1, 20), OrderItemSpec(2, 9)])
        assert info.value.submitted == 29


class TestStockProtection:

    def test_sequential_oversell_prevented(self):
        handler, uow = _setup([_product(1, stock=30, price="10.00")])
        handler.handle("user-1", [OrderItemSpec(1, 30)])

        with pytest.raises(InsufficientStockError) as info:
            handler.handle("user-2", [OrderItemSpec(1, 30)])

        assert info.value.available == 0
        assert info.value.shortfall == 30
        assert _stock(uow, 1) == 0
        assert len(uow.orders.list_all()) == 1

    def test_failing_line_rolls_back_earlier_lines(self):
        handler, uow = _setup([
            _product(1, stock=40, price="10.00"),
            _product(2, stock=5, price="10.00"),
        ])
        with pytest.raises(InsufficientStockError, match="Product 2"):
            handler.handle("user-1", [OrderItemSpec(1, 20), OrderItemSpec(2, 10)])

        assert _stock(uow, 1) == 40
        assert _stock(uow, 2) == 5
        assert uow.orders.list_all() == []
        assert uow.rollbacks == 1

    def test_unknown_product_rolls_back(self):
        handler, uow = _setup()
        with pytest.raises(EntityNotFoundError, match="Product #999 not found") as info:
            handler.handle("user-1", [OrderItemSpec(1, 20), OrderItemSpec(999, 10)])
        assert info.value.entity_id == 999
        assert _stock(uow, 1) == 100
        assert uow.orders.list_all() == []

    def test_infrastructure_failure_rolls_back(self):
        uow = FakeUnitOfWork(
            products=[_product(1, stock=100, price="10.00")],
            orders=FailingOrderRepository(),
        )
        handler = PlaceOrderHandler(uow)
        with pytest.raises(InfrastructureError):
            handler.handle("user-1", [OrderItemSpec(1, 30)])
        assert _stock(uow, 1) == 100


class TestPriceSnapshot:

    def test_later_price_change_does_not_touch_order(self):
        handler, uow = _setup()
        dto = handler.handle("user-1", [OrderItemSpec(1, 30)])

        with uow:
            product = uow.products.get_for_update(1)
            product.update_price(Money.of("20.00"))
            uow.products.save(product)
            uow.commit()

        saved = uow.orders.get_by_id(dto.id)
        assert saved.items[0].price == Money.of("10.00")
        assert saved.total == Money.of("300.00")


class TestInputValidation:

    def test_zero_quantity_rejected(self):
        handler, uow = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle("user-1", [OrderItemSpec(1, 0), OrderItemSpec(2, 30)])
        assert uow.products.locked_ids == []

    def test_empty_cart_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            handler.handle("user-1", [])

    def test_missing_user_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="User id"):
            handler.handle("", [OrderItemSpec(1, 30)])

    def test_unknown_payment_method_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="payment method"):
            handler.handle("user-1", [OrderItemSpec(1, 30)], payment_method="cheque")
