"""Unit tests for the CartValidator domain service."""

import pytest

from stockroom.domain.exceptions import (
    EntityNotFoundError,
    InactiveOrUnsellableError,
    InsufficientStockError,
    NoInventoryError,
    QuantityOutOfRangeError,
    ValidationError,
    ZeroStockError,
)
from stockroom.domain.model.cart import CartItem
from stockroom.domain.model.inventory import InventoryRecord
from stockroom.domain.model.product import Product
from stockroom.domain.model.validation import RejectionReason
from stockroom.domain.model.warehouse import Warehouse
from stockroom.domain.service.availability import AvailabilityChecker
from stockroom.domain.service.cart_validator import CartValidator
from stockroom.domain.service.stock_ledger import StockLedger
from tests.fakes import (
    FakeCartRepository,
    FakeInventoryRepository,
    FakeProductRepository,
    FakeWarehouseRepository,
)


def _setup() -> tuple[CartValidator, FakeCartRepository]:
    products = FakeProductRepository([
        Product(id="A", name="Widget", business_id="B1"),
        Product(id="C", name="Empty", business_id="B1"),
        Product(id="D", name="Unstocked", business_id="B1"),
        Product(id="I", name="Retired", business_id="B1", is_active=False),
        Product(id="S", name="Display", business_id="B1", allows_sale=False),
        Product(id="N", name="Orphan"),
        Product(id="L", name="Limited", business_id="B1", min_quantity=2, max_quantity=4),
        Product(id="Q", name="Hidden", business_id="B1"),
    ])
    warehouses = FakeWarehouseRepository([
        Warehouse(id="W1", name="North"),
        Warehouse(id="W2", name="South"),
        Warehouse(id="W3", name="Closed", is_active=False),
    ])
    inventory = FakeInventoryRepository([
        InventoryRecord("A", "W1", 5, 1),
        InventoryRecord("A", "W2", 3, 0),
        InventoryRecord("C", "W1", 0, 0),
        InventoryRecord("L", "W1", 10, 0),
        InventoryRecord("Q", "W3", 50, 0),
    ])
    carts = FakeCartRepository()
    availability = AvailabilityChecker(StockLedger(inventory), warehouses)
    return CartValidator(products, carts, availability), carts


class TestCanAdd:

    def test_accepts_available_quantity(self):
        validator, _ = _setup()
        result = validator.can_add("A", 4)
        assert result.ok
        result.raise_if_rejected()

    @pytest.mark.parametrize(
        "product_id, reason",
        [
            ("missing", RejectionReason.NOT_FOUND),
            ("I", RejectionReason.PRODUCT_INACTIVE),
            ("S", RejectionReason.SALE_NOT_ALLOWED),
            ("N", RejectionReason.NO_BUSINESS),
            ("D", RejectionReason.NO_INVENTORY),
            ("Q", RejectionReason.NO_INVENTORY),
            ("C", RejectionReason.ZERO_STOCK),
        ],
    )
    def test_rejection_reasons(self, product_id, reason):
        validator, _ = _setup()
        assert validator.can_add(product_id, 1).reason == reason

    def test_zero_stock_product(self):
        validator, _ = _setup()
        result = validator.can_add("C", 1)
        assert result.reason == RejectionReason.ZERO_STOCK
        with pytest.raises(ZeroStockError):
            result.raise_if_rejected()

    def test_insufficient_uses_best_single_warehouse(self):
        validator, _ = _setup()
        # 4 available at W1 and 3 at W2; 7 in total but no single warehouse has 5
        result = validator.can_add("A", 5)
        assert result.reason == RejectionReason.INSUFFICIENT_STOCK
        assert result.available == 4
        assert result.requested == 5
        with pytest.raises(InsufficientStockError) as exc_info:
            result.raise_if_rejected()
        assert exc_info.value.product_id == "A"

    def test_quantity_limits(self):
        validator, _ = _setup()
        assert validator.can_add("L", 1).reason == RejectionReason.QUANTITY_OUT_OF_RANGE
        assert validator.can_add("L", 5).reason == RejectionReason.QUANTITY_OUT_OF_RANGE
        assert validator.can_add("L", 3).ok

    def test_existing_cart_quantity_counts(self):
        validator, carts = _setup()
        carts.save_item(CartItem(id=None, cart_id="cart-1", product_id="A", quantity=3))

        assert validator.can_add("A", 1, cart_id="cart-1").ok
        assert (
            validator.can_add("A", 2, cart_id="cart-1").reason
            == RejectionReason.INSUFFICIENT_STOCK
        )
        assert validator.can_add("A", 2, cart_id="other").ok

    def test_non_positive_quantity_rejected(self):
        validator, _ = _setup()
        with pytest.raises(ValidationError):
            validator.can_add("A", 0)

    def test_priority_inactive_before_stock(self):
        validator, _ = _setup()
        # inactive and unstocked: the product flag wins
        assert validator.can_add("I", 100).reason == RejectionReason.PRODUCT_INACTIVE


class TestCanUpdate:

    def test_checks_new_quantity(self):
        validator, carts = _setup()
        item = CartItem(id=None, cart_id="cart-1", product_id="A", quantity=1)
        carts.save_item(item)

        assert validator.can_update(item.id, 4).ok
        assert validator.can_update(item.id, 5).reason == RejectionReason.INSUFFICIENT_STOCK

    def test_unknown_item(self):
        validator, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            validator.can_update("99", 1)


class TestRaiseIfRejected:

    @pytest.mark.parametrize(
        "product_id, quantity, error",
        [
            ("missing", 1, EntityNotFoundError),
            ("I", 1, InactiveOrUnsellableError),
            ("S", 1, InactiveOrUnsellableError),
            ("N", 1, InactiveOrUnsellableError),
            ("L", 9, QuantityOutOfRangeError),
            ("D", 1, NoInventoryError),
        ],
    )
    def test_maps_reason_to_exception(self, product_id, quantity, error):
        validator, _ = _setup()
        with pytest.raises(error):
            validator.can_add(product_id, quantity).raise_if_rejected()
