"""Integration tests for the Checkout use case."""

import pytest

from stockroom.application.checkout import CheckoutHandler
from stockroom.domain.exceptions import (
    InsufficientStockError,
    NoQualifyingWarehouseError,
    ValidationError,
)
from stockroom.domain.model.cart import CartItem
from stockroom.domain.service.reservation_manager import ReservationManager
from tests.application.world import World


class RacingManager(ReservationManager):
    """Another shopper empties the chosen warehouse just before we reserve."""

    races_left = 1

    def reserve_for_order(self, order_id, warehouse_id, lines):
        if self.races_left > 0:
            self.races_left -= 1
            for line in lines:
                self._ledger.set_on_hand(line.product_id, warehouse_id, 0)
        return super().reserve_for_order(order_id, warehouse_id, lines)


def _fill_cart(world: World, *specs: tuple[str, int], cart_id: str = "cart-1") -> None:
    for product_id, quantity in specs:
        world.carts.save_item(
            CartItem(id=None, cart_id=cart_id, product_id=product_id, quantity=quantity)
        )


class TestCheckoutHappyPath:

    def test_reserves_at_best_warehouse(self):
        world = World()
        _fill_cart(world, ("A", 2), ("B", 1))
        dto = CheckoutHandler(world.carts, world.selector, world.manager).handle("O1", "cart-1")

        assert dto.warehouse_id == "W1"
        assert dto.warehouse_name == "North"
        assert dto.attempts == 1
        assert [(r.product_id, r.quantity, r.status) for r in dto.reservations] == [
            ("A", 2, "PENDING"),
            ("B", 1, "PENDING"),
        ]
        assert world.available("A", "W1") == 3
        assert world.available("B", "W1") == 2
        assert world.available("A", "W2") == 4

    def test_picks_only_warehouse_that_covers_everything(self):
        world = World()
        _fill_cart(world, ("B", 3))
        dto = CheckoutHandler(world.carts, world.selector, world.manager).handle("O1", "cart-1")
        assert dto.warehouse_id == "W1"

    def test_cart_is_kept_until_payment(self):
        world = World()
        _fill_cart(world, ("A", 1))
        CheckoutHandler(world.carts, world.selector, world.manager).handle("O1", "cart-1")
        assert len(world.carts.list_items("cart-1")) == 1


class TestCheckoutFailures:

    def test_empty_cart(self):
        world = World()
        with pytest.raises(ValidationError, match="empty"):
            CheckoutHandler(world.carts, world.selector, world.manager).handle("O1", "cart-1")

    def test_no_qualifying_warehouse_is_not_retried(self):
        world = World()
        _fill_cart(world, ("A", 2), ("B", 5))

        with pytest.raises(NoQualifyingWarehouseError) as exc_info:
            CheckoutHandler(world.carts, world.selector, world.manager).handle("O1", "cart-1")

        assert exc_info.value.best_partial.warehouse.id == "W1"
        assert world.reservations.list_all() == []

    def test_max_attempts_must_be_positive(self):
        world = World()
        with pytest.raises(ValidationError):
            CheckoutHandler(world.carts, world.selector, world.manager, max_attempts=0)


class TestCheckoutRetry:

    def test_lost_race_retries_at_next_warehouse(self):
        world = World(manager_cls=RacingManager)
        _fill_cart(world, ("A", 2))

        dto = CheckoutHandler(world.carts, world.selector, world.manager).handle("O1", "cart-1")

        assert dto.attempts == 2
        assert dto.warehouse_id == "W2"
        assert world.available("A", "W1") == 0
        assert world.available("A", "W2") == 2

    def test_gives_up_after_max_attempts(self):
        world = World(manager_cls=RacingManager)
        world.manager.races_left = 5
        _fill_cart(world, ("A", 2))
        handler = CheckoutHandler(world.carts, world.selector, world.manager, max_attempts=2)

        with pytest.raises(InsufficientStockError):
            handler.handle("O1", "cart-1")
        assert world.reservations.list_all() == []
        assert world.manager.races_left == 3

    def test_single_attempt_raises_the_lost_race(self):
        world = World(manager_cls=RacingManager)
        _fill_cart(world, ("A", 2))
        handler = CheckoutHandler(world.carts, world.selector, world.manager, max_attempts=1)

        with pytest.raises(InsufficientStockError) as excinfo:
            handler.handle("O1", "cart-1")
        assert excinfo.value.product_id == "A"
        assert world.available("A", "W2") == 4
