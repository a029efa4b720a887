"""Concurrent reservations against the same stock must never oversell."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

from stockroom.domain.exceptions import InactiveOrUnsellableError, InsufficientStockError
from stockroom.domain.model.inventory import InventoryRecord
from stockroom.domain.model.product import Product
from stockroom.domain.model.reservation import ReleaseReason
from stockroom.domain.model.value_objects import CartLine
from stockroom.domain.model.warehouse import Warehouse
from stockroom.domain.service.reservation_manager import ReservationManager
from stockroom.domain.service.stock_ledger import StockLedger
from tests.fakes import (
    FakeInventoryRepository,
    FakeProductRepository,
    FakeReservationRepository,
    FakeWarehouseRepository,
)


def _manager(on_hand: dict[str, int]) -> tuple[ReservationManager, StockLedger]:
    inventory = FakeInventoryRepository(
        [InventoryRecord(pid, "W1", qty, 0) for pid, qty in on_hand.items()]
    )
    ledger = StockLedger(inventory)
    manager = ReservationManager(
        ledger=ledger,
        reservation_repo=FakeReservationRepository(),
        product_repo=FakeProductRepository(
            [Product(id=pid, name=pid, business_id="B1") for pid in on_hand]
        ),
        warehouse_repo=FakeWarehouseRepository([Warehouse(id="W1", name="North")]),
        hold_window=timedelta(minutes=15),
    )
    return manager, ledger


def _race(attempt, workers: int) -> list[bool]:
    """Run *attempt(i)* from *workers* threads released at the same moment."""
    barrier = threading.Barrier(workers)

    def run(i: int) -> bool:
        barrier.wait()
        return attempt(i)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(run, range(workers)))


class TestConcurrentReservations:

    def test_last_unit_goes_to_exactly_one_order(self):
        manager, ledger = _manager({"A": 1})
        failures: list[InsufficientStockError] = []

        def attempt(i: int) -> bool:
            try:
                manager.reserve_for_order(f"O{i}", "W1", [CartLine.of("A", 1)])
                return True
            except InsufficientStockError as exc:
                failures.append(exc)
                return False

        results = _race(attempt, workers=10)

        assert results.count(True) == 1
        assert len(failures) == 9
        assert ledger.get_available("A", "W1") == 0

    def test_exactly_one_of_many_wins_the_last_units(self):
        manager, ledger = _manager({"A": 5})

        def attempt(i: int) -> bool:
            try:
                manager.reserve_for_order(f"O{i}", "W1", [CartLine.of("A", 5)])
                return True
            except InsufficientStockError:
                return False

        results = _race(attempt, workers=16)

        assert results.count(True) == 1
        record = ledger.get_record("A", "W1")
        assert record.reserved == 5
        assert record.available == 0

    def test_reserved_never_exceeds_on_hand(self):
        manager, ledger = _manager({"A": 20, "B": 20})

        def attempt(i: int) -> bool:
            # alternate line order so lock ordering is exercised
            lines = [CartLine.of("A", 3), CartLine.of("B", 2)]
            if i % 2:
                lines.reverse()
            try:
                manager.reserve_for_order(f"O{i}", "W1", lines)
                return True
            except InsufficientStockError:
                return False

        results = _race(attempt, workers=12)

        winners = results.count(True)
        assert winners == 6
        a = ledger.get_record("A", "W1")
        b = ledger.get_record("B", "W1")
        assert a.reserved == winners * 3 <= a.on_hand
        assert b.reserved == winners * 2 <= b.on_hand

    def test_release_racing_commit_has_one_outcome(self):
        manager, ledger = _manager({"A": 5})
        manager.reserve_for_order("O1", "W1", [CartLine.of("A", 2)])

        def attempt(i: int) -> bool:
            if i % 2:
                manager.release("O1", ReleaseReason.CANCELLED)
            else:
                try:
                    manager.commit("O1")
                except Exception:
                    return False
            return True

        _race(attempt, workers=8)

        # whichever order the calls ran in, the stock is returned exactly once
        assert ledger.get_record("A", "W1").reserved == 0
        [reservation] = manager.reservations_for_order("O1")
        assert reservation.release_reason == ReleaseReason.CANCELLED

    def test_product_switched_off_while_waiting_for_the_lock_is_rejected(self):
        products = FakeProductRepository([Product(id="A", name="A", business_id="B1")])
        ledger = StockLedger(FakeInventoryRepository([InventoryRecord("A", "W1", 5, 0)]))
        manager = ReservationManager(
            ledger=ledger,
            reservation_repo=FakeReservationRepository(),
            product_repo=products,
            warehouse_repo=FakeWarehouseRepository([Warehouse(id="W1", name="North")]),
        )
        errors: list[InactiveOrUnsellableError] = []

        def reserve() -> None:
            try:
                manager.reserve_for_order("O1", "W1", [CartLine.of("A", 1)])
            except InactiveOrUnsellableError as exc:
                errors.append(exc)

        with ledger.lock("A", "W1"):
            worker = threading.Thread(target=reserve)
            worker.start()
            time.sleep(0.1)
            product = products.get_by_id("A")
            product.deactivate()
            products.save(product)

        worker.join(5)
        assert len(errors) == 1
        assert ledger.get_record("A", "W1").reserved == 0
        assert manager.reservations_for_order("O1") == []
