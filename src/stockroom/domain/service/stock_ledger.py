"""Domain service: Stock Ledger.

Single entry point for reading and mutating per-(product, warehouse)
stock. Reads always go to the repository, so a caller that just wrote
sees its own write. ``reserved`` is only changed through
``increment_reserved`` / ``decrement_reserved``, which the reservation
manager calls while holding the pair lock from ``lock_many``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import AbstractContextManager, ExitStack, contextmanager

import structlog

from stockroom.domain.exceptions import EntityNotFoundError
from stockroom.domain.model.inventory import InventoryRecord
from stockroom.domain.repository.inventory_repository import InventoryRepository

logger = structlog.get_logger(__name__)


class StockLedger:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    # --- Reads ----------------------------------------------------------------

    def get_record(self, product_id: str, warehouse_id: str) -> InventoryRecord:
        record = self._inventory_repo.get(product_id, warehouse_id)
        if record is None:
            raise EntityNotFoundError(
                f"No inventory record for product '{product_id}' "
                f"at warehouse '{warehouse_id}'"
            )
        return record

    def get_available(self, product_id: str, warehouse_id: str) -> int:
        """Available quantity at one warehouse.

        Raises EntityNotFoundError when the pair has no record; callers
        that only need a number should treat that as zero.
        """
        return self.get_record(product_id, warehouse_id).available

    def get_available_for_warehouse(
        self, product_ids: Iterable[str], warehouse_id: str
    ) -> dict[str, int]:
        """Availability of several products at one warehouse, in one read.

        Products without a record map to 0.
        """
        wanted = list(dict.fromkeys(product_ids))
        result = {pid: 0 for pid in wanted}
        for record in self._inventory_repo.list_for_warehouse(wanted, warehouse_id):
            result[record.product_id] = record.available
        return result

    def records_for_product(self, product_id: str) -> list[InventoryRecord]:
        return self._inventory_repo.list_for_product(product_id)

    def list_records(self) -> list[InventoryRecord]:
        return self._inventory_repo.list_all()

    # --- Locking --------------------------------------------------------------

    def lock(self, product_id: str, warehouse_id: str) -> AbstractContextManager:
        return self._inventory_repo.lock(product_id, warehouse_id)

    @contextmanager
    def lock_many(self, pairs: Iterable[tuple[str, str]]) -> Iterator[None]:
        """Hold the locks of several (product, warehouse) pairs.

        Locks are taken in sorted order so overlapping multi-line
        reservations cannot deadlock.
        """
        with ExitStack() as stack:
            for product_id, warehouse_id in sorted(set(pairs)):
                stack.enter_context(self._inventory_repo.lock(product_id, warehouse_id))
            yield

    # --- Reservation mutations (caller holds the pair lock) -------------------

    def increment_reserved(self, product_id: str, warehouse_id: str, quantity: int) -> None:
        record = self.get_record(product_id, warehouse_id)
        record.reserve(quantity)
        self._inventory_repo.save(record)

    def decrement_reserved(self, product_id: str, warehouse_id: str, quantity: int) -> None:
        record = self.get_record(product_id, warehouse_id)
        record.release(quantity)
        self._inventory_repo.save(record)

    # --- Stock adjustments ----------------------------------------------------

    def set_on_hand(self, product_id: str, warehouse_id: str, quantity: int) -> InventoryRecord:
        """Set the on-hand count, creating the record if it is new."""
        with self._inventory_repo.lock(product_id, warehouse_id):
            record = self._inventory_repo.get(product_id, warehouse_id)
            if record is None:
                record = InventoryRecord(
                    product_id=product_id, warehouse_id=warehouse_id, on_hand=quantity
                )
            else:
                record.set_on_hand(quantity)
            self._inventory_repo.save(record)
        logger.info(
            "Stock set",
            product_id=product_id,
            warehouse_id=warehouse_id,
            on_hand=record.on_hand,
            reserved=record.reserved,
        )
        return record

    def adjust_on_hand(self, product_id: str, warehouse_id: str, delta: int) -> InventoryRecord:
        """Apply a relative stock change to an existing record."""
        with self._inventory_repo.lock(product_id, warehouse_id):
            record = self.get_record(product_id, warehouse_id)
            record.adjust_on_hand(delta)
            self._inventory_repo.save(record)
        logger.info(
            "Stock adjusted",
            product_id=product_id,
            warehouse_id=warehouse_id,
            delta=delta,
            on_hand=record.on_hand,
        )
        return record
