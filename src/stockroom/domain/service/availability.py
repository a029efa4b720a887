"""Domain service: Availability Checker.

Pure reads over the stock ledger. Inactive warehouses never count.
"""

from __future__ import annotations

from stockroom.domain.exceptions import EntityNotFoundError
from stockroom.domain.model.inventory import InventoryRecord
from stockroom.domain.repository.warehouse_repository import WarehouseRepository
from stockroom.domain.service.stock_ledger import StockLedger


class AvailabilityChecker:

    def __init__(self, ledger: StockLedger, warehouse_repo: WarehouseRepository) -> None:
        self._ledger = ledger
        self._warehouse_repo = warehouse_repo

    def is_available(self, product_id: str, warehouse_id: str, quantity: int) -> bool:
        warehouse = self._warehouse_repo.get_by_id(warehouse_id)
        if warehouse is None or not warehouse.is_active:
            return False
        try:
            available = self._ledger.get_available(product_id, warehouse_id)
        except EntityNotFoundError:
            available = 0
        return available >= quantity

    def has_any_stock(self, product_id: str) -> bool:
        """True if any active warehouse holds the product on hand."""
        return any(r.on_hand > 0 for r in self._active_records(product_id))

    def has_inventory(self, product_id: str) -> bool:
        """True if any active warehouse has a record for the product, even an empty one."""
        return bool(self._active_records(product_id))

    def total_on_hand(self, product_id: str) -> int:
        return sum(r.on_hand for r in self._active_records(product_id))

    def best_available(self, product_id: str) -> int:
        """Largest availability at any single active warehouse."""
        return max((r.available for r in self._active_records(product_id)), default=0)

    def _active_records(self, product_id: str) -> list[InventoryRecord]:
        active_ids = {w.id for w in self._warehouse_repo.list_active()}
        return [
            r
            for r in self._ledger.records_for_product(product_id)
            if r.warehouse_id in active_ids
        ]
