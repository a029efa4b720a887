"""Application service: Adjust Stock use case.

Restocks and manual corrections. Either an absolute ``quantity`` (a
stock take) or a relative ``delta`` (goods in / shrinkage) is given.
"""

from __future__ import annotations

from stockroom.application.dto import StockLineDTO
from stockroom.domain.exceptions import EntityNotFoundError, ValidationError
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.repository.warehouse_repository import WarehouseRepository
from stockroom.domain.service.stock_ledger import StockLedger


class AdjustStockHandler:

    def __init__(
        self,
        ledger: StockLedger,
        product_repo: ProductRepository,
        warehouse_repo: WarehouseRepository,
    ) -> None:
        self._ledger = ledger
        self._product_repo = product_repo
        self._warehouse_repo = warehouse_repo

    def handle(
        self,
        product_id: str,
        warehouse_id: str,
        quantity: int | None = None,
        delta: int | None = None,
    ) -> StockLineDTO:
        if (quantity is None) == (delta is None):
            raise ValidationError("Specify exactly one of quantity or delta")
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        if self._warehouse_repo.get_by_id(warehouse_id) is None:
            raise EntityNotFoundError(f"Warehouse '{warehouse_id}' not found")

        if delta is None:
            record = self._ledger.set_on_hand(product_id, warehouse_id, quantity or 0)
        else:
            record = self._ledger.adjust_on_hand(product_id, warehouse_id, delta)
        return StockLineDTO.from_domain(record)
