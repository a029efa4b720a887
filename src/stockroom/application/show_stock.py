"""Application service: Show Stock use case (read-only, for operators)."""

from __future__ import annotations

from stockroom.application.dto import StockLineDTO
from stockroom.domain.service.stock_ledger import StockLedger


class ShowStockHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(
        self, product_id: str | None = None, warehouse_id: str | None = None
    ) -> list[StockLineDTO]:
        if product_id is not None:
            records = self._ledger.records_for_product(product_id)
        else:
            records = self._ledger.list_records()
        if warehouse_id is not None:
            records = [r for r in records if r.warehouse_id == warehouse_id]
        records.sort(key=lambda r: r.key)
        return [StockLineDTO.from_domain(r) for r in records]
