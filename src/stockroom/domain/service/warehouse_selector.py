"""Domain service: Warehouse Selector.

Picks the one warehouse that can ship a whole cart. Splitting an order
across warehouses is not supported: a warehouse that misses even one
line is disqualified, however much it holds of the others.

Scoring of a qualified warehouse::

    coverage_percentage * 0.7 + (30 if total matching stock > 0 else 0)

Ties go to the larger total stock, then to the earliest-created
warehouse, so the same snapshot always yields the same choice.
Selection is stock-driven only; nothing here knows about geography.
"""

from __future__ import annotations

import structlog

from stockroom.domain.exceptions import NoQualifyingWarehouseError, ValidationError
from stockroom.domain.model.selection import (
    LineAvailability,
    PickupOption,
    WarehouseScore,
    WarehouseSelection,
)
from stockroom.domain.model.value_objects import CartLine, merge_lines
from stockroom.domain.model.warehouse import Warehouse
from stockroom.domain.repository.warehouse_repository import WarehouseRepository
from stockroom.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class WarehouseSelector:

    def __init__(self, ledger: StockLedger, warehouse_repo: WarehouseRepository) -> None:
        self._ledger = ledger
        self._warehouse_repo = warehouse_repo

    def select(self, lines: list[CartLine]) -> WarehouseSelection:
        """Choose the best qualified warehouse for *lines*.

        Raises NoQualifyingWarehouseError, carrying the best partial
        coverage as a hint, when no single warehouse covers every line.
        """
        scores = self.score_warehouses(lines)
        qualified = [s for s in scores if not s.disqualified]

        if not qualified:
            best_partial = min(scores, key=lambda s: s.coverage_key, default=None)
            logger.warning(
                "No qualifying warehouse",
                lines=len(merge_lines(lines)),
                warehouses=len(scores),
                best_partial=best_partial.warehouse.id if best_partial else None,
            )
            raise NoQualifyingWarehouseError(best_partial)

        chosen = qualified[0]
        logger.info(
            "Warehouse selected",
            warehouse_id=chosen.warehouse.id,
            score=round(chosen.score, 2),
            coverage=chosen.coverage_percentage,
            total_stock=chosen.total_stock,
        )
        return WarehouseSelection(chosen=chosen, ranking=scores)

    def score_warehouses(self, lines: list[CartLine]) -> list[WarehouseScore]:
        """Score every active warehouse against *lines*, best first."""
        merged = self._require_lines(lines)
        product_ids = [line.product_id for line in merged]

        scores: list[WarehouseScore] = []
        for warehouse in self._warehouse_repo.list_active():
            available = self._ledger.get_available_for_warehouse(product_ids, warehouse.id)
            covered = sum(
                1 for line in merged if available[line.product_id] >= line.quantity.value
            )
            scores.append(
                WarehouseScore(
                    warehouse=warehouse,
                    lines_covered=covered,
                    total_lines=len(merged),
                    total_stock=sum(available.values()),
                )
            )
        scores.sort(key=lambda s: s.rank_key)
        return scores

    def pickup_options(self, lines: list[CartLine]) -> list[PickupOption]:
        """Per-warehouse breakdown of what is in stock, for showing pickup choices.

        Inactive warehouses are listed too, with nothing available.
        """
        merged = self._require_lines(lines)
        product_ids = [line.product_id for line in merged]

        options: list[PickupOption] = []
        for warehouse in sorted(self._warehouse_repo.list_all(), key=_by_name):
            if warehouse.is_active:
                available = self._ledger.get_available_for_warehouse(
                    product_ids, warehouse.id
                )
            else:
                available = {pid: 0 for pid in product_ids}
            options.append(
                PickupOption(
                    warehouse=warehouse,
                    lines=[
                        LineAvailability(
                            product_id=line.product_id,
                            required=line.quantity.value,
                            available=available[line.product_id],
                        )
                        for line in merged
                    ],
                )
            )
        return options

    @staticmethod
    def _require_lines(lines: list[CartLine]) -> list[CartLine]:
        if not lines:
            raise ValidationError("Cart must contain at least one line")
        return merge_lines(lines)


def _by_name(warehouse: Warehouse) -> tuple[str, str]:
    return (warehouse.name.lower(), warehouse.id)
