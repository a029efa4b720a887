"""Ephemeral warehouse-selection values.

Nothing here is persisted; every checkout attempt recomputes them from
the current stock snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from stockroom.domain.model.warehouse import Warehouse

COVERAGE_WEIGHT = 0.7
STOCK_BONUS = 30


@dataclass(frozen=True)
class WarehouseScore:
    """How well one warehouse covers a cart."""

    warehouse: Warehouse
    lines_covered: int
    total_lines: int
    total_stock: int

    @property
    def coverage_percentage(self) -> float:
        return (self.lines_covered / self.total_lines) * 100

    @property
    def disqualified(self) -> bool:
        return self.lines_covered < self.total_lines

    @property
    def score(self) -> float:
        if self.disqualified:
            return 0.0
        bonus = STOCK_BONUS if self.total_stock > 0 else 0
        return self.coverage_percentage * COVERAGE_WEIGHT + bonus

    @property
    def rank_key(self) -> tuple:
        """Sort key: best first, earliest-created warehouse breaks ties."""
        return (-self.score, -self.total_stock, *self.warehouse.creation_key)

    @property
    def coverage_key(self) -> tuple:
        """Sort key on raw coverage, used for the partial-coverage hint."""
        return (-self.lines_covered, -self.total_stock, *self.warehouse.creation_key)


@dataclass(frozen=True)
class WarehouseSelection:
    """The chosen warehouse plus the full ranking it was chosen from."""

    chosen: WarehouseScore
    ranking: list[WarehouseScore] = field(default_factory=list)

    @property
    def warehouse_id(self) -> str:
        return self.chosen.warehouse.id


class LineStatus(Enum):
    IN_STOCK = "in_stock"
    PARTIAL = "partial"
    OUT_OF_STOCK = "out_of_stock"


@dataclass(frozen=True)
class LineAvailability:
    product_id: str
    required: int
    available: int

    @property
    def missing(self) -> int:
        return max(self.required - self.available, 0)

    @property
    def status(self) -> LineStatus:
        if self.available <= 0:
            return LineStatus.OUT_OF_STOCK
        if self.missing > 0:
            return LineStatus.PARTIAL
        return LineStatus.IN_STOCK


@dataclass(frozen=True)
class PickupOption:
    """Per-warehouse availability breakdown for showing pickup choices."""

    warehouse: Warehouse
    lines: list[LineAvailability]

    @property
    def lines_in_stock(self) -> int:
        return sum(1 for line in self.lines if line.status == LineStatus.IN_STOCK)

    @property
    def immediate_pickup(self) -> bool:
        return self.warehouse.is_active and self.lines_in_stock == len(self.lines)
