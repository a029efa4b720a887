"""Abstract repository for InventoryRecord aggregate.

Implementations must provide ``lock()``: a mutual-exclusion scope per
(product, warehouse) pair, the equivalent of a row lock. It must exclude
every writer of the same store, other processes included.
Every read-check-write of a record happens while that lock is held.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from stockroom.domain.model.inventory import InventoryRecord


class InventoryRepository(ABC):

    @abstractmethod
    def get(self, product_id: str, warehouse_id: str) -> InventoryRecord | None:
        """Return the record for a (product, warehouse) pair, or None."""

    @abstractmethod
    def list_for_warehouse(
        self, product_ids: list[str], warehouse_id: str
    ) -> list[InventoryRecord]:
        """Return the records at one warehouse for the given products, in one read."""

    @abstractmethod
    def list_for_product(self, product_id: str) -> list[InventoryRecord]:
        """Return the records for one product across all warehouses."""

    @abstractmethod
    def list_all(self) -> list[InventoryRecord]:
        """Return every inventory record."""

    @abstractmethod
    def save(self, record: InventoryRecord) -> None:
        """Persist a new or updated record."""

    @abstractmethod
    def lock(self, product_id: str, warehouse_id: str) -> AbstractContextManager:
        """Hold the exclusive lock for one (product, warehouse) pair."""
