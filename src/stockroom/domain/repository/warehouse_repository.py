"""Abstract repository for Warehouse aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.warehouse import Warehouse


class WarehouseRepository(ABC):

    @abstractmethod
    def get_by_id(self, warehouse_id: str) -> Warehouse | None:
        """Return a warehouse by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Warehouse]:
        """Return every warehouse, active or not."""

    @abstractmethod
    def save(self, warehouse: Warehouse) -> None:
        """Persist a new or updated warehouse."""

    def list_active(self) -> list[Warehouse]:
        """Active warehouses in creation order."""
        return sorted(
            (w for w in self.list_all() if w.is_active),
            key=lambda w: w.creation_key,
        )
