"""JSON-file-backed implementation of InventoryRepository.

``lock()`` is a per-(product, warehouse) lock held across processes,
backed by one lock file per pair under ``locks/`` next to the data
file. The file itself is rewritten under the JsonFile lock so saves to
different pairs do not clobber each other.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path

from stockroom.domain.model.inventory import InventoryRecord
from stockroom.domain.repository.inventory_repository import InventoryRepository
from stockroom.infrastructure.persistence.json_file import JsonFile, KeyedFileLock, upsert


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)
        self._locks = KeyedFileLock(file_path.parent / "locks", "inventory")

    # --- InventoryRepository interface ----------------------------------------

    def get(self, product_id: str, warehouse_id: str) -> InventoryRecord | None:
        for raw in self._file.load():
            if raw["product_id"] == product_id and raw["warehouse_id"] == warehouse_id:
                return self._to_domain(raw)
        return None

    def list_for_warehouse(
        self, product_ids: list[str], warehouse_id: str
    ) -> list[InventoryRecord]:
        wanted = set(product_ids)
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["warehouse_id"] == warehouse_id and raw["product_id"] in wanted
        ]

    def list_for_product(self, product_id: str) -> list[InventoryRecord]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["product_id"] == product_id
        ]

    def list_all(self) -> list[InventoryRecord]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, record: InventoryRecord) -> None:
        with self._file.transaction() as records:
            upsert(
                records,
                self._to_raw(record),
                lambda raw: (raw["product_id"], raw["warehouse_id"]) == record.key,
            )

    def lock(self, product_id: str, warehouse_id: str) -> AbstractContextManager:
        return self._locks.hold((product_id, warehouse_id))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: InventoryRecord) -> dict:
        return {
            "product_id": record.product_id,
            "warehouse_id": record.warehouse_id,
            "on_hand": record.on_hand,
            "reserved": record.reserved,
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryRecord:
        return InventoryRecord(
            product_id=raw["product_id"],
            warehouse_id=raw["warehouse_id"],
            on_hand=raw["on_hand"],
            reserved=raw.get("reserved", 0),
        )
