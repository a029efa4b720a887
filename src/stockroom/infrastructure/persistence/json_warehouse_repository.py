"""JSON-file-backed implementation of WarehouseRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from stockroom.domain.model.warehouse import Warehouse
from stockroom.domain.repository.warehouse_repository import WarehouseRepository
from stockroom.infrastructure.persistence.json_file import JsonFile, upsert


class JsonWarehouseRepository(WarehouseRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- WarehouseRepository interface ----------------------------------------

    def get_by_id(self, warehouse_id: str) -> Warehouse | None:
        for raw in self._file.load():
            if raw["id"] == warehouse_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Warehouse]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, warehouse: Warehouse) -> None:
        with self._file.transaction() as records:
            upsert(records, self._to_raw(warehouse), lambda raw: raw["id"] == warehouse.id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(warehouse: Warehouse) -> dict:
        return {
            "id": warehouse.id,
            "name": warehouse.name,
            "is_active": warehouse.is_active,
            "created_at": warehouse.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Warehouse:
        return Warehouse(
            id=raw["id"],
            name=raw["name"],
            is_active=raw.get("is_active", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
