"""Application service: Add Warehouse use case."""

from __future__ import annotations

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.warehouse import Warehouse
from stockroom.domain.repository.warehouse_repository import WarehouseRepository


class AddWarehouseHandler:

    def __init__(self, warehouse_repo: WarehouseRepository) -> None:
        self._warehouse_repo = warehouse_repo

    def handle(self, warehouse_id: str, name: str, is_active: bool = True) -> Warehouse:
        if not warehouse_id or not warehouse_id.strip():
            raise ValidationError("Warehouse ID is required")
        if not name or not name.strip():
            raise ValidationError("Warehouse name is required")
        if self._warehouse_repo.get_by_id(warehouse_id.strip()) is not None:
            raise ValidationError(f"Warehouse '{warehouse_id}' already exists")

        warehouse = Warehouse(id=warehouse_id.strip(), name=name.strip(), is_active=is_active)
        self._warehouse_repo.save(warehouse)
        return warehouse
