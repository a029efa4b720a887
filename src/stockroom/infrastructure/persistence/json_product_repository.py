"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from stockroom.domain.model.product import Product
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.infrastructure.persistence.json_file import JsonFile, upsert


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        with self._file.transaction() as records:
            upsert(records, self._to_raw(product), lambda raw: raw["id"] == product.id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "is_active": product.is_active,
            "allows_sale": product.allows_sale,
            "business_id": product.business_id,
            "min_quantity": product.min_quantity,
            "max_quantity": product.max_quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            is_active=raw.get("is_active", True),
            allows_sale=raw.get("allows_sale", True),
            business_id=raw.get("business_id"),
            min_quantity=raw.get("min_quantity"),
            max_quantity=raw.get("max_quantity"),
        )
