"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from pathlib import Path

from stockroom.domain.model.cart import CartItem
from stockroom.domain.repository.cart_repository import CartRepository
from stockroom.infrastructure.persistence.json_file import JsonFile, upsert


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_item(self, item_id: str) -> CartItem | None:
        for raw in self._file.load():
            if raw["id"] == item_id:
                return self._to_domain(raw)
        return None

    def list_items(self, cart_id: str) -> list[CartItem]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["cart_id"] == cart_id
        ]

    def save_item(self, item: CartItem) -> None:
        with self._file.transaction() as records:
            if item.id is None:
                item.id = self._next_id(records)
            upsert(records, self._to_raw(item), lambda raw: raw["id"] == item.id)

    def delete_item(self, item_id: str) -> None:
        with self._file.transaction() as records:
            records[:] = [raw for raw in records if raw["id"] != item_id]

    def clear_cart(self, cart_id: str) -> int:
        with self._file.transaction() as records:
            kept = [raw for raw in records if raw["cart_id"] != cart_id]
            removed = len(records) - len(kept)
            records[:] = kept
        return removed

    # --- Helpers --------------------------------------------------------------

    @staticmethod
    def _next_id(records: list[dict]) -> str:
        if not records:
            return "1"
        return str(max(int(raw["id"]) for raw in records) + 1)

    @staticmethod
    def _to_raw(item: CartItem) -> dict:
        return {
            "id": item.id,
            "cart_id": item.cart_id,
            "product_id": item.product_id,
            "quantity": item.quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartItem:
        return CartItem(
            id=raw["id"],
            cart_id=raw["cart_id"],
            product_id=raw["product_id"],
            quantity=raw["quantity"],
        )
