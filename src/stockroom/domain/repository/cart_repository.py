"""Abstract repository for CartItem entities."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.cart import CartItem


class CartRepository(ABC):

    @abstractmethod
    def get_item(self, item_id: str) -> CartItem | None:
        """Return a cart item by its ID, or None if not found."""

    @abstractmethod
    def list_items(self, cart_id: str) -> list[CartItem]:
        """Return every item of a cart."""

    @abstractmethod
    def save_item(self, item: CartItem) -> None:
        """Persist a new (id assigned here) or updated cart item."""

    @abstractmethod
    def delete_item(self, item_id: str) -> None:
        """Remove a cart item. Unknown IDs are ignored."""

    @abstractmethod
    def clear_cart(self, cart_id: str) -> int:
        """Remove every item of a cart; return how many were removed."""

    def find_item(self, cart_id: str, product_id: str) -> CartItem | None:
        for item in self.list_items(cart_id):
            if item.product_id == product_id:
                return item
        return None
