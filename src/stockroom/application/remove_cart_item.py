"""Application service: Remove Cart Item use case."""

from __future__ import annotations

from stockroom.domain.exceptions import EntityNotFoundError
from stockroom.domain.repository.cart_repository import CartRepository


class RemoveCartItemHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, item_id: str) -> None:
        if self._cart_repo.get_item(item_id) is None:
            raise EntityNotFoundError(f"Cart item '{item_id}' not found")
        self._cart_repo.delete_item(item_id)
