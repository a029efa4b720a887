"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from stockroom.application.dto import CartItemDTO
from stockroom.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, cart_id: str) -> list[CartItemDTO]:
        return [CartItemDTO.from_domain(item) for item in self._cart_repo.list_items(cart_id)]
