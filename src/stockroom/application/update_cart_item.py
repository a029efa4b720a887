"""Application service: Update Cart Item use case."""

from __future__ import annotations

from stockroom.application.dto import CartItemDTO
from stockroom.domain.exceptions import EntityNotFoundError
from stockroom.domain.repository.cart_repository import CartRepository
from stockroom.domain.service.cart_validator import CartValidator


class UpdateCartItemHandler:

    def __init__(self, cart_repo: CartRepository, validator: CartValidator) -> None:
        self._cart_repo = cart_repo
        self._validator = validator

    def handle(self, item_id: str, quantity: int) -> CartItemDTO:
        """Replace a cart item's quantity after re-validating availability."""
        self._validator.can_update(item_id, quantity).raise_if_rejected()

        item = self._cart_repo.get_item(item_id)
        if item is None:
            raise EntityNotFoundError(f"Cart item '{item_id}' not found")
        item.change_quantity(quantity)
        self._cart_repo.save_item(item)
        return CartItemDTO.from_domain(item)
