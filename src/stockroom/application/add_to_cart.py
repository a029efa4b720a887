"""Application service: Add To Cart use case.

The cart validator runs before anything is written; a rejected check
raises the matching typed exception and the cart is left untouched.
Adding a product already in the cart grows the existing line.
"""

from __future__ import annotations

from stockroom.application.dto import CartItemDTO
from stockroom.domain.model.cart import CartItem
from stockroom.domain.repository.cart_repository import CartRepository
from stockroom.domain.service.cart_validator import CartValidator


class AddToCartHandler:

    def __init__(self, cart_repo: CartRepository, validator: CartValidator) -> None:
        self._cart_repo = cart_repo
        self._validator = validator

    def handle(self, cart_id: str, product_id: str, quantity: int) -> CartItemDTO:
        self._validator.can_add(product_id, quantity, cart_id=cart_id).raise_if_rejected()

        item = self._cart_repo.find_item(cart_id, product_id)
        if item is None:
            item = CartItem(id=None, cart_id=cart_id, product_id=product_id, quantity=quantity)
        else:
            item.change_quantity(item.quantity + quantity)
        self._cart_repo.save_item(item)
        return CartItemDTO.from_domain(item)
