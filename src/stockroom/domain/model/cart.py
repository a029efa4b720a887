"""CartItem entity: one product line in a shopper's cart."""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.exceptions import ValidationError


@dataclass
class CartItem:
    """A product placed in a cart.

    Never persisted with a quantity that failed the last validation;
    the cart validator is consulted before every mutation.
    """

    id: str | None
    cart_id: str
    product_id: str
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValidationError("Cart item quantity must be positive")

    def change_quantity(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Cart item quantity must be positive")
        self.quantity = quantity
