"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot reserve or order zero or
    negative items.
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True is not a quantity
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CartLine:
    """One requested (product, quantity) pair of a cart or order."""

    product_id: str
    quantity: Quantity

    @staticmethod
    def of(product_id: str, quantity: int) -> CartLine:
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required")
        return CartLine(product_id=product_id.strip(), quantity=Quantity(quantity))


def merge_lines(lines: list[CartLine]) -> list[CartLine]:
    """Combine lines for the same product, keeping first-seen order."""
    totals: dict[str, int] = {}
    for line in lines:
        totals[line.product_id] = totals.get(line.product_id, 0) + line.quantity.value
    return [CartLine(pid, Quantity(qty)) for pid, qty in totals.items()]
