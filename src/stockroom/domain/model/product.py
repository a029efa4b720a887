"""Product aggregate.

Products live independently of inventory. Only the flags that decide
whether a product may be sold and reserved matter here.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.exceptions import ValidationError


@dataclass
class Product:
    """A product in the catalog.

    ``min_quantity`` / ``max_quantity`` are optional per-order limits;
    ``None`` means unbounded.
    """

    id: str
    name: str
    is_active: bool = True
    allows_sale: bool = True
    business_id: str | None = None
    min_quantity: int | None = None
    max_quantity: int | None = None

    def __post_init__(self) -> None:
        if self.min_quantity is not None and self.min_quantity < 1:
            raise ValidationError("Minimum quantity must be at least 1")
        if (
            self.min_quantity is not None
            and self.max_quantity is not None
            and self.max_quantity < self.min_quantity
        ):
            raise ValidationError(
                f"Maximum quantity {self.max_quantity} is below "
                f"minimum {self.min_quantity}"
            )

    @property
    def is_reservable(self) -> bool:
        return self.is_active and self.allows_sale and bool(self.business_id)

    def accepts_quantity(self, quantity: int) -> bool:
        if self.min_quantity is not None and quantity < self.min_quantity:
            return False
        if self.max_quantity is not None and quantity > self.max_quantity:
            return False
        return True

    def deactivate(self) -> None:
        self.is_active = False
