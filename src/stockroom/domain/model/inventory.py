"""InventoryRecord aggregate: stock and reservations per (product, warehouse).

Each product stocked at a warehouse has one InventoryRecord that knows the
quantity physically on hand and how much of it is held by reservations.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.exceptions import InsufficientStockError, ValidationError


@dataclass
class InventoryRecord:
    """Aggregate root for stock tracking at one warehouse.

    Invariants:
    - ``on_hand`` is never negative
    - ``reserved`` is never negative and never exceeds ``on_hand``
    - ``available`` is therefore always >= 0
    """

    product_id: str
    warehouse_id: str
    on_hand: int
    reserved: int = 0

    def __post_init__(self) -> None:
        if self.on_hand < 0:
            raise ValidationError("On-hand quantity cannot be negative")
        if self.reserved < 0:
            raise ValidationError("Reserved quantity cannot be negative")
        if self.reserved > self.on_hand:
            raise ValidationError(
                f"Reserved quantity {self.reserved} exceeds on-hand {self.on_hand}"
            )

    @property
    def key(self) -> tuple[str, str]:
        return (self.product_id, self.warehouse_id)

    @property
    def available(self) -> int:
        return self.on_hand - self.reserved

    def reserve(self, quantity: int) -> None:
        """Hold stock for a pending order.

        Raises InsufficientStockError if less than *quantity* is available.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if quantity > self.available:
            raise InsufficientStockError(
                self.product_id, quantity, self.available, self.warehouse_id
            )
        self.reserved += quantity

    def release(self, quantity: int) -> None:
        """Return previously reserved stock to available."""
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        if quantity > self.reserved:
            raise ValidationError(
                f"Cannot release {quantity} of product '{self.product_id}' "
                f"at warehouse '{self.warehouse_id}' "
                f"- only {self.reserved} currently reserved"
            )
        self.reserved -= quantity

    def set_on_hand(self, quantity: int) -> None:
        """Replace the on-hand count (stock take / manual correction).

        The new count may not drop below what is already reserved.
        """
        if quantity < 0:
            raise ValidationError("On-hand quantity cannot be negative")
        if quantity < self.reserved:
            raise ValidationError(
                f"Cannot set on-hand to {quantity} for product '{self.product_id}' "
                f"- {self.reserved} units are reserved"
            )
        self.on_hand = quantity

    def adjust_on_hand(self, delta: int) -> None:
        """Apply a relative change (restock when positive, shrinkage when negative)."""
        self.set_on_hand(self.on_hand + delta)
