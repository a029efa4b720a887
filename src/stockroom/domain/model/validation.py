"""Outcome of a cart-mutation check."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stockroom.domain.exceptions import (
    EntityNotFoundError,
    InactiveOrUnsellableError,
    InsufficientStockError,
    NoInventoryError,
    QuantityOutOfRangeError,
    ZeroStockError,
)


class RejectionReason(Enum):
    """Why a cart mutation was refused, in the order the checks run."""

    NOT_FOUND = "not_found"
    PRODUCT_INACTIVE = "product_inactive"
    SALE_NOT_ALLOWED = "sale_not_allowed"
    NO_BUSINESS = "no_business"
    QUANTITY_OUT_OF_RANGE = "quantity_out_of_range"
    NO_INVENTORY = "no_inventory"
    ZERO_STOCK = "zero_stock"
    INSUFFICIENT_STOCK = "insufficient_stock"


_ERRORS = {
    RejectionReason.NOT_FOUND: EntityNotFoundError,
    RejectionReason.PRODUCT_INACTIVE: InactiveOrUnsellableError,
    RejectionReason.SALE_NOT_ALLOWED: InactiveOrUnsellableError,
    RejectionReason.NO_BUSINESS: InactiveOrUnsellableError,
    RejectionReason.QUANTITY_OUT_OF_RANGE: QuantityOutOfRangeError,
    RejectionReason.NO_INVENTORY: NoInventoryError,
    RejectionReason.ZERO_STOCK: ZeroStockError,
}


@dataclass(frozen=True)
class CartValidation:
    """Either ``ok`` or a rejection carrying the reason and a readable message.

    ``requested`` / ``available`` are only filled in for
    INSUFFICIENT_STOCK, where ``available`` is the best single active
    warehouse's availability.
    """

    reason: RejectionReason | None = None
    message: str = ""
    product_id: str | None = None
    requested: int = 0
    available: int = 0

    @property
    def ok(self) -> bool:
        return self.reason is None

    @staticmethod
    def accepted() -> CartValidation:
        return CartValidation()

    @staticmethod
    def rejected(
        reason: RejectionReason,
        message: str,
        product_id: str | None = None,
        requested: int = 0,
        available: int = 0,
    ) -> CartValidation:
        return CartValidation(
            reason=reason,
            message=message,
            product_id=product_id,
            requested=requested,
            available=available,
        )

    def raise_if_rejected(self) -> None:
        """Turn a rejection into the matching typed domain exception."""
        if self.ok:
            return
        if self.reason == RejectionReason.INSUFFICIENT_STOCK:
            raise InsufficientStockError(
                self.product_id or "", self.requested, self.available
            )
        raise _ERRORS[self.reason](self.message)
