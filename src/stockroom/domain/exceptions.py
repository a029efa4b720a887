"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer (and any other orchestrator) can catch them uniformly and
display user-friendly messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stockroom.domain.model.selection import WarehouseScore


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested product, warehouse, cart item, record or order does not exist."""


class InvalidTransitionError(ValidationError):
    """A reservation was asked to move to a state its lifecycle forbids."""


class InactiveOrUnsellableError(ValidationError):
    """The product is inactive, disallows sale, or has no owning business."""


class NoInventoryError(ValidationError):
    """The product has no inventory record at any active warehouse."""


class ZeroStockError(ValidationError):
    """The product has inventory records but nothing on hand."""


class QuantityOutOfRangeError(ValidationError):
    """The requested quantity is outside the product's order limits."""


class InsufficientStockError(ValidationError):
    """Not enough available stock to satisfy a line."""

    def __init__(
        self,
        product_id: str,
        requested: int,
        available: int,
        warehouse_id: str | None = None,
    ) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        self.warehouse_id = warehouse_id
        where = f" at warehouse '{warehouse_id}'" if warehouse_id else ""
        super().__init__(
            f"Insufficient stock for product '{product_id}'{where} "
            f"(need {requested}, have {available} available)"
        )


class NoQualifyingWarehouseError(ValidationError):
    """No single active warehouse can fulfil the whole cart.

    ``best_partial`` names the warehouse with the highest raw coverage so
    an operator can be told where most of the cart could come from. It
    must never be used to fulfil the order.
    """

    def __init__(self, best_partial: WarehouseScore | None) -> None:
        self.best_partial = best_partial
        if best_partial is None:
            message = "No active warehouse is available"
        else:
            message = (
                "No single warehouse can fulfil the whole cart "
                f"(best: '{best_partial.warehouse.name}' covers "
                f"{best_partial.lines_covered}/{best_partial.total_lines} lines)"
            )
        super().__init__(message)


class ReservationExpiredError(DomainException):
    """Commit arrived after the reservation hold was released by timeout."""

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(
            f"Reservation for order '{order_id}' has expired; restart checkout"
        )
