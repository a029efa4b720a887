"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI (or any other orchestrator) and the
application layer without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.model.cart import CartItem
from stockroom.domain.model.inventory import InventoryRecord
from stockroom.domain.model.reservation import Reservation

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


@dataclass(frozen=True)
class CartItemDTO:
    id: str
    cart_id: str
    product_id: str
    quantity: int

    @staticmethod
    def from_domain(item: CartItem) -> CartItemDTO:
        if item.id is None:
            raise ValueError("Cart item has no ID until it is saved")
        return CartItemDTO(
            id=item.id,
            cart_id=item.cart_id,
            product_id=item.product_id,
            quantity=item.quantity,
        )


@dataclass(frozen=True)
class ReservationDTO:
    order_id: str
    product_id: str
    warehouse_id: str
    quantity: int
    status: str
    expires_at: str
    release_reason: str | None

    @staticmethod
    def from_domain(reservation: Reservation) -> ReservationDTO:
        return ReservationDTO(
            order_id=reservation.order_id,
            product_id=reservation.product_id,
            warehouse_id=reservation.warehouse_id,
            quantity=reservation.quantity,
            status=reservation.status.value,
            expires_at=reservation.expires_at.strftime(_TIME_FORMAT),
            release_reason=(
                reservation.release_reason.value if reservation.release_reason else None
            ),
        )


@dataclass(frozen=True)
class CheckoutDTO:
    """Output: a successful checkout reservation."""

    order_id: str
    warehouse_id: str
    warehouse_name: str
    score: float
    attempts: int
    reservations: list[ReservationDTO]


@dataclass(frozen=True)
class StockLineDTO:
    product_id: str
    warehouse_id: str
    on_hand: int
    reserved: int
    available: int

    @staticmethod
    def from_domain(record: InventoryRecord) -> StockLineDTO:
        return StockLineDTO(
            product_id=record.product_id,
            warehouse_id=record.warehouse_id,
            on_hand=record.on_hand,
            reserved=record.reserved,
            available=record.available,
        )


@dataclass(frozen=True)
class PickupLineDTO:
    product_id: str
    required: int
    available: int
    missing: int
    status: str  # in_stock | partial | out_of_stock


@dataclass(frozen=True)
class PickupOptionDTO:
    warehouse_id: str
    warehouse_name: str
    is_active: bool
    immediate_pickup: bool
    lines: list[PickupLineDTO]
