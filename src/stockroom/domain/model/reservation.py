"""Reservation aggregate: a durable claim against one inventory record.

A reservation is created PENDING at checkout, then either COMMITTED once
payment is confirmed or RELEASED on cancellation, payment failure or
timeout. The allowed moves live in ``_TRANSITIONS``; anything else is
rejected here rather than left to callers to check.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from stockroom.domain.exceptions import InvalidTransitionError, ValidationError


class ReservationStatus(Enum):
    PENDING = "PENDING"
    COMMITTED = "COMMITTED"
    RELEASED = "RELEASED"


class ReleaseReason(Enum):
    CANCELLED = "CANCELLED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    EXPIRED = "EXPIRED"


_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset(
        {ReservationStatus.COMMITTED, ReservationStatus.RELEASED}
    ),
    ReservationStatus.COMMITTED: frozenset({ReservationStatus.RELEASED}),
    ReservationStatus.RELEASED: frozenset(),
}


@dataclass
class Reservation:
    """Aggregate root for one (order, product) hold.

    Use ``Reservation.create()`` for new holds. The ``__init__`` stays
    simple so repositories can reconstitute persisted rows without
    re-validating.
    """

    order_id: str
    product_id: str
    warehouse_id: str
    quantity: int
    expires_at: datetime
    status: ReservationStatus = ReservationStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    release_reason: ReleaseReason | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        order_id: str,
        product_id: str,
        warehouse_id: str,
        quantity: int,
        created_at: datetime,
        expires_at: datetime,
    ) -> Reservation:
        if not order_id:
            raise ValidationError("Order ID is required")
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if expires_at <= created_at:
            raise ValidationError("Reservation must expire after it is created")
        return Reservation(
            order_id=order_id,
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity,
            created_at=created_at,
            expires_at=expires_at,
        )

    # --- State transitions ----------------------------------------------------

    def commit(self) -> None:
        """PENDING -> COMMITTED. Committing twice is a no-op."""
        if self.status == ReservationStatus.COMMITTED:
            return
        self._transition(ReservationStatus.COMMITTED)

    def release(self, reason: ReleaseReason) -> None:
        """PENDING|COMMITTED -> RELEASED. Releasing twice is a no-op.

        Returning the stock to the ledger is the caller's job; this only
        records the new state.
        """
        if self.status == ReservationStatus.RELEASED:
            return
        self._transition(ReservationStatus.RELEASED)
        self.release_reason = reason

    # --- Queries --------------------------------------------------------------

    @property
    def key(self) -> tuple[str, str]:
        return (self.order_id, self.product_id)

    @property
    def holds_stock(self) -> bool:
        return self.status != ReservationStatus.RELEASED

    @property
    def was_expired(self) -> bool:
        return (
            self.status == ReservationStatus.RELEASED
            and self.release_reason == ReleaseReason.EXPIRED
        )

    def is_expired(self, now: datetime) -> bool:
        return self.status == ReservationStatus.PENDING and now >= self.expires_at

    # --- Internal helpers -----------------------------------------------------

    def _transition(self, target: ReservationStatus) -> None:
        if target not in _TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Cannot move reservation for order '{self.order_id}' "
                f"product '{self.product_id}' from {self.status.value} "
                f"to {target.value}"
            )
        self.status = target
