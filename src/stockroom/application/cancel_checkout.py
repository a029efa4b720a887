"""Application service: Cancel Checkout use case.

Used for order cancellation and payment failure alike; the reason is
recorded on the released reservations.
"""

from __future__ import annotations

from stockroom.application.dto import ReservationDTO
from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.reservation import ReleaseReason
from stockroom.domain.service.reservation_manager import ReservationManager


class CancelCheckoutHandler:

    def __init__(self, manager: ReservationManager) -> None:
        self._manager = manager

    def handle(self, order_id: str, reason: str = "CANCELLED") -> list[ReservationDTO]:
        try:
            release_reason = ReleaseReason(reason.upper())
        except ValueError:
            raise ValidationError(
                f"Unknown release reason '{reason}'. Expected one of: "
                + ", ".join(r.value for r in ReleaseReason)
            )
        reservations = self._manager.release(order_id, release_reason)
        return [ReservationDTO.from_domain(r) for r in reservations]
