"""Application service: Show Reservations use case (read-only, for operators)."""

from __future__ import annotations

from stockroom.application.dto import ReservationDTO
from stockroom.domain.exceptions import EntityNotFoundError
from stockroom.domain.service.reservation_manager import ReservationManager


class ShowReservationsHandler:

    def __init__(self, manager: ReservationManager) -> None:
        self._manager = manager

    def handle(self, order_id: str) -> list[ReservationDTO]:
        reservations = self._manager.reservations_for_order(order_id)
        if not reservations:
            raise EntityNotFoundError(f"No reservations for order '{order_id}'")
        return [ReservationDTO.from_domain(r) for r in reservations]
