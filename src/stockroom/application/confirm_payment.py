"""Application service: Confirm Payment use case.

Commits an order's reservations once payment succeeds and, when the
cart is known, empties it: the checkout is complete.
"""

from __future__ import annotations

from stockroom.application.dto import ReservationDTO
from stockroom.domain.repository.cart_repository import CartRepository
from stockroom.domain.service.reservation_manager import ReservationManager


class ConfirmPaymentHandler:

    def __init__(self, manager: ReservationManager, cart_repo: CartRepository) -> None:
        self._manager = manager
        self._cart_repo = cart_repo

    def handle(self, order_id: str, cart_id: str | None = None) -> list[ReservationDTO]:
        reservations = self._manager.commit(order_id)

        if cart_id is not None:
            self._cart_repo.clear_cart(cart_id)

        return [ReservationDTO.from_domain(r) for r in reservations]
