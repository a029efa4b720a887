"""Application service: Checkout use case.

Turns a cart into PENDING reservations at a single warehouse:
1. Read the cart lines.
2. Ask the warehouse selector for the best qualified warehouse.
3. Reserve every line there, all-or-nothing.

Stock can move between steps 2 and 3. When the reservation loses that
race (InsufficientStockError) the selection is recomputed from the new
snapshot and tried again, up to ``max_attempts`` times.
NoQualifyingWarehouseError is never retried.
"""

from __future__ import annotations

import structlog

from stockroom.application.dto import CheckoutDTO, ReservationDTO
from stockroom.domain.exceptions import InsufficientStockError, ValidationError
from stockroom.domain.model.value_objects import CartLine
from stockroom.domain.repository.cart_repository import CartRepository
from stockroom.domain.service.reservation_manager import ReservationManager
from stockroom.domain.service.warehouse_selector import WarehouseSelector

logger = structlog.get_logger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        selector: WarehouseSelector,
        manager: ReservationManager,
        max_attempts: int = 3,
    ) -> None:
        if max_attempts < 1:
            raise ValidationError("Checkout needs at least one attempt")
        self._cart_repo = cart_repo
        self._selector = selector
        self._manager = manager
        self._max_attempts = max_attempts

    def handle(self, order_id: str, cart_id: str) -> CheckoutDTO:
        items = self._cart_repo.list_items(cart_id)
        if not items:
            raise ValidationError(f"Cart '{cart_id}' is empty")
        lines = [CartLine.of(item.product_id, item.quantity) for item in items]

        attempt = 1
        while True:
            selection = self._selector.select(lines)
            try:
                reservations = self._manager.reserve_for_order(
                    order_id, selection.warehouse_id, lines
                )
                break
            except InsufficientStockError as exc:
                logger.warning(
                    "Checkout lost a stock race",
                    order_id=order_id,
                    attempt=attempt,
                    warehouse_id=selection.warehouse_id,
                    product_id=exc.product_id,
                )
                if attempt >= self._max_attempts:
                    raise
                attempt += 1

        return CheckoutDTO(
            order_id=order_id,
            warehouse_id=selection.warehouse_id,
            warehouse_name=selection.chosen.warehouse.name,
            score=selection.chosen.score,
            attempts=attempt,
            reservations=[ReservationDTO.from_domain(r) for r in reservations],
        )
