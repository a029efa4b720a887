"""Domain service: Reservation Manager.

The only component allowed to change ``reserved`` on the stock ledger.
Per order the lifecycle is ``PENDING -> COMMITTED | RELEASED`` (a
committed order may still be released, e.g. cancelled after payment).

Reserving is check-and-increment under the (product, warehouse) locks,
taken in product-ID order:
  Phase 1: with every lock held, verify each line is available. The
           first short line fails the whole call before any mutation.
  Phase 2: still holding the locks, increment ``reserved`` and write
           the PENDING rows. Any failure here undoes the increments
           already applied before the error propagates.

Reserve, commit, release and the expiry sweep for one order are
serialised by the reservation repository's per-order lock, so a commit
racing a release has exactly one winner. Both lock kinds are supplied
by the repositories and hold across processes for the JSON store.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import structlog

from stockroom.domain.events import EventPublisher, ReservationEvent, ReservationEventType
from stockroom.domain.exceptions import (
    EntityNotFoundError,
    InactiveOrUnsellableError,
    InsufficientStockError,
    InvalidTransitionError,
    ReservationExpiredError,
    ValidationError,
)
from stockroom.domain.model.reservation import (
    ReleaseReason,
    Reservation,
    ReservationStatus,
)
from stockroom.domain.model.value_objects import CartLine, merge_lines
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.repository.reservation_repository import ReservationRepository
from stockroom.domain.repository.warehouse_repository import WarehouseRepository
from stockroom.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)

DEFAULT_HOLD_WINDOW = timedelta(minutes=15)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReservationManager:

    def __init__(
        self,
        ledger: StockLedger,
        reservation_repo: ReservationRepository,
        product_repo: ProductRepository,
        warehouse_repo: WarehouseRepository,
        publisher: EventPublisher | None = None,
        hold_window: timedelta = DEFAULT_HOLD_WINDOW,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if hold_window <= timedelta(0):
            raise ValidationError("Reservation hold window must be positive")
        self._ledger = ledger
        self._reservation_repo = reservation_repo
        self._product_repo = product_repo
        self._warehouse_repo = warehouse_repo
        self._publisher = publisher
        self._hold_window = hold_window
        self._clock = clock

    # --- Reserve --------------------------------------------------------------

    def reserve_for_order(
        self, order_id: str, warehouse_id: str, lines: list[CartLine]
    ) -> list[Reservation]:
        """Atomically hold stock at one warehouse for every line of an order.

        All-or-nothing: raises InsufficientStockError naming the first
        short product (in product-ID order) and leaves the ledger as it
        was.
        """
        if not order_id:
            raise ValidationError("Order ID is required")
        if not lines:
            raise ValidationError("Order must contain at least one line")

        ordered = sorted(merge_lines(lines), key=lambda line: line.product_id)
        self._check_warehouse(warehouse_id)

        with self._reservation_repo.lock(order_id):
            if self._reservation_repo.list_for_order(order_id):
                raise ValidationError(f"Order '{order_id}' already has reservations")

            pairs = [(line.product_id, warehouse_id) for line in ordered]
            with self._ledger.lock_many(pairs):
                # deactivation takes the same pair locks
                for line in ordered:
                    self._check_product(line.product_id)

                # Phase 1: verify every line with all locks held
                for line in ordered:
                    available = self._available(line.product_id, warehouse_id)
                    if available < line.quantity.value:
                        logger.warning(
                            "Reservation rejected",
                            order_id=order_id,
                            warehouse_id=warehouse_id,
                            product_id=line.product_id,
                            requested=line.quantity.value,
                            available=available,
                        )
                        raise InsufficientStockError(
                            line.product_id, line.quantity.value, available, warehouse_id
                        )

                # Phase 2: mutate, undoing on any failure
                now = self._clock()
                applied: list[CartLine] = []
                try:
                    for line in ordered:
                        self._ledger.increment_reserved(
                            line.product_id, warehouse_id, line.quantity.value
                        )
                        applied.append(line)
                    reservations = [
                        Reservation.create(
                            order_id=order_id,
                            product_id=line.product_id,
                            warehouse_id=warehouse_id,
                            quantity=line.quantity.value,
                            created_at=now,
                            expires_at=now + self._hold_window,
                        )
                        for line in ordered
                    ]
                    self._reservation_repo.save_all(reservations)
                except Exception:
                    self._undo_increments(order_id, warehouse_id, applied)
                    raise

        logger.info(
            "Stock reserved",
            order_id=order_id,
            warehouse_id=warehouse_id,
            lines=len(reservations),
            expires_at=reservations[0].expires_at.isoformat(),
        )
        self._publish(ReservationEventType.RESERVED, order_id, reservations)
        return reservations

    # --- Commit ---------------------------------------------------------------

    def commit(self, order_id: str) -> list[Reservation]:
        """PENDING -> COMMITTED for every reservation of the order.

        Idempotent. Raises ReservationExpiredError if the hold has run
        out (released by the sweep, or past ``expires_at`` now), and
        InvalidTransitionError if the order was released for another
        reason.
        """
        with self._reservation_repo.lock(order_id):
            reservations = self._require_reservations(order_id)

            if any(r.was_expired for r in reservations):
                raise ReservationExpiredError(order_id)

            now = self._clock()
            if any(r.is_expired(now) for r in reservations):
                self._release_locked(order_id, reservations, ReleaseReason.EXPIRED)
                raise ReservationExpiredError(order_id)

            if all(r.status == ReservationStatus.COMMITTED for r in reservations):
                return reservations

            released = [r for r in reservations if r.status == ReservationStatus.RELEASED]
            if released:
                reason = released[0].release_reason
                raise InvalidTransitionError(
                    f"Cannot commit order '{order_id}' - reservations were released"
                    + (f" ({reason.value})" if reason else "")
                )

            for reservation in reservations:
                reservation.commit()
            self._reservation_repo.save_all(reservations)

        logger.info("Reservations committed", order_id=order_id, lines=len(reservations))
        self._publish(ReservationEventType.COMMITTED, order_id, reservations)
        return reservations

    # --- Release --------------------------------------------------------------

    def release(
        self, order_id: str, reason: ReleaseReason = ReleaseReason.CANCELLED
    ) -> list[Reservation]:
        """Return an order's held stock to available. Idempotent."""
        with self._reservation_repo.lock(order_id):
            reservations = self._require_reservations(order_id)
            self._release_locked(order_id, reservations, reason)
        return reservations

    def sweep_expired(self, now: datetime | None = None) -> list[str]:
        """Release every PENDING reservation whose hold has run out.

        Returns the IDs of the orders released. A failure on one order is
        logged and left for the next sweep; this never raises.
        """
        now = now or self._clock()
        order_ids = sorted({r.order_id for r in self._reservation_repo.list_expired(now)})

        released: list[str] = []
        for order_id in order_ids:
            try:
                with self._reservation_repo.lock(order_id):
                    reservations = self._reservation_repo.list_for_order(order_id)
                    # re-check under the lock; a commit may have won the race
                    if not any(r.is_expired(now) for r in reservations):
                        continue
                    self._release_locked(order_id, reservations, ReleaseReason.EXPIRED)
                released.append(order_id)
            except Exception:
                logger.exception("Failed to release expired reservation", order_id=order_id)

        if released:
            logger.info("Expired reservations released", orders=len(released))
        return released

    # --- Queries --------------------------------------------------------------

    def reservations_for_order(self, order_id: str) -> list[Reservation]:
        return self._reservation_repo.list_for_order(order_id)

    # --- Internal helpers -----------------------------------------------------

    def _release_locked(
        self, order_id: str, reservations: list[Reservation], reason: ReleaseReason
    ) -> None:
        """Release under the order lock; each row is returned and saved on its own."""
        holding = [r for r in reservations if r.holds_stock]
        if not holding:
            return

        pairs = [(r.product_id, r.warehouse_id) for r in holding]
        with self._ledger.lock_many(pairs):
            for reservation in sorted(holding, key=lambda r: r.product_id):
                self._ledger.decrement_reserved(
                    reservation.product_id, reservation.warehouse_id, reservation.quantity
                )
                reservation.release(reason)
                self._reservation_repo.save_all([reservation])

        logger.info(
            "Reservations released",
            order_id=order_id,
            reason=reason.value,
            lines=len(holding),
        )
        self._publish(ReservationEventType.RELEASED, order_id, holding, reason.value)

    def _undo_increments(
        self, order_id: str, warehouse_id: str, applied: list[CartLine]
    ) -> None:
        for line in reversed(applied):
            try:
                self._ledger.decrement_reserved(
                    line.product_id, warehouse_id, line.quantity.value
                )
            except Exception:
                logger.exception(
                    "Rollback of reserved stock failed",
                    order_id=order_id,
                    warehouse_id=warehouse_id,
                    product_id=line.product_id,
                )
        logger.warning("Reservation rolled back", order_id=order_id, lines=len(applied))

    def _available(self, product_id: str, warehouse_id: str) -> int:
        try:
            return self._ledger.get_available(product_id, warehouse_id)
        except EntityNotFoundError:
            return 0

    def _check_warehouse(self, warehouse_id: str) -> None:
        warehouse = self._warehouse_repo.get_by_id(warehouse_id)
        if warehouse is None:
            raise EntityNotFoundError(f"Warehouse '{warehouse_id}' not found")
        if not warehouse.is_active:
            raise ValidationError(f"Warehouse '{warehouse.name}' is inactive")

    def _check_product(self, product_id: str) -> None:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        if not product.is_reservable:
            raise InactiveOrUnsellableError(
                f"Product '{product.name}' is not available for sale"
            )

    def _require_reservations(self, order_id: str) -> list[Reservation]:
        reservations = self._reservation_repo.list_for_order(order_id)
        if not reservations:
            raise EntityNotFoundError(f"No reservations for order '{order_id}'")
        return reservations

    def _publish(
        self,
        event_type: ReservationEventType,
        order_id: str,
        reservations: list[Reservation],
        reason: str | None = None,
    ) -> None:
        if self._publisher is None:
            return
        event = ReservationEvent(
            type=event_type,
            order_id=order_id,
            warehouse_id=reservations[0].warehouse_id,
            lines=tuple((r.product_id, r.quantity) for r in reservations),
            occurred_at=self._clock(),
            reason=reason,
        )
        try:
            self._publisher.publish(event)
        except Exception:
            logger.exception(
                "Failed to publish reservation event",
                order_id=order_id,
                event=event_type.value,
            )
