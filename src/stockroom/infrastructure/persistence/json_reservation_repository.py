"""JSON-file-backed implementation of ReservationRepository.

``lock()`` is the per-order lock, held across processes through one
lock file per order under ``locks/``.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import datetime
from pathlib import Path

from stockroom.domain.model.reservation import (
    ReleaseReason,
    Reservation,
    ReservationStatus,
)
from stockroom.domain.repository.reservation_repository import ReservationRepository
from stockroom.infrastructure.persistence.json_file import JsonFile, KeyedFileLock, upsert


class JsonReservationRepository(ReservationRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)
        self._locks = KeyedFileLock(file_path.parent / "locks", "order")

    # --- ReservationRepository interface --------------------------------------

    def list_for_order(self, order_id: str) -> list[Reservation]:
        found = [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["order_id"] == order_id
        ]
        return sorted(found, key=lambda r: r.product_id)

    def list_expired(self, now: datetime) -> list[Reservation]:
        return [r for r in self.list_all() if r.is_expired(now)]

    def list_all(self) -> list[Reservation]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save_all(self, reservations: list[Reservation]) -> None:
        with self._file.transaction() as records:
            for reservation in reservations:
                upsert(
                    records,
                    self._to_raw(reservation),
                    lambda raw, key=reservation.key: (raw["order_id"], raw["product_id"]) == key,
                )

    def lock(self, order_id: str) -> AbstractContextManager:
        return self._locks.hold(order_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(reservation: Reservation) -> dict:
        return {
            "order_id": reservation.order_id,
            "product_id": reservation.product_id,
            "warehouse_id": reservation.warehouse_id,
            "quantity": reservation.quantity,
            "status": reservation.status.value,
            "created_at": reservation.created_at.isoformat(),
            "expires_at": reservation.expires_at.isoformat(),
            "release_reason": (
                reservation.release_reason.value if reservation.release_reason else None
            ),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Reservation:
        reason = raw.get("release_reason")
        return Reservation(
            order_id=raw["order_id"],
            product_id=raw["product_id"],
            warehouse_id=raw["warehouse_id"],
            quantity=raw["quantity"],
            status=ReservationStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            expires_at=datetime.fromisoformat(raw["expires_at"]),
            release_reason=ReleaseReason(reason) if reason else None,
        )
