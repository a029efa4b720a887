"""Reservation events and the port they are published through.

Downstream consumers (UI push, notifications) learn about reservation
state changes from these events. Publishing is fire-and-forget: the
reservation manager never waits on, or fails because of, delivery.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ReservationEventType(Enum):
    RESERVED = "reservation.reserved"
    COMMITTED = "reservation.committed"
    RELEASED = "reservation.released"


@dataclass(frozen=True)
class ReservationEvent:
    type: ReservationEventType
    order_id: str
    warehouse_id: str
    lines: tuple[tuple[str, int], ...]
    occurred_at: datetime
    reason: str | None = None

    def as_dict(self) -> dict:
        return {
            "type": self.type.value,
            "order_id": self.order_id,
            "warehouse_id": self.warehouse_id,
            "lines": [{"product_id": pid, "quantity": qty} for pid, qty in self.lines],
            "occurred_at": self.occurred_at.isoformat(),
            "reason": self.reason,
        }


class EventPublisher(ABC):
    """Abstract interface for reservation event delivery."""

    @abstractmethod
    def publish(self, event: ReservationEvent) -> None:
        """Deliver one event. May raise; callers log and carry on."""
