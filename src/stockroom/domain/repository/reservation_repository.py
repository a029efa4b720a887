"""Abstract repository for Reservation aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime

from stockroom.domain.model.reservation import Reservation


class ReservationRepository(ABC):

    @abstractmethod
    def list_for_order(self, order_id: str) -> list[Reservation]:
        """Return every reservation of an order, sorted by product ID."""

    @abstractmethod
    def list_expired(self, now: datetime) -> list[Reservation]:
        """Return PENDING reservations whose hold ended at or before *now*."""

    @abstractmethod
    def list_all(self) -> list[Reservation]:
        """Return every reservation."""

    @abstractmethod
    def save_all(self, reservations: list[Reservation]) -> None:
        """Persist new or updated reservations together."""

    @abstractmethod
    def lock(self, order_id: str) -> AbstractContextManager:
        """Context manager holding the per-order lock.

        Commit, release and the expiry sweep of one order run under it,
        so at most one of them changes that order at a time.
        """
