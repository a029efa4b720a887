"""Background expiry sweep.

A daemon thread that calls ``ReservationManager.sweep_expired`` every
``interval`` seconds until stopped. A failed pass is logged and the
next tick tries again; the thread never dies on an error.
"""

from __future__ import annotations

import threading

import structlog

from stockroom.domain.service.reservation_manager import ReservationManager

logger = structlog.get_logger(__name__)


class ReservationSweeper:

    def __init__(self, manager: ReservationManager, interval: float) -> None:
        if interval <= 0:
            raise ValueError("Sweep interval must be positive")
        self._manager = manager
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="reservation-sweeper", daemon=True
        )
        self._thread.start()
        logger.info("Reservation sweeper started", interval=self._interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Reservation sweeper stopped")

    def run_once(self) -> list[str]:
        try:
            return self._manager.sweep_expired()
        except Exception:
            logger.exception("Reservation sweep failed")
            return []

    def _run(self) -> None:
        while not self._stop.is_set():
            self.run_once()
            self._stop.wait(self._interval)
