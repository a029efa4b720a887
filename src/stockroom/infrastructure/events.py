"""Event publisher adapters."""

from __future__ import annotations

import structlog

from stockroom.domain.events import EventPublisher, ReservationEvent

logger = structlog.get_logger("stockroom.events")


class LoggingEventPublisher(EventPublisher):
    """Writes each reservation event to the structured log.

    Stands in for a pub/sub channel; the log stream is what downstream
    consumers tail.
    """

    def publish(self, event: ReservationEvent) -> None:
        logger.info("Reservation event", **event.as_dict())
