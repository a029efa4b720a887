"""Tests for structlog configuration and the logging event publisher."""

import json
import logging
from datetime import datetime, timezone

import pytest
import structlog

from stockroom.domain.events import ReservationEvent, ReservationEventType
from stockroom.infrastructure.events import LoggingEventPublisher
from stockroom.infrastructure.logging_config import configure_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestConfigureLogging:

    def test_json_output(self, restore_logging, capsys):
        configure_logging("DEBUG", json=True)
        structlog.get_logger("stockroom.test").info("Stock reserved", order_id="O1")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "Stock reserved"
        assert payload["order_id"] == "O1"
        assert payload["level"] == "info"

    def test_level_filters(self, restore_logging, capsys):
        configure_logging("WARNING")
        structlog.get_logger("stockroom.test").info("quiet")
        structlog.get_logger("stockroom.test").warning("loud")

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "loud" in err

    def test_unknown_level_falls_back_to_info(self, restore_logging):
        configure_logging("CHATTY")
        assert logging.getLogger().level == logging.INFO


class TestLoggingEventPublisher:

    def test_event_is_logged(self, restore_logging, capsys):
        configure_logging("INFO")
        event = ReservationEvent(
            type=ReservationEventType.RELEASED,
            order_id="O1",
            warehouse_id="W1",
            lines=(("A", 2),),
            occurred_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            reason="EXPIRED",
        )
        LoggingEventPublisher().publish(event)

        err = capsys.readouterr().err
        assert "Reservation event" in err
        assert "order_id=O1" in err
        assert "reservation.released" in err

    def test_as_dict(self):
        event = ReservationEvent(
            type=ReservationEventType.RESERVED,
            order_id="O1",
            warehouse_id="W1",
            lines=(("A", 2), ("B", 1)),
            occurred_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        assert event.as_dict() == {
            "type": "reservation.reserved",
            "order_id": "O1",
            "warehouse_id": "W1",
            "lines": [
                {"product_id": "A", "quantity": 2},
                {"product_id": "B", "quantity": 1},
            ],
            "occurred_at": "2024-01-01T00:00:00+00:00",
            "reason": None,
        }
