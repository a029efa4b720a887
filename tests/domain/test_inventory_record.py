"""Unit tests for the InventoryRecord aggregate."""

import pytest

from stockroom.domain.exceptions import InsufficientStockError, ValidationError
from stockroom.domain.model.inventory import InventoryRecord


def _record(on_hand: int = 10, reserved: int = 0) -> InventoryRecord:
    return InventoryRecord(product_id="A", warehouse_id="W1", on_hand=on_hand, reserved=reserved)


class TestInvariants:

    def test_available_is_on_hand_minus_reserved(self):
        assert _record(10, 4).available == 6

    def test_negative_on_hand_rejected(self):
        with pytest.raises(ValidationError):
            _record(on_hand=-1)

    def test_negative_reserved_rejected(self):
        with pytest.raises(ValidationError):
            _record(reserved=-1)

    def test_reserved_above_on_hand_rejected(self):
        with pytest.raises(ValidationError, match="exceeds on-hand"):
            _record(on_hand=2, reserved=3)


class TestReserveAndRelease:

    def test_reserve_reduces_available(self):
        record = _record(10)
        record.reserve(4)
        assert record.reserved == 4
        assert record.available == 6

    def test_reserve_all_available(self):
        record = _record(3)
        record.reserve(3)
        assert record.available == 0

    def test_over_reserve_rejected(self):
        record = _record(3, 1)
        with pytest.raises(InsufficientStockError) as exc_info:
            record.reserve(3)
        assert exc_info.value.available == 2
        assert exc_info.value.warehouse_id == "W1"
        assert record.reserved == 1

    def test_release_restores_available(self):
        record = _record(10, 4)
        record.release(4)
        assert record.available == 10

    def test_release_more_than_reserved_rejected(self):
        record = _record(10, 2)
        with pytest.raises(ValidationError, match="only 2 currently reserved"):
            record.release(3)

    def test_non_positive_quantities_rejected(self):
        record = _record(10, 2)
        with pytest.raises(ValidationError):
            record.reserve(0)
        with pytest.raises(ValidationError):
            record.release(0)


class TestOnHandChanges:

    def test_set_on_hand(self):
        record = _record(10, 2)
        record.set_on_hand(20)
        assert record.on_hand == 20
        assert record.available == 18

    def test_cannot_drop_below_reserved(self):
        record = _record(10, 6)
        with pytest.raises(ValidationError, match="6 units are reserved"):
            record.set_on_hand(5)
        assert record.on_hand == 10

    def test_adjust_on_hand(self):
        record = _record(10)
        record.adjust_on_hand(5)
        assert record.on_hand == 15
        record.adjust_on_hand(-15)
        assert record.on_hand == 0

    def test_adjust_below_zero_rejected(self):
        record = _record(3)
        with pytest.raises(ValidationError, match="negative"):
            record.adjust_on_hand(-4)
