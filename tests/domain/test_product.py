"""Unit tests for the Product aggregate."""

import pytest

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.product import Product


class TestReservable:

    def test_active_sellable_owned_product(self):
        assert Product(id="A", name="Widget", business_id="B1").is_reservable

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"is_active": False, "business_id": "B1"},
            {"allows_sale": False, "business_id": "B1"},
            {"business_id": None},
            {"business_id": ""},
        ],
    )
    def test_not_reservable(self, kwargs):
        assert not Product(id="A", name="Widget", **kwargs).is_reservable

    def test_deactivate(self):
        product = Product(id="A", name="Widget", business_id="B1")
        product.deactivate()
        assert not product.is_active


class TestQuantityLimits:

    def test_unbounded_by_default(self):
        assert Product(id="A", name="Widget").accepts_quantity(10_000)

    def test_min_and_max(self):
        product = Product(id="A", name="Widget", min_quantity=2, max_quantity=5)
        assert not product.accepts_quantity(1)
        assert product.accepts_quantity(2)
        assert product.accepts_quantity(5)
        assert not product.accepts_quantity(6)

    def test_max_below_min_rejected(self):
        with pytest.raises(ValidationError, match="below minimum"):
            Product(id="A", name="Widget", min_quantity=5, max_quantity=2)

    def test_min_below_one_rejected(self):
        with pytest.raises(ValidationError, match="at least 1"):
            Product(id="A", name="Widget", min_quantity=0)
