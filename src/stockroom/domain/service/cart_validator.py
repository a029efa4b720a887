"""Domain service: Cart Validator.

Gatekeeps every cart mutation with a cheap per-product check. It only
asks whether *some* active warehouse could cover this product on its
own; the authoritative multi-line check is the warehouse selector at
checkout, because stock can move between add-to-cart and purchase.
"""

from __future__ import annotations

import structlog

from stockroom.domain.exceptions import EntityNotFoundError
from stockroom.domain.model.validation import CartValidation, RejectionReason
from stockroom.domain.model.value_objects import Quantity
from stockroom.domain.repository.cart_repository import CartRepository
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.service.availability import AvailabilityChecker

logger = structlog.get_logger(__name__)


class CartValidator:

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
        availability: AvailabilityChecker,
    ) -> None:
        self._product_repo = product_repo
        self._cart_repo = cart_repo
        self._availability = availability

    def can_add(
        self, product_id: str, quantity: int, cart_id: str | None = None
    ) -> CartValidation:
        """Check adding *quantity* of a product.

        With a ``cart_id``, units of the same product already in that
        cart count toward the requested total.
        """
        requested = Quantity(quantity).value
        if cart_id is not None:
            existing = self._cart_repo.find_item(cart_id, product_id)
            if existing is not None:
                requested += existing.quantity
        return self._check(product_id, requested)

    def can_update(self, cart_item_id: str, new_quantity: int) -> CartValidation:
        """Check replacing a cart item's quantity with *new_quantity*."""
        requested = Quantity(new_quantity).value
        item = self._cart_repo.get_item(cart_item_id)
        if item is None:
            raise EntityNotFoundError(f"Cart item '{cart_item_id}' not found")
        return self._check(item.product_id, requested)

    def _check(self, product_id: str, requested: int) -> CartValidation:
        result = self._evaluate(product_id, requested)
        if not result.ok:
            logger.debug(
                "Cart mutation rejected",
                product_id=product_id,
                requested=requested,
                reason=result.reason.value,
            )
        return result

    def _evaluate(self, product_id: str, requested: int) -> CartValidation:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            return CartValidation.rejected(
                RejectionReason.NOT_FOUND, f"Product '{product_id}' not found"
            )
        if not product.is_active:
            return CartValidation.rejected(
                RejectionReason.PRODUCT_INACTIVE, f"Product '{product.name}' is inactive"
            )
        if not product.allows_sale:
            return CartValidation.rejected(
                RejectionReason.SALE_NOT_ALLOWED,
                f"Product '{product.name}' is not for sale",
            )
        if not product.business_id:
            return CartValidation.rejected(
                RejectionReason.NO_BUSINESS,
                f"Product '{product.name}' has no owning business",
            )
        if not product.accepts_quantity(requested):
            return CartValidation.rejected(
                RejectionReason.QUANTITY_OUT_OF_RANGE,
                f"Quantity {requested} of '{product.name}' is outside the allowed "
                f"range ({product.min_quantity or 1}-{product.max_quantity or 'any'})",
            )
        if not self._availability.has_inventory(product_id):
            return CartValidation.rejected(
                RejectionReason.NO_INVENTORY,
                f"Product '{product.name}' is not stocked at any warehouse",
            )
        if not self._availability.has_any_stock(product_id):
            return CartValidation.rejected(
                RejectionReason.ZERO_STOCK, f"Product '{product.name}' is out of stock"
            )

        best = self._availability.best_available(product_id)
        if best < requested:
            return CartValidation.rejected(
                RejectionReason.INSUFFICIENT_STOCK,
                f"Only {best} of '{product.name}' available at a single warehouse",
                product_id=product_id,
                requested=requested,
                available=best,
            )
        return CartValidation.accepted()
