"""Application service: Pickup Options use case (query).

Shows, per warehouse, which cart lines could be collected right away
and what is missing. Purely informational; checkout still goes through
the warehouse selector.
"""

from __future__ import annotations

from stockroom.application.dto import PickupLineDTO, PickupOptionDTO
from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.value_objects import CartLine
from stockroom.domain.repository.cart_repository import CartRepository
from stockroom.domain.service.warehouse_selector import WarehouseSelector


class PickupOptionsHandler:

    def __init__(self, cart_repo: CartRepository, selector: WarehouseSelector) -> None:
        self._cart_repo = cart_repo
        self._selector = selector

    def handle(self, cart_id: str) -> list[PickupOptionDTO]:
        items = self._cart_repo.list_items(cart_id)
        if not items:
            raise ValidationError(f"Cart '{cart_id}' is empty")
        lines = [CartLine.of(item.product_id, item.quantity) for item in items]

        return [
            PickupOptionDTO(
                warehouse_id=option.warehouse.id,
                warehouse_name=option.warehouse.name,
                is_active=option.warehouse.is_active,
                immediate_pickup=option.immediate_pickup,
                lines=[
                    PickupLineDTO(
                        product_id=line.product_id,
                        required=line.required,
                        available=line.available,
                        missing=line.missing,
                        status=line.status.value,
                    )
                    for line in option.lines
                ],
            )
            for option in self._selector.pickup_options(lines)
        ]
