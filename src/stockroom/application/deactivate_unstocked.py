"""Application service: Deactivate Unstocked Products use case.

Maintenance sweep over the catalog: any active product with nothing on
hand at any active warehouse is switched off so shoppers stop seeing
it. ``dry_run`` reports without saving.

The check and the save run under the product's (product, warehouse)
locks, the same locks a reservation holds while it checks the product,
so a reservation never lands on a product being switched off.
"""

from __future__ import annotations

import structlog

from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.service.availability import AvailabilityChecker
from stockroom.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class DeactivateUnstockedProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        availability: AvailabilityChecker,
        ledger: StockLedger,
    ) -> None:
        self._product_repo = product_repo
        self._availability = availability
        self._ledger = ledger

    def handle(self, dry_run: bool = False) -> list[str]:
        deactivated: list[str] = []
        for product in self._product_repo.list_all():
            if not product.is_active:
                continue
            pairs = [r.key for r in self._ledger.records_for_product(product.id)]
            with self._ledger.lock_many(pairs):
                if self._availability.has_any_stock(product.id):
                    continue
                deactivated.append(product.id)
                if not dry_run:
                    product.deactivate()
                    self._product_repo.save(product)

        logger.info(
            "Unstocked products deactivated",
            count=len(deactivated),
            dry_run=dry_run,
        )
        return sorted(deactivated)
