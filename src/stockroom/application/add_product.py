"""Application service: Add Product use case."""

from __future__ import annotations

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.product import Product
from stockroom.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str,
        business_id: str | None,
        allows_sale: bool = True,
        min_quantity: int | None = None,
        max_quantity: int | None = None,
    ) -> Product:
        """Register a product in the catalog."""
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if self._product_repo.get_by_id(product_id.strip()) is not None:
            raise ValidationError(f"Product '{product_id}' already exists")

        product = Product(
            id=product_id.strip(),
            name=name.strip(),
            allows_sale=allows_sale,
            business_id=business_id or None,
            min_quantity=min_quantity,
            max_quantity=max_quantity,
        )
        self._product_repo.save(product)
        return product
