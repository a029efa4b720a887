"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from stockroom.application.add_product import AddProductHandler
from stockroom.application.deactivate_unstocked import DeactivateUnstockedProductsHandler
from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import (
    availability_checker,
    product_repository,
    stock_ledger,
)


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--business", "business_id", default=None, help="Owning business ID.")
@click.option("--no-sale", is_flag=True, default=False, help="Register the product as not for sale.")
@click.option("--min-qty", type=int, default=None, help="Minimum quantity per order.")
@click.option("--max-qty", type=int, default=None, help="Maximum quantity per order.")
def product_add(
    product_id: str,
    name: str,
    business_id: str | None,
    no_sale: bool,
    min_qty: int | None,
    max_qty: int | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            product_id=product_id,
            name=name,
            business_id=business_id,
            allows_sale=not no_sale,
            min_quantity=min_qty,
            max_quantity=max_qty,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.id}' ({product.name}) added")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Name':<24} {'Active':>6} {'Sale':>5} {'Business':<12}")
    click.echo("-" * 63)
    for p in products:
        click.echo(
            f"{p.id:<12} {p.name:<24} {'yes' if p.is_active else 'no':>6} "
            f"{'yes' if p.allows_sale else 'no':>5} {p.business_id or '-':<12}"
        )


@click.command("deactivate-unstocked")
@click.option("--dry-run", is_flag=True, default=False, help="Only report, change nothing.")
def product_deactivate_unstocked(dry_run: bool) -> None:
    """Deactivate products with no stock at any active warehouse."""
    handler = DeactivateUnstockedProductsHandler(
        product_repo=product_repository(),
        availability=availability_checker(),
        ledger=stock_ledger(),
    )
    product_ids = handler.handle(dry_run=dry_run)

    if not product_ids:
        click.echo("Every active product has stock.")
        return

    verb = "Would deactivate" if dry_run else "Deactivated"
    click.echo(f"{verb} {len(product_ids)} product(s): {', '.join(product_ids)}")
