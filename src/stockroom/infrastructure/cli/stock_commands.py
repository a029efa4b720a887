"""CLI commands for stock levels."""

from __future__ import annotations

import click

from stockroom.application.adjust_stock import AdjustStockHandler
from stockroom.application.show_stock import ShowStockHandler
from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import (
    product_repository,
    stock_ledger,
    warehouse_repository,
)


def _adjust_handler() -> AdjustStockHandler:
    return AdjustStockHandler(
        ledger=stock_ledger(),
        product_repo=product_repository(),
        warehouse_repo=warehouse_repository(),
    )


@click.command("set")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--warehouse", "warehouse_id", required=True, help="Warehouse ID.")
@click.option("--quantity", required=True, type=int, help="Quantity on hand.")
def stock_set(product_id: str, warehouse_id: str, quantity: int) -> None:
    """Set the on-hand quantity of a product at a warehouse."""
    try:
        line = _adjust_handler().handle(product_id, warehouse_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock of '{product_id}' at '{warehouse_id}' set to {line.on_hand} "
        f"({line.available} available)"
    )


@click.command("adjust")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--warehouse", "warehouse_id", required=True, help="Warehouse ID.")
@click.option("--delta", required=True, type=int, help="Change in on-hand quantity (+/-).")
def stock_adjust(product_id: str, warehouse_id: str, delta: int) -> None:
    """Restock (positive delta) or write off (negative delta) stock."""
    try:
        line = _adjust_handler().handle(product_id, warehouse_id, delta=delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock of '{product_id}' at '{warehouse_id}' is now {line.on_hand} "
        f"({line.available} available)"
    )


@click.command("show")
@click.option("--product", "product_id", default=None, help="Only this product.")
@click.option("--warehouse", "warehouse_id", default=None, help="Only this warehouse.")
def stock_show(product_id: str | None, warehouse_id: str | None) -> None:
    """Show current stock levels."""
    lines = ShowStockHandler(ledger=stock_ledger()).handle(product_id, warehouse_id)

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(
        f"{'Product':<12} {'Warehouse':<12} {'On hand':>8} {'Reserved':>10} {'Available':>10}"
    )
    click.echo("-" * 56)
    for line in lines:
        click.echo(
            f"{line.product_id:<12} {line.warehouse_id:<12} {line.on_hand:>8} "
            f"{line.reserved:>10} {line.available:>10}"
        )
