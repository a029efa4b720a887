"""CLI commands for warehouses."""

from __future__ import annotations

import click

from stockroom.application.add_warehouse import AddWarehouseHandler
from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import warehouse_repository


@click.command("add")
@click.option("--id", "warehouse_id", required=True, help="Warehouse ID.")
@click.option("--name", required=True, help="Warehouse name.")
@click.option("--inactive", is_flag=True, default=False, help="Create the warehouse inactive.")
def warehouse_add(warehouse_id: str, name: str, inactive: bool) -> None:
    """Register a warehouse."""
    handler = AddWarehouseHandler(warehouse_repo=warehouse_repository())

    try:
        warehouse = handler.handle(warehouse_id=warehouse_id, name=name, is_active=not inactive)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Warehouse '{warehouse.id}' ({warehouse.name}) added")


@click.command("list")
def warehouse_list() -> None:
    """List warehouses in creation order."""
    warehouses = sorted(warehouse_repository().list_all(), key=lambda w: w.creation_key)

    if not warehouses:
        click.echo("No warehouses found.")
        return

    click.echo(f"{'ID':<12} {'Name':<24} {'Active':>6}")
    click.echo("-" * 44)
    for w in warehouses:
        click.echo(f"{w.id:<12} {w.name:<24} {'yes' if w.is_active else 'no':>6}")
