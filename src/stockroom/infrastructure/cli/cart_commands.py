"""CLI commands for carts."""

from __future__ import annotations

import click

from stockroom.application.add_to_cart import AddToCartHandler
from stockroom.application.remove_cart_item import RemoveCartItemHandler
from stockroom.application.show_cart import ShowCartHandler
from stockroom.application.update_cart_item import UpdateCartItemHandler
from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import cart_repository, cart_validator


@click.command("add")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Quantity to add.")
def cart_add(cart_id: str, product_id: str, quantity: int) -> None:
    """Add a product to a cart (checked against current stock)."""
    handler = AddToCartHandler(cart_repo=cart_repository(), validator=cart_validator())

    try:
        item = handler.handle(cart_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart '{cart_id}': item #{item.id} '{item.product_id}' x{item.quantity}")


@click.command("update")
@click.option("--item", "item_id", required=True, help="Cart item ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def cart_update(item_id: str, quantity: int) -> None:
    """Change the quantity of a cart item."""
    handler = UpdateCartItemHandler(cart_repo=cart_repository(), validator=cart_validator())

    try:
        item = handler.handle(item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item.id} '{item.product_id}' now x{item.quantity}")


@click.command("remove")
@click.option("--item", "item_id", required=True, help="Cart item ID.")
def cart_remove(item_id: str) -> None:
    """Remove an item from its cart."""
    try:
        RemoveCartItemHandler(cart_repo=cart_repository()).handle(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item_id} removed")


@click.command("show")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
def cart_show(cart_id: str) -> None:
    """Show the items of a cart."""
    items = ShowCartHandler(cart_repo=cart_repository()).handle(cart_id)

    if not items:
        click.echo(f"Cart '{cart_id}' is empty.")
        return

    click.echo(f"  {'Item':<6} {'Product':<12} {'Qty':>5}")
    click.echo(f"  {'-'*25}")
    for item in items:
        click.echo(f"  {item.id:<6} {item.product_id:<12} {item.quantity:>5}")
