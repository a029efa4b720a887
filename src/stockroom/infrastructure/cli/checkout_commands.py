"""CLI commands for the checkout flow."""

from __future__ import annotations

import click

from stockroom.application.cancel_checkout import CancelCheckoutHandler
from stockroom.application.checkout import CheckoutHandler
from stockroom.application.confirm_payment import ConfirmPaymentHandler
from stockroom.application.pickup_options import PickupOptionsHandler
from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import (
    cart_repository,
    reservation_manager,
    warehouse_selector,
)
from stockroom.infrastructure.settings import get_settings


@click.command("place")
@click.option("--order", "order_id", required=True, help="Order ID to reserve stock for.")
@click.option("--cart", "cart_id", required=True, help="Cart to check out.")
def checkout_place(order_id: str, cart_id: str) -> None:
    """Select a warehouse and reserve the whole cart there."""
    handler = CheckoutHandler(
        cart_repo=cart_repository(),
        selector=warehouse_selector(),
        manager=reservation_manager(),
        max_attempts=get_settings().checkout_max_attempts,
    )

    try:
        dto = handler.handle(order_id, cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Order '{dto.order_id}' reserved at '{dto.warehouse_name}' "
        f"(score {dto.score:.1f})"
    )
    click.echo(f"  {'Product':<12} {'Qty':>5} {'Status':<10} Expires")
    click.echo(f"  {'-'*50}")
    for r in dto.reservations:
        click.echo(f"  {r.product_id:<12} {r.quantity:>5} {r.status:<10} {r.expires_at}")


@click.command("confirm")
@click.option("--order", "order_id", required=True, help="Order ID whose payment succeeded.")
@click.option("--cart", "cart_id", default=None, help="Cart to empty once committed.")
def checkout_confirm(order_id: str, cart_id: str | None) -> None:
    """Commit an order's reservations after payment."""
    handler = ConfirmPaymentHandler(manager=reservation_manager(), cart_repo=cart_repository())

    try:
        handler.handle(order_id, cart_id=cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order '{order_id}' committed.")


@click.command("cancel")
@click.option("--order", "order_id", required=True, help="Order ID to cancel.")
@click.option(
    "--reason",
    type=click.Choice(["CANCELLED", "PAYMENT_FAILED"], case_sensitive=False),
    default="CANCELLED",
    help="Why the reservation is released.",
)
def checkout_cancel(order_id: str, reason: str) -> None:
    """Release an order's reserved stock."""
    handler = CancelCheckoutHandler(manager=reservation_manager())

    try:
        handler.handle(order_id, reason=reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order '{order_id}' released.")


@click.command("options")
@click.option("--cart", "cart_id", required=True, help="Cart to evaluate.")
def checkout_options(cart_id: str) -> None:
    """Show per-warehouse pickup availability for a cart."""
    handler = PickupOptionsHandler(cart_repo=cart_repository(), selector=warehouse_selector())

    try:
        options = handler.handle(cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not options:
        click.echo("No warehouses found.")
        return

    for option in options:
        if not option.is_active:
            state = "inactive"
        elif option.immediate_pickup:
            state = "pickup today"
        else:
            state = "incomplete"
        click.echo(f"{option.warehouse_name} ({option.warehouse_id}) - {state}")
        for line in option.lines:
            click.echo(
                f"  {line.product_id:<12} need {line.required:>4} "
                f"have {line.available:>4}  {line.status}"
            )
