"""CLI commands for inspecting and sweeping reservations."""

from __future__ import annotations

import time

import click

from stockroom.application.show_reservations import ShowReservationsHandler
from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import reservation_manager
from stockroom.infrastructure.settings import get_settings
from stockroom.infrastructure.sweeper import ReservationSweeper


@click.command("show")
@click.option("--order", "order_id", required=True, help="Order ID to display.")
def reservation_show(order_id: str) -> None:
    """Show the reservations of an order."""
    handler = ShowReservationsHandler(manager=reservation_manager())

    try:
        reservations = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order '{order_id}' at warehouse '{reservations[0].warehouse_id}'")
    click.echo(f"  {'Product':<12} {'Qty':>5} {'Status':<10} {'Reason':<15} Expires")
    click.echo(f"  {'-'*66}")
    for r in reservations:
        click.echo(
            f"  {r.product_id:<12} {r.quantity:>5} {r.status:<10} "
            f"{r.release_reason or '-':<15} {r.expires_at}"
        )


@click.command("sweep")
@click.option("--watch", is_flag=True, default=False, help="Keep sweeping until interrupted.")
def reservation_sweep(watch: bool) -> None:
    """Release pending reservations whose hold has expired."""
    sweeper = ReservationSweeper(
        manager=reservation_manager(),
        interval=get_settings().sweep_interval_seconds,
    )

    if not watch:
        released = sweeper.run_once()
        click.echo(f"Released {len(released)} expired order(s).")
        return

    sweeper.start()
    click.echo("Sweeping expired reservations; press Ctrl+C to stop.")
    try:
        while sweeper.running:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        sweeper.stop()
