import click

from stockroom.infrastructure.cli.cart_commands import (
    cart_add,
    cart_remove,
    cart_show,
    cart_update,
)
from stockroom.infrastructure.cli.checkout_commands import (
    checkout_cancel,
    checkout_confirm,
    checkout_options,
    checkout_place,
)
from stockroom.infrastructure.cli.product_commands import (
    product_add,
    product_deactivate_unstocked,
    product_list,
)
from stockroom.infrastructure.cli.reservation_commands import (
    reservation_show,
    reservation_sweep,
)
from stockroom.infrastructure.cli.stock_commands import stock_adjust, stock_set, stock_show
from stockroom.infrastructure.cli.warehouse_commands import warehouse_add, warehouse_list
from stockroom.infrastructure.logging_config import configure_logging
from stockroom.infrastructure.settings import get_settings


@click.group()
def cli() -> None:
    """Stockroom - inventory reservation and warehouse selection"""
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)


@cli.group()
def warehouse() -> None:
    """Manage warehouses."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def stock() -> None:
    """Manage stock levels."""


@cli.group()
def cart() -> None:
    """Manage carts."""


@cli.group()
def checkout() -> None:
    """Reserve, confirm and cancel orders."""


@cli.group()
def reservation() -> None:
    """Inspect and expire reservations."""


# Register subcommands
warehouse.add_command(warehouse_add)
warehouse.add_command(warehouse_list)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_deactivate_unstocked)
stock.add_command(stock_set)
stock.add_command(stock_adjust)
stock.add_command(stock_show)
cart.add_command(cart_add)
cart.add_command(cart_update)
cart.add_command(cart_remove)
cart.add_command(cart_show)
checkout.add_command(checkout_place)
checkout.add_command(checkout_confirm)
checkout.add_command(checkout_cancel)
checkout.add_command(checkout_options)
reservation.add_command(reservation_show)
reservation.add_command(reservation_sweep)
