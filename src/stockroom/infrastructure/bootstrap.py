"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from pathlib import Path

from stockroom.domain.service.availability import AvailabilityChecker
from stockroom.domain.service.cart_validator import CartValidator
from stockroom.domain.service.reservation_manager import ReservationManager
from stockroom.domain.service.stock_ledger import StockLedger
from stockroom.domain.service.warehouse_selector import WarehouseSelector
from stockroom.infrastructure.events import LoggingEventPublisher
from stockroom.infrastructure.persistence.json_cart_repository import JsonCartRepository
from stockroom.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from stockroom.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from stockroom.infrastructure.persistence.json_reservation_repository import (
    JsonReservationRepository,
)
from stockroom.infrastructure.persistence.json_warehouse_repository import (
    JsonWarehouseRepository,
)
from stockroom.infrastructure.settings import get_settings


# Repositories are cached per data directory so every service in one
# process shares the same repositories; the file and pair locks also
# hold against other processes using the directory.


@lru_cache
def _products(data_dir: Path) -> JsonProductRepository:
    return JsonProductRepository(data_dir / "products.json")


@lru_cache
def _warehouses(data_dir: Path) -> JsonWarehouseRepository:
    return JsonWarehouseRepository(data_dir / "warehouses.json")


@lru_cache
def _inventory(data_dir: Path) -> JsonInventoryRepository:
    return JsonInventoryRepository(data_dir / "inventory.json")


@lru_cache
def _reservations(data_dir: Path) -> JsonReservationRepository:
    return JsonReservationRepository(data_dir / "reservations.json")


@lru_cache
def _carts(data_dir: Path) -> JsonCartRepository:
    return JsonCartRepository(data_dir / "carts.json")


def product_repository() -> JsonProductRepository:
    return _products(get_settings().data_dir.resolve())


def warehouse_repository() -> JsonWarehouseRepository:
    return _warehouses(get_settings().data_dir.resolve())


def inventory_repository() -> JsonInventoryRepository:
    return _inventory(get_settings().data_dir.resolve())


def reservation_repository() -> JsonReservationRepository:
    return _reservations(get_settings().data_dir.resolve())


def cart_repository() -> JsonCartRepository:
    return _carts(get_settings().data_dir.resolve())


def stock_ledger() -> StockLedger:
    return StockLedger(inventory_repository())


def availability_checker() -> AvailabilityChecker:
    return AvailabilityChecker(stock_ledger(), warehouse_repository())


def warehouse_selector() -> WarehouseSelector:
    return WarehouseSelector(stock_ledger(), warehouse_repository())


def cart_validator() -> CartValidator:
    return CartValidator(product_repository(), cart_repository(), availability_checker())


def reservation_manager() -> ReservationManager:
    """The process-wide manager; it owns the per-order locks."""
    settings = get_settings()
    return _manager(settings.data_dir.resolve(), settings.hold_window)


@lru_cache
def _manager(data_dir: Path, hold_window: timedelta) -> ReservationManager:
    return ReservationManager(
        ledger=StockLedger(_inventory(data_dir)),
        reservation_repo=_reservations(data_dir),
        product_repo=_products(data_dir),
        warehouse_repo=_warehouses(data_dir),
        publisher=LoggingEventPublisher(),
        hold_window=hold_window,
    )
