"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.checkout import CheckoutHandler
from storefront.application.create_order import Clock, CreateOrderHandler
from storefront.application.order_administration import OrderAdministration
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.persistence.json_cart_storage import JsonCartStorage
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def clock(settings: Settings | None = None) -> Clock:
    zone = ZoneInfo((settings or get_settings()).timezone)
    return lambda: datetime.now(zone)


def product_repository(settings: Settings | None = None) -> JsonProductRepository:
    return JsonProductRepository((settings or get_settings()).data_dir / "products.json")


def order_repository(settings: Settings | None = None) -> JsonOrderRepository:
    return JsonOrderRepository((settings or get_settings()).data_dir / "orders.json")


def cart_storage(settings: Settings | None = None) -> JsonCartStorage:
    return JsonCartStorage((settings or get_settings()).data_dir / "carts")


def create_order_handler(settings: Settings | None = None) -> CreateOrderHandler:
    settings = settings or get_settings()
    return CreateOrderHandler(
        order_repo=order_repository(settings),
        product_repo=product_repository(settings),
        clock=clock(settings),
        max_number_attempts=settings.order_number_attempts,
    )


def checkout_handler(settings: Settings | None = None) -> CheckoutHandler:
    return CheckoutHandler(create_order_handler(settings=settings))


def cancel_order_handler(settings: Settings | None = None) -> CancelOrderHandler:
    settings = settings or get_settings()
    return CancelOrderHandler(
        order_repo=order_repository(settings),
        clock=clock(settings),
        max_attempts=settings.update_attempts,
    )


def order_administration(settings: Settings | None = None) -> OrderAdministration:
    settings = settings or get_settings()
    return OrderAdministration(
        order_repo=order_repository(settings),
        clock=clock(settings),
        max_update_attempts=settings.update_attempts,
    )
