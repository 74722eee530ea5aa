"""FastAPI application factory.

Handlers are built once per app and kept on ``app.state``; tests pass
in-memory repositories instead of the JSON-backed ones.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import Clock, CreateOrderHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.order_administration import OrderAdministration
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure import bootstrap
from storefront.infrastructure.api.exception_handlers import register_exception_handlers
from storefront.infrastructure.api.routes import meta_router, orders_router
from storefront.infrastructure.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    order_repo: OrderRepository | None = None,
    product_repo: ProductRepository | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    order_repo = order_repo or bootstrap.order_repository(settings)
    product_repo = product_repo or bootstrap.product_repository(settings)
    clock = clock or bootstrap.clock(settings)

    app = FastAPI(
        title="Storefront Orders API",
        description="Order ledger, checkout and back-office endpoints",
    )

    app.state.settings = settings
    app.state.create_order = CreateOrderHandler(
        order_repo, product_repo, clock, settings.order_number_attempts
    )
    app.state.show_order = ShowOrderHandler(order_repo)
    app.state.list_orders = ListOrdersHandler(order_repo)
    app.state.cancel_order = CancelOrderHandler(order_repo, clock, settings.update_attempts)
    app.state.administration = OrderAdministration(order_repo, clock, settings.update_attempts)

    register_exception_handlers(app)
    app.include_router(orders_router)
    app.include_router(meta_router)

    logger.info("Storefront API ready (data dir %s)", settings.data_dir)
    return app
