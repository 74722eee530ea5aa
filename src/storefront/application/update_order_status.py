"""Application service: Update Order Status use case (admin)."""

from __future__ import annotations

import logging

from storefront.application.create_order import Clock, utc_clock
from storefront.application.dto import OrderDTO
from storefront.application.order_updates import (
    DEFAULT_UPDATE_ATTEMPTS,
    apply_order_update,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        clock: Clock = utc_clock,
        max_attempts: int = DEFAULT_UPDATE_ATTEMPTS,
    ) -> None:
        self._order_repo = order_repo
        self._clock = clock
        self._max_attempts = max_attempts

    def handle(self, order_id: int, status: str, note: str | None = None) -> OrderDTO:
        # Unknown statuses are rejected before the order is even loaded.
        target = OrderStatus.parse(status)

        order = apply_order_update(
            self._order_repo,
            order_id,
            lambda o: o.update_status(target, note, now=self._clock()),
            self._max_attempts,
        )

        logger.info("Order %s moved to %s", order.order_number, target.value)
        return OrderDTO.from_domain(order)
