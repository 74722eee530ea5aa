"""Application service: Cancel Order use case.

Owners may cancel their own orders and admins may cancel any order, as
long as it has not shipped yet. The reason (or the default one) is kept
on the order and repeated verbatim in the status history.
"""

from __future__ import annotations

import logging

from storefront.application.create_order import Clock, utc_clock
from storefront.application.dto import OrderDTO
from storefront.application.order_updates import (
    DEFAULT_UPDATE_ATTEMPTS,
    apply_order_update,
)
from storefront.domain.model.value_objects import Requester
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        clock: Clock = utc_clock,
        max_attempts: int = DEFAULT_UPDATE_ATTEMPTS,
    ) -> None:
        self._order_repo = order_repo
        self._clock = clock
        self._max_attempts = max_attempts

    def handle(
        self,
        order_id: int,
        requester: Requester,
        reason: str | None = None,
    ) -> OrderDTO:
        order = apply_order_update(
            self._order_repo,
            order_id,
            lambda o: o.cancel(requester, reason, now=self._clock()),
            self._max_attempts,
        )

        logger.info(
            "Order %s cancelled by %s: %s",
            order.order_number, requester.user_id, order.cancel_reason,
        )
        return OrderDTO.from_domain(order)
