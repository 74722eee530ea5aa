"""Optimistic load-mutate-save loop shared by order state changes."""

from __future__ import annotations

import logging
from typing import Callable

from storefront.domain.exceptions import ConflictError, NotFoundError
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)

DEFAULT_UPDATE_ATTEMPTS = 5


def apply_order_update(
    order_repo: OrderRepository,
    order_id: int,
    mutate: Callable[[Order], None],
    max_attempts: int = DEFAULT_UPDATE_ATTEMPTS,
) -> Order:
    """Load the order, apply *mutate* and save it, retrying on stale versions.

    Domain errors raised by *mutate* propagate untouched; the order is
    reloaded on every attempt so rules are checked against fresh state.
    """
    for attempt in range(1, max_attempts + 1):
        order = order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")

        mutate(order)
        try:
            order_repo.save(order)
        except ConflictError:
            logger.warning(
                "Order #%s changed concurrently (attempt %d/%d), reloading",
                order_id, attempt, max_attempts,
            )
            continue
        return order

    raise ConflictError(
        f"Order #{order_id} kept changing; gave up after {max_attempts} attempts"
    )
