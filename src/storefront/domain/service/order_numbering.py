"""Domain service: Order Numbering.

Order numbers look like ``ORD20250314`` + a 4-digit daily sequence. The
next sequence is read from the largest number already stored for the day,
so two concurrent creations can compute the same candidate. The
repository rejects duplicate numbers with a ConflictError; this service
then recomputes from the new maximum and tries again.
"""

from __future__ import annotations

import logging
from datetime import date

from storefront.domain.exceptions import ConflictError, ValidationError
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = "ORD"
SEQUENCE_DIGITS = 4
MAX_DAILY_SEQUENCE = 10**SEQUENCE_DIGITS - 1
DEFAULT_MAX_ATTEMPTS = 25


def day_prefix(day: date) -> str:
    return f"{ORDER_NUMBER_PREFIX}{day:%Y%m%d}"


def format_order_number(day: date, sequence: int) -> str:
    if not 1 <= sequence <= MAX_DAILY_SEQUENCE:
        raise ConflictError(
            f"Daily order sequence exhausted for {day:%Y-%m-%d} (got {sequence})"
        )
    return f"{day_prefix(day)}{sequence:0{SEQUENCE_DIGITS}d}"


def next_order_number(day: date, last_number: str | None) -> str:
    """Return the number following *last_number* for *day* (or the first one)."""
    if last_number is None:
        return format_order_number(day, 1)
    prefix = day_prefix(day)
    tail = last_number[len(prefix):]
    if not last_number.startswith(prefix) or len(tail) != SEQUENCE_DIGITS or not tail.isdigit():
        raise ValidationError(f"Malformed order number for {prefix}: '{last_number}'")
    return format_order_number(day, int(tail) + 1)


class OrderNumberingService:

    def __init__(
        self,
        order_repo: OrderRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._order_repo = order_repo
        self._max_attempts = max_attempts

    def add_numbered(self, order: Order, day: date) -> Order:
        """Assign the next free number for *day* and insert the order.

        Each attempt reads the day's current maximum, so a lost race is
        resolved by moving past the winner's number.
        """
        prefix = day_prefix(day)
        for attempt in range(1, self._max_attempts + 1):
            candidate = next_order_number(day, self._order_repo.last_order_number(prefix))
            order.assign_order_number(candidate)
            try:
                self._order_repo.add(order)
            except ConflictError:
                logger.warning(
                    "Order number %s already taken (attempt %d/%d), retrying",
                    candidate, attempt, self._max_attempts,
                )
                continue
            return order

        raise ConflictError(
            f"Could not allocate an order number for {day:%Y-%m-%d} "
            f"after {self._max_attempts} attempts"
        )
