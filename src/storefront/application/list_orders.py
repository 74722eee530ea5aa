"""Application service: List Orders use cases (queries)."""

from __future__ import annotations

import math

from storefront.application.dto import OrderDTO, OrderPageDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

DEFAULT_PAGE_SIZE = 20


def parse_status_filter(status: str | None) -> OrderStatus | None:
    """``None``, ``""`` and ``"all"`` mean no filter."""
    if status is None or not status.strip() or status.strip().lower() == "all":
        return None
    try:
        return OrderStatus(status.strip().lower())
    except ValueError as exc:
        raise ValidationError(f"Unknown status filter: '{status}'") from exc


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def for_user(self, user_id: str) -> list[OrderDTO]:
        """The user's own orders, newest first."""
        return [OrderDTO.from_domain(o) for o in self._order_repo.list_by_user(user_id)]

    def all(
        self,
        status: str | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> OrderPageDTO:
        """Every order, newest first, one page at a time."""
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if page_size < 1:
            raise ValidationError("Page size must be 1 or greater")

        status_filter = parse_status_filter(status)
        total = self._order_repo.count(status_filter)
        orders = self._order_repo.find(
            status=status_filter,
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        return OrderPageDTO(
            orders=[OrderDTO.from_domain(o) for o in orders],
            total_pages=math.ceil(total / page_size),
            current_page=page,
            total_orders=total,
        )
