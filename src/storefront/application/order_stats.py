"""Application service: Order Statistics use case (query).

Revenue only counts completed orders; pending, confirmed, shipped and
cancelled orders contribute to the counts but not to revenue.
"""

from __future__ import annotations

from decimal import Decimal

from storefront.application.dto import OrderDTO, OrderStatsDTO
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

RECENT_ORDERS_LIMIT = 5


class OrderStatsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> OrderStatsDTO:
        counts = {status.value: 0 for status in OrderStatus}
        revenue = Decimal("0")

        orders = self._order_repo.find()
        for order in orders:
            counts[order.status.value] += 1
            if order.status == OrderStatus.COMPLETED:
                revenue += order.total_price.amount

        return OrderStatsDTO(
            total_orders=len(orders),
            status_counts=counts,
            total_revenue=revenue,
            recent_orders=[OrderDTO.from_domain(o) for o in orders[:RECENT_ORDERS_LIMIT]],
        )
