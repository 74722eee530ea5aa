"""Application service: Order Administration.

Back-office facade over the ledger's status updates, listing and stats.
It holds no state; it only refuses non-admin requesters before
delegating.
"""

from __future__ import annotations

from storefront.application.create_order import Clock, utc_clock
from storefront.application.dto import OrderDTO, OrderPageDTO, OrderStatsDTO
from storefront.application.list_orders import DEFAULT_PAGE_SIZE, ListOrdersHandler
from storefront.application.order_stats import OrderStatsHandler
from storefront.application.order_updates import DEFAULT_UPDATE_ATTEMPTS
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import ForbiddenError
from storefront.domain.model.value_objects import Requester
from storefront.domain.repository.order_repository import OrderRepository


class OrderAdministration:

    def __init__(
        self,
        order_repo: OrderRepository,
        clock: Clock = utc_clock,
        max_update_attempts: int = DEFAULT_UPDATE_ATTEMPTS,
    ) -> None:
        self._update_status = UpdateOrderStatusHandler(order_repo, clock, max_update_attempts)
        self._list_orders = ListOrdersHandler(order_repo)
        self._stats = OrderStatsHandler(order_repo)

    def update_status(
        self,
        requester: Requester,
        order_id: int,
        status: str,
        note: str | None = None,
    ) -> OrderDTO:
        self._require_admin(requester)
        return self._update_status.handle(order_id, status, note)

    def list_all(
        self,
        requester: Requester,
        status: str | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> OrderPageDTO:
        self._require_admin(requester)
        return self._list_orders.all(status=status, page=page, page_size=page_size)

    def stats(self, requester: Requester) -> OrderStatsDTO:
        self._require_admin(requester)
        return self._stats.handle()

    @staticmethod
    def _require_admin(requester: Requester) -> None:
        if not requester.is_admin:
            raise ForbiddenError("Admin access required")
