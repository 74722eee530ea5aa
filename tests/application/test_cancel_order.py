"""Integration tests for the CancelOrder use case."""

import pytest

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.value_objects import Requester
from tests.builders import make_order
from tests.fakes import FakeOrderRepository, FixedClock


def _setup(user_id: str = "u1"):
    order_repo = FakeOrderRepository()
    order = make_order(user_id=user_id)
    order.assign_order_number("ORD202503140001")
    order_repo.add(order)
    return CancelOrderHandler(order_repo, clock=FixedClock()), order_repo, order.id


class TestCancelOrder:

    def test_owner_cancels_with_default_reason(self):
        handler, order_repo, order_id = _setup()
        dto = handler.handle(order_id, Requester("u1"))
        assert dto.status == "cancelled"
        assert dto.cancel_reason == "cancelled by user"
        assert dto.status_history[-1].note == "cancelled by user"
        assert order_repo.get_by_id(order_id).status == OrderStatus.CANCELLED

    def test_reason_kept_verbatim(self):
        handler, _, order_id = _setup()
        dto = handler.handle(order_id, Requester("u1"), reason="Found it cheaper")
        assert dto.cancel_reason == "Found it cheaper"
        assert dto.status_history[-1].note == "Found it cheaper"

    def test_admin_cancels_confirmed_order(self):
        handler, order_repo, order_id = _setup()
        UpdateOrderStatusHandler(order_repo).handle(order_id, "confirmed")
        dto = handler.handle(order_id, Requester("boss", is_admin=True))
        assert dto.status == "cancelled"

    def test_other_user_forbidden(self):
        handler, order_repo, order_id = _setup()
        with pytest.raises(ForbiddenError, match="Not authorized to cancel"):
            handler.handle(order_id, Requester("u2"))
        assert order_repo.get_by_id(order_id).status == OrderStatus.PENDING

    def test_shipped_order_cannot_be_cancelled(self):
        handler, order_repo, order_id = _setup()
        UpdateOrderStatusHandler(order_repo).handle(order_id, "shipped")
        with pytest.raises(InvalidTransitionError, match="Cannot cancel order with status: shipped"):
            handler.handle(order_id, Requester("u1"))

    def test_cancelling_twice_fails(self):
        handler, _, order_id = _setup()
        handler.handle(order_id, Requester("u1"))
        with pytest.raises(InvalidTransitionError, match="status: cancelled"):
            handler.handle(order_id, Requester("u1"))

    def test_unknown_order(self):
        handler, _, _ = _setup()
        with pytest.raises(NotFoundError):
            handler.handle(42, Requester("u1"))
