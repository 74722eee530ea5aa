"""Unit tests for the Order aggregate and its status state machine."""

from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import (
    ForbiddenError,
    InvalidTransitionError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.shipping import ShippingService
from storefront.domain.model.value_objects import Money, Requester
from tests.builders import make_item, make_order, shipping_address

OWNER = Requester("u1")
STRANGER = Requester("u2")
ADMIN = Requester("admin", is_admin=True)


def _order_in(status: OrderStatus) -> Order:
    order = make_order()
    order.id = 1
    order.status = status
    return order


class TestOrderCreation:

    def test_happy_path(self):
        now = datetime(2025, 3, 14, 10, 0, tzinfo=timezone.utc)
        order = Order.create(
            user_id="u1",
            items=[make_item(price=20000, qty=2)],
            shipping_address=shipping_address(),
            shipping_service=ShippingService("JNE Regular", Money.of(15000), "3-4 days"),
            payment_method="COD",
            now=now,
        )
        assert order.status == OrderStatus.PENDING
        assert order.id is None  # assigned by repository
        assert order.created_at == now == order.updated_at

    def test_history_starts_with_pending(self):
        order = make_order()
        assert len(order.status_history) == 1
        assert order.status_history[0].status == OrderStatus.PENDING
        assert order.status_history[0].note == "order created"

    def test_prices(self):
        order = make_order(
            items=[make_item(price=20000, qty=2), make_item(price=15000, qty=1, product_id="p2")],
            shipping_cost=15000,
        )
        assert order.items_price == Money.of(55000)
        assert order.shipping_price == Money.of(15000)
        assert order.total_price == Money.of(70000)

    def test_total_is_items_plus_shipping_with_cents(self):
        order = make_order(items=[make_item(price="19999.99", qty=3)], shipping_cost=1)
        assert order.total_price == order.items_price + order.shipping_price
        assert order.total_price == Money.of("60000.97")

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="No order items"):
            Order.create("u1", [], shipping_address(), None, "COD")

    def test_missing_shipping_service_rejected(self):
        with pytest.raises(ValidationError, match="Shipping service is required"):
            Order.create("u1", [make_item()], shipping_address(), None, "COD")

    def test_missing_payment_method_rejected(self):
        with pytest.raises(ValidationError, match="Payment method is required"):
            Order.create(
                "u1", [make_item()], shipping_address(),
                ShippingService("JNE Regular", Money.of(15000), "3-4 days"), "",
            )

    def test_unknown_payment_method_rejected(self):
        with pytest.raises(ValidationError, match="Unknown payment method"):
            Order.create(
                "u1", [make_item()], shipping_address(),
                ShippingService("JNE Regular", Money.of(15000), "3-4 days"), "Bitcoin",
            )

    def test_order_number_immutable_once_persisted(self):
        order = make_order()
        order.assign_order_number("ORD202503140001")
        order.id = 7
        with pytest.raises(ValidationError, match="immutable"):
            order.assign_order_number("ORD202503140002")


class TestUpdateStatus:

    def test_pending_to_shipped_allowed(self):
        order = _order_in(OrderStatus.PENDING)
        order.update_status("shipped")
        assert order.status == OrderStatus.SHIPPED
        assert order.status_history[-1].status == OrderStatus.SHIPPED

    def test_default_note_per_status(self):
        order = _order_in(OrderStatus.PENDING)
        order.update_status(OrderStatus.CONFIRMED)
        assert order.status_history[-1].note == "order confirmed by admin"

    def test_custom_note_kept(self):
        order = _order_in(OrderStatus.CONFIRMED)
        order.update_status("shipped", note="JNE resi 123")
        assert order.status_history[-1].note == "JNE resi 123"

    def test_history_is_appended(self):
        order = make_order()
        order.update_status("confirmed")
        order.update_status("shipped")
        order.update_status("completed")
        assert [h.status.value for h in order.status_history] == [
            "pending", "confirmed", "shipped", "completed",
        ]

    @pytest.mark.parametrize("target", ["pending", "confirmed", "shipped", "completed", "cancelled"])
    def test_completed_is_terminal(self, target):
        order = _order_in(OrderStatus.COMPLETED)
        with pytest.raises(InvalidTransitionError, match="already completed"):
            order.update_status(target)

    def test_cancelled_is_terminal(self):
        order = _order_in(OrderStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError, match="already cancelled"):
            order.update_status("confirmed")

    def test_unknown_status_rejected(self):
        order = _order_in(OrderStatus.PENDING)
        with pytest.raises(InvalidTransitionError, match="Invalid status"):
            order.update_status("lost")

    def test_shipped_cannot_be_cancelled(self):
        order = _order_in(OrderStatus.SHIPPED)
        with pytest.raises(InvalidTransitionError, match="from shipped to cancelled"):
            order.update_status("cancelled")

    def test_no_going_backwards(self):
        order = _order_in(OrderStatus.SHIPPED)
        with pytest.raises(InvalidTransitionError):
            order.update_status("pending")

    def test_admin_cancel_via_status_records_reason(self):
        order = _order_in(OrderStatus.CONFIRMED)
        order.update_status("cancelled")
        assert order.cancel_reason == "order cancelled"

    def test_failed_transition_leaves_order_untouched(self):
        order = _order_in(OrderStatus.COMPLETED)
        history = list(order.status_history)
        with pytest.raises(InvalidTransitionError):
            order.update_status("shipped")
        assert order.status == OrderStatus.COMPLETED
        assert order.status_history == history


class TestCancel:

    def test_owner_cancels_pending(self):
        order = _order_in(OrderStatus.PENDING)
        order.cancel(OWNER)
        assert order.status == OrderStatus.CANCELLED

    def test_default_reason_in_history(self):
        order = _order_in(OrderStatus.PENDING)
        order.cancel(OWNER)
        assert order.cancel_reason == "cancelled by user"
        assert order.status_history[-1].note == "cancelled by user"
        assert order.status_history[-1].status == OrderStatus.CANCELLED

    def test_custom_reason(self):
        order = _order_in(OrderStatus.CONFIRMED)
        order.cancel(OWNER, reason="Wrong size")
        assert order.cancel_reason == "Wrong size"
        assert order.status_history[-1].note == "Wrong size"

    def test_admin_may_cancel_others_orders(self):
        order = _order_in(OrderStatus.CONFIRMED)
        order.cancel(ADMIN)
        assert order.status == OrderStatus.CANCELLED

    def test_stranger_forbidden(self):
        order = _order_in(OrderStatus.PENDING)
        with pytest.raises(ForbiddenError):
            order.cancel(STRANGER)
        assert order.status == OrderStatus.PENDING

    @pytest.mark.parametrize(
        "status", [OrderStatus.SHIPPED, OrderStatus.COMPLETED, OrderStatus.CANCELLED]
    )
    def test_not_cancellable(self, status):
        order = _order_in(status)
        with pytest.raises(InvalidTransitionError, match="Cannot cancel order"):
            order.cancel(OWNER)


class TestAccess:

    def test_owner_and_admin_allowed(self):
        order = make_order(user_id="u1")
        order.ensure_accessible_by(OWNER)
        order.ensure_accessible_by(ADMIN)

    def test_stranger_forbidden(self):
        with pytest.raises(ForbiddenError, match="Not authorized to view"):
            make_order(user_id="u1").ensure_accessible_by(STRANGER)
