"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its item snapshots and its
status history. All status state-machine rules are enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    ForbiddenError,
    InvalidTransitionError,
    ValidationError,
)
from storefront.domain.model.shipping import (
    ShippingAddress,
    ShippingService,
    validate_payment_method,
)
from storefront.domain.model.value_objects import Money, Quantity, Requester


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    @staticmethod
    def parse(value: OrderStatus | str) -> OrderStatus:
        """Coerce a raw status string, rejecting anything unrecognised."""
        if isinstance(value, OrderStatus):
            return value
        try:
            return OrderStatus(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidTransitionError(f"Invalid status: '{value}'") from exc


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({
        OrderStatus.CONFIRMED,
        OrderStatus.SHIPPED,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.CONFIRMED: frozenset({
        OrderStatus.SHIPPED,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.SHIPPED: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})

DEFAULT_STATUS_NOTES = {
    OrderStatus.PENDING: "awaiting confirmation",
    OrderStatus.CONFIRMED: "order confirmed by admin",
    OrderStatus.SHIPPED: "order is being shipped",
    OrderStatus.COMPLETED: "order completed",
    OrderStatus.CANCELLED: "order cancelled",
}

CREATED_NOTE = "order created"
DEFAULT_CANCEL_REASON = "cancelled by user"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StatusChange:
    status: OrderStatus
    note: str
    timestamp: datetime


@dataclass(frozen=True)
class OrderItem:
    """Snapshot of a catalog product at order-creation time.

    Later catalog edits (price, name, image) never reach a placed order.
    """

    product_id: str
    name: str
    brand: str
    image: str
    price: Money  # locked at order-creation time
    quantity: Quantity
    size: str | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: str
    items: list[OrderItem]
    shipping_address: ShippingAddress
    shipping_service: ShippingService
    payment_method: str
    status: OrderStatus = OrderStatus.PENDING
    status_history: list[StatusChange] = field(default_factory=list)
    order_number: str | None = None
    cancel_reason: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    version: int = 0

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderItem],
        shipping_address: ShippingAddress | None,
        shipping_service: ShippingService | None,
        payment_method: str | None,
        now: datetime | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not user_id or not str(user_id).strip():
            raise ValidationError("User id is required")
        if not items:
            raise ValidationError("No order items")
        if shipping_address is None:
            raise ValidationError("Shipping address is required")
        if shipping_service is None:
            raise ValidationError("Shipping service is required")
        payment_method = validate_payment_method(payment_method)

        now = now or _utcnow()
        return Order(
            id=None,
            user_id=str(user_id),
            items=list(items),
            shipping_address=shipping_address,
            shipping_service=shipping_service,
            payment_method=payment_method,
            status=OrderStatus.PENDING,
            status_history=[StatusChange(OrderStatus.PENDING, CREATED_NOTE, now)],
            created_at=now,
            updated_at=now,
        )

    def assign_order_number(self, order_number: str) -> None:
        """Set the human-readable number; only allowed before first persist."""
        if self.id is not None:
            raise ValidationError(
                f"Order number of order #{self.id} is immutable ({self.order_number})"
            )
        self.order_number = order_number

    # --- Access ---------------------------------------------------------------

    def ensure_accessible_by(self, requester: Requester, action: str = "view") -> None:
        if not requester.can_access(self.user_id):
            raise ForbiddenError(f"Not authorized to {action} this order")

    # --- State transitions ----------------------------------------------------

    def update_status(
        self,
        new_status: OrderStatus | str,
        note: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Move to *new_status*, appending a history entry.

        Raises InvalidTransitionError for unrecognised statuses, for
        orders already in a terminal status, and for transitions outside
        ``ALLOWED_TRANSITIONS``.
        """
        target = OrderStatus.parse(new_status)
        if self.status.is_terminal:
            raise InvalidTransitionError(
                f"Cannot update order that is already {self.status.value}"
            )
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Cannot change order status from {self.status.value} to {target.value}"
            )
        if target == OrderStatus.CANCELLED:
            self.cancel_reason = note or DEFAULT_STATUS_NOTES[target]
        self._record(target, note or DEFAULT_STATUS_NOTES[target], now)

    def cancel(
        self,
        requester: Requester,
        reason: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Transition PENDING|CONFIRMED -> CANCELLED on behalf of *requester*."""
        self.ensure_accessible_by(requester, action="cancel")
        if self.status not in CANCELLABLE_STATUSES:
            raise InvalidTransitionError(
                f"Cannot cancel order with status: {self.status.value}"
            )
        reason = reason.strip() if reason and reason.strip() else DEFAULT_CANCEL_REASON
        self.cancel_reason = reason
        self._record(OrderStatus.CANCELLED, reason, now)

    # --- Computed properties --------------------------------------------------

    @property
    def items_price(self) -> Money:
        return Money.total(
            (item.line_total for item in self.items), self.shipping_service.cost.currency
        )

    @property
    def shipping_price(self) -> Money:
        return self.shipping_service.cost

    @property
    def total_price(self) -> Money:
        return self.items_price + self.shipping_price

    # --- Internal helpers -----------------------------------------------------

    def _record(self, status: OrderStatus, note: str, now: datetime | None) -> None:
        now = now or _utcnow()
        self.status = status
        self.status_history.append(StatusChange(status, note, now))
        self.updated_at = now
