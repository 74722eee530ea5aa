"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP layers and the application layer
without exposing domain internals to the outside world. Money travels as
a ``Decimal`` amount so callers can format or serialize it exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from storefront.domain.model.order import Order


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the shopper asked for (product id + quantity + size)."""

    product_id: str
    quantity: int
    size: str | None = None


@dataclass(frozen=True)
class ShippingAddressSpec:
    full_name: str | None
    phone: str | None
    address: str | None
    city: str | None
    province: str | None
    postal_code: str | None


@dataclass(frozen=True)
class ShippingServiceSpec:
    name: str | None
    cost: Decimal | int | str | None
    estimated_days: str | None


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    name: str
    brand: str
    image: str
    price: Decimal
    quantity: int
    size: str | None
    line_total: Decimal


@dataclass(frozen=True)
class StatusChangeDTO:
    status: str
    note: str
    timestamp: datetime


@dataclass(frozen=True)
class ShippingAddressDTO:
    full_name: str
    phone: str
    address: str
    city: str
    province: str
    postal_code: str


@dataclass(frozen=True)
class ShippingServiceDTO:
    name: str
    cost: Decimal
    estimated_days: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    user_id: str
    status: str
    items: list[OrderItemDTO]
    shipping_address: ShippingAddressDTO
    shipping_service: ShippingServiceDTO
    payment_method: str
    items_price: Decimal
    shipping_price: Decimal
    total_price: Decimal
    currency: str
    status_history: list[StatusChangeDTO]
    cancel_reason: str | None
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        address = order.shipping_address
        service = order.shipping_service
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,  # type: ignore[arg-type]
            user_id=order.user_id,
            status=order.status.value,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    name=item.name,
                    brand=item.brand,
                    image=item.image,
                    price=item.price.amount,
                    quantity=item.quantity.value,
                    size=item.size,
                    line_total=item.line_total.amount,
                )
                for item in order.items
            ],
            shipping_address=ShippingAddressDTO(
                full_name=address.full_name,
                phone=address.phone,
                address=address.address,
                city=address.city,
                province=address.province,
                postal_code=address.postal_code,
            ),
            shipping_service=ShippingServiceDTO(
                name=service.name,
                cost=service.cost.amount,
                estimated_days=service.estimated_days,
            ),
            payment_method=order.payment_method,
            items_price=order.items_price.amount,
            shipping_price=order.shipping_price.amount,
            total_price=order.total_price.amount,
            currency=order.total_price.currency,
            status_history=[
                StatusChangeDTO(
                    status=change.status.value,
                    note=change.note,
                    timestamp=change.timestamp,
                )
                for change in order.status_history
            ],
            cancel_reason=order.cancel_reason,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


@dataclass(frozen=True)
class OrderPageDTO:
    orders: list[OrderDTO]
    total_pages: int
    current_page: int
    total_orders: int


@dataclass(frozen=True)
class OrderStatsDTO:
    total_orders: int
    status_counts: dict[str, int]
    total_revenue: Decimal
    recent_orders: list[OrderDTO]
