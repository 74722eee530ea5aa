"""Request and response bodies of the HTTP API (camelCase on the wire)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from storefront.application.dto import (
    OrderDTO,
    OrderItemSpec,
    OrderPageDTO,
    OrderStatsDTO,
    ShippingAddressSpec,
    ShippingServiceSpec,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests -----------------------------------------------------------------


class OrderItemIn(CamelModel):
    product: str
    quantity: int
    size: str | None = None

    @field_validator("product", "size", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def to_spec(self) -> OrderItemSpec:
        return OrderItemSpec(product_id=self.product, quantity=self.quantity, size=self.size)


class ShippingAddressIn(CamelModel):
    full_name: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None

    def to_spec(self) -> ShippingAddressSpec:
        return ShippingAddressSpec(**self.model_dump())


class ShippingServiceIn(CamelModel):
    name: str | None = None
    cost: Decimal | None = None
    estimated_days: str | None = None

    def to_spec(self) -> ShippingServiceSpec:
        return ShippingServiceSpec(**self.model_dump())


class CreateOrderIn(CamelModel):
    items: list[OrderItemIn] = []
    shipping_address: ShippingAddressIn | None = None
    shipping_service: ShippingServiceIn | None = None
    payment_method: str | None = None


class UpdateStatusIn(CamelModel):
    status: str
    note: str | None = None


class CancelOrderIn(CamelModel):
    reason: str | None = None


# --- Responses ----------------------------------------------------------------


class OrderItemOut(CamelModel):
    product_id: str
    name: str
    brand: str
    image: str
    price: Decimal
    quantity: int
    size: str | None
    line_total: Decimal


class StatusChangeOut(CamelModel):
    status: str
    note: str
    timestamp: datetime


class ShippingAddressOut(CamelModel):
    full_name: str
    phone: str
    address: str
    city: str
    province: str
    postal_code: str


class ShippingServiceOut(CamelModel):
    name: str
    cost: Decimal
    estimated_days: str


class OrderOut(CamelModel):
    id: int
    order_number: str
    user_id: str
    status: str
    items: list[OrderItemOut]
    shipping_address: ShippingAddressOut
    shipping_service: ShippingServiceOut
    payment_method: str
    items_price: Decimal
    shipping_price: Decimal
    total_price: Decimal
    currency: str
    status_history: list[StatusChangeOut]
    cancel_reason: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_dto(cls, dto: OrderDTO) -> OrderOut:
        return cls(
            id=dto.id,
            order_number=dto.order_number,
            user_id=dto.user_id,
            status=dto.status,
            items=[
                OrderItemOut(
                    product_id=i.product_id,
                    name=i.name,
                    brand=i.brand,
                    image=i.image,
                    price=i.price,
                    quantity=i.quantity,
                    size=i.size,
                    line_total=i.line_total,
                )
                for i in dto.items
            ],
            shipping_address=ShippingAddressOut(
                full_name=dto.shipping_address.full_name,
                phone=dto.shipping_address.phone,
                address=dto.shipping_address.address,
                city=dto.shipping_address.city,
                province=dto.shipping_address.province,
                postal_code=dto.shipping_address.postal_code,
            ),
            shipping_service=ShippingServiceOut(
                name=dto.shipping_service.name,
                cost=dto.shipping_service.cost,
                estimated_days=dto.shipping_service.estimated_days,
            ),
            payment_method=dto.payment_method,
            items_price=dto.items_price,
            shipping_price=dto.shipping_price,
            total_price=dto.total_price,
            currency=dto.currency,
            status_history=[
                StatusChangeOut(status=h.status, note=h.note, timestamp=h.timestamp)
                for h in dto.status_history
            ],
            cancel_reason=dto.cancel_reason,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


class OrderPageOut(CamelModel):
    orders: list[OrderOut]
    total_pages: int
    current_page: int
    total_orders: int

    @classmethod
    def from_dto(cls, dto: OrderPageDTO) -> OrderPageOut:
        return cls(
            orders=[OrderOut.from_dto(o) for o in dto.orders],
            total_pages=dto.total_pages,
            current_page=dto.current_page,
            total_orders=dto.total_orders,
        )


class OrderStatsOut(CamelModel):
    total_orders: int
    status_counts: dict[str, int]
    total_revenue: Decimal
    recent_orders: list[OrderOut]

    @classmethod
    def from_dto(cls, dto: OrderStatsDTO) -> OrderStatsOut:
        return cls(
            total_orders=dto.total_orders,
            status_counts=dto.status_counts,
            total_revenue=dto.total_revenue,
            recent_orders=[OrderOut.from_dto(o) for o in dto.recent_orders],
        )
