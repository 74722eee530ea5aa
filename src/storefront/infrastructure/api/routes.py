"""HTTP routes for orders plus the static checkout tables."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.order_administration import OrderAdministration
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.model.shipping import PAYMENT_METHODS, SHIPPING_SERVICES
from storefront.domain.model.value_objects import Requester
from storefront.infrastructure.api.dependencies import (
    get_administration,
    get_cancel_order,
    get_create_order,
    get_list_orders,
    get_requester,
    get_settings,
    get_show_order,
    require_admin,
)
from storefront.infrastructure.api.schemas import (
    CancelOrderIn,
    CreateOrderIn,
    OrderOut,
    OrderPageOut,
    OrderStatsOut,
    ShippingServiceOut,
    UpdateStatusIn,
)
from storefront.infrastructure.config import Settings

orders_router = APIRouter(prefix="/orders", tags=["orders"])
meta_router = APIRouter(tags=["meta"])


# Static paths are declared before "/{order_id}" so they are matched first.


@orders_router.post("", status_code=status.HTTP_201_CREATED, response_model=OrderOut)
def create_order(
    body: CreateOrderIn,
    requester: Requester = Depends(get_requester),
    handler: CreateOrderHandler = Depends(get_create_order),
) -> OrderOut:
    dto = handler.handle(
        user_id=requester.user_id,
        item_specs=[item.to_spec() for item in body.items],
        shipping_address=body.shipping_address.to_spec() if body.shipping_address else None,
        shipping_service=body.shipping_service.to_spec() if body.shipping_service else None,
        payment_method=body.payment_method,
    )
    return OrderOut.from_dto(dto)


@orders_router.get("/myorders", response_model=list[OrderOut])
def my_orders(
    requester: Requester = Depends(get_requester),
    handler: ListOrdersHandler = Depends(get_list_orders),
) -> list[OrderOut]:
    return [OrderOut.from_dto(dto) for dto in handler.for_user(requester.user_id)]


@orders_router.get("/admin/all", response_model=OrderPageOut)
def all_orders(
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(1),
    limit: int | None = Query(None),
    requester: Requester = Depends(require_admin),
    administration: OrderAdministration = Depends(get_administration),
    settings: Settings = Depends(get_settings),
) -> OrderPageOut:
    page_dto = administration.list_all(
        requester,
        status=status_filter,
        page=page,
        page_size=limit if limit is not None else settings.default_page_size,
    )
    return OrderPageOut.from_dto(page_dto)


@orders_router.get("/admin/stats", response_model=OrderStatsOut)
def order_stats(
    requester: Requester = Depends(require_admin),
    administration: OrderAdministration = Depends(get_administration),
) -> OrderStatsOut:
    return OrderStatsOut.from_dto(administration.stats(requester))


@orders_router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    requester: Requester = Depends(get_requester),
    handler: ShowOrderHandler = Depends(get_show_order),
) -> OrderOut:
    return OrderOut.from_dto(handler.handle(order_id, requester))


@orders_router.put("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    body: UpdateStatusIn,
    requester: Requester = Depends(require_admin),
    administration: OrderAdministration = Depends(get_administration),
) -> OrderOut:
    dto = administration.update_status(requester, order_id, body.status, body.note)
    return OrderOut.from_dto(dto)


@orders_router.put("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(
    order_id: int,
    body: CancelOrderIn | None = None,
    requester: Requester = Depends(get_requester),
    handler: CancelOrderHandler = Depends(get_cancel_order),
) -> OrderOut:
    reason = body.reason if body is not None else None
    return OrderOut.from_dto(handler.handle(order_id, requester, reason))


@meta_router.get("/shipping-services", response_model=list[ShippingServiceOut])
def shipping_services() -> list[ShippingServiceOut]:
    return [
        ShippingServiceOut(name=s.name, cost=s.cost.amount, estimated_days=s.estimated_days)
        for s in SHIPPING_SERVICES
    ]


@meta_router.get("/payment-methods", response_model=list[str])
def payment_methods() -> list[str]:
    return list(PAYMENT_METHODS)


@meta_router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
