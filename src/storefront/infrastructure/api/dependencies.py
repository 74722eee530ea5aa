"""FastAPI dependencies: caller identity and the handlers built by the app."""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request, status

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.order_administration import OrderAdministration
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.model.value_objects import Requester
from storefront.infrastructure.config import Settings

ADMIN_ROLE = "admin"


def get_requester(
    x_user_id: str | None = Header(None),
    x_user_role: str | None = Header(None),
) -> Requester:
    """Identity resolved upstream by the auth gateway and forwarded as headers."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    is_admin = (x_user_role or "").strip().lower() == ADMIN_ROLE
    return Requester(user_id=x_user_id.strip(), is_admin=is_admin)


def require_admin(requester: Requester = Depends(get_requester)) -> Requester:
    if not requester.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return requester


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_create_order(request: Request) -> CreateOrderHandler:
    return request.app.state.create_order


def get_show_order(request: Request) -> ShowOrderHandler:
    return request.app.state.show_order


def get_list_orders(request: Request) -> ListOrdersHandler:
    return request.app.state.list_orders


def get_cancel_order(request: Request) -> CancelOrderHandler:
    return request.app.state.cancel_order


def get_administration(request: Request) -> OrderAdministration:
    return request.app.state.administration
