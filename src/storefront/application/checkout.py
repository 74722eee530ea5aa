"""Application service: Checkout use case.

Bridges the Cart Store and the order ledger: the selected cart lines
become an order, and only once the order exists are exactly those lines
removed from the cart. Any failure leaves the cart as it was.
"""

from __future__ import annotations

import logging

from storefront.application.cart_store import CartStore
from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import (
    OrderDTO,
    OrderItemSpec,
    ShippingAddressSpec,
    ShippingServiceSpec,
)
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Requester

logger = logging.getLogger(__name__)


class CheckoutHandler:

    def __init__(self, create_order: CreateOrderHandler) -> None:
        self._create_order = create_order

    def handle(
        self,
        cart: CartStore,
        requester: Requester,
        shipping_address: ShippingAddressSpec | None,
        shipping_service: ShippingServiceSpec | None,
        payment_method: str | None,
    ) -> OrderDTO:
        selected = cart.selected_lines()
        if not selected:
            raise ValidationError("Nothing selected for checkout")

        order = self._create_order.handle(
            user_id=requester.user_id,
            item_specs=[
                OrderItemSpec(product_id=line.product_id, quantity=line.quantity, size=line.size)
                for line in selected
            ],
            shipping_address=shipping_address,
            shipping_service=shipping_service,
            payment_method=payment_method,
        )

        cart.remove_lines({line.key for line in selected})
        logger.info(
            "Checkout of %d line(s) for %s produced order %s",
            len(selected), requester.user_id, order.order_number,
        )
        return order
