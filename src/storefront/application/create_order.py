"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
This is the only place that coordinates multiple aggregates (Product
lookup + Order creation + order numbering).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from storefront.application.dto import (
    OrderDTO,
    OrderItemSpec,
    ShippingAddressSpec,
    ShippingServiceSpec,
)
from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.shipping import (
    ShippingAddress,
    ShippingService,
    validate_payment_method,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.order_numbering import (
    DEFAULT_MAX_ATTEMPTS,
    OrderNumberingService,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_clock() -> datetime:
    return datetime.now(timezone.utc)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        clock: Clock = utc_clock,
        max_number_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._clock = clock
        self._numbering = OrderNumberingService(order_repo, max_number_attempts)

    def handle(
        self,
        user_id: str,
        item_specs: list[OrderItemSpec],
        shipping_address: ShippingAddressSpec | None,
        shipping_service: ShippingServiceSpec | None,
        payment_method: str | None,
    ) -> OrderDTO:
        """Create a new pending order.

        Steps:
        1. Validate the request shape (items, address, shipping, payment).
        2. Resolve each product id to a Product (fail if not found).
        3. Build OrderItems with *current* catalog data (snapshot).
        4. Number and persist the order in a single insert.
        """
        if not item_specs:
            raise ValidationError("No order items")
        address = self._to_address(shipping_address)
        service = self._to_service(shipping_service)
        payment_method = validate_payment_method(payment_method)

        items: list[OrderItem] = []
        for spec in item_specs:
            product = self._product_repo.get_by_id(spec.product_id)
            if product is None:
                raise NotFoundError(f"Product not found: {spec.product_id}")

            items.append(
                OrderItem(
                    product_id=product.id,
                    name=product.name,
                    brand=product.brand,
                    image=product.image,
                    price=product.price,  # <-- price snapshot
                    quantity=Quantity(spec.quantity),
                    size=spec.size or product.default_size,
                )
            )

        now = self._clock()
        order = Order.create(
            user_id=user_id,
            items=items,
            shipping_address=address,
            shipping_service=service,
            payment_method=payment_method,
            now=now,
        )
        self._numbering.add_numbered(order, now.date())

        logger.info(
            "Created order %s for user %s (total %s)",
            order.order_number, order.user_id, order.total_price,
        )
        return OrderDTO.from_domain(order)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_address(spec: ShippingAddressSpec | None) -> ShippingAddress:
        if spec is None:
            raise ValidationError("Shipping address is required")
        return ShippingAddress(
            full_name=spec.full_name or "",
            phone=spec.phone or "",
            address=spec.address or "",
            city=spec.city or "",
            province=spec.province or "",
            postal_code=spec.postal_code or "",
        )

    @staticmethod
    def _to_service(spec: ShippingServiceSpec | None) -> ShippingService:
        """Resolve the row of the static shipping table named by *spec*.

        The client may echo the cost it was shown; a cost that differs from
        the table is rejected rather than charged.
        """
        if spec is None or not spec.name:
            raise ValidationError("Shipping service is required")
        service = ShippingService.lookup(spec.name)
        if spec.cost is not None and Money.of(spec.cost, service.cost.currency) != service.cost:
            raise ValidationError(
                f"Shipping cost for {service.name} is {service.cost}, got {spec.cost}"
            )
        return service
