"""Concurrent order creation must never hand out the same order number."""

from concurrent.futures import ThreadPoolExecutor

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderItemSpec
from tests.builders import address_spec, service_spec
from tests.fakes import FakeOrderRepository, FakeProductRepository, FixedClock, sample_products

WORKERS = 10


def _place(handler: CreateOrderHandler, user_id: str):
    return handler.handle(
        user_id=user_id,
        item_specs=[OrderItemSpec("p3", 1)],
        shipping_address=address_spec(),
        shipping_service=service_spec(),
        payment_method="COD",
    )


class TestConcurrentOrderNumbers:

    def test_parallel_creations_get_distinct_sequential_numbers(self):
        order_repo = FakeOrderRepository()
        handler = CreateOrderHandler(
            order_repo, FakeProductRepository(sample_products()), clock=FixedClock(),
        )

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            results = list(pool.map(lambda i: _place(handler, f"u{i}"), range(WORKERS)))

        numbers = sorted(dto.order_number for dto in results)
        assert numbers == [f"ORD20250314{seq:04d}" for seq in range(1, WORKERS + 1)]
        assert order_repo.count() == WORKERS
