"""JSON-file-backed implementation of OrderRepository.

The whole ledger lives in one JSON array. Every read-check-write runs
under a lock, which gives ``add`` its unique-order-number guarantee and
``save`` its version check within one process.

The lock is an in-process ``threading.RLock`` shared by every repository
opened on the same file, so a data directory must have a single writing
process: run either ``storefront serve`` or the writing CLI commands
against it, not both at once.
"""

from __future__ import annotations

import threading
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from storefront.domain.exceptions import ConflictError, UnexpectedError, ValidationError
from storefront.domain.model.order import Order, OrderItem, OrderStatus, StatusChange
from storefront.domain.model.shipping import ShippingAddress, ShippingService
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile

_FILE_LOCKS: dict[Path, threading.RLock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(file_path: Path) -> threading.RLock:
    with _FILE_LOCKS_GUARD:
        return _FILE_LOCKS.setdefault(file_path.resolve(), threading.RLock())


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)
        self._lock = _lock_for(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.read():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def add(self, order: Order) -> None:
        with self._lock:
            orders = self._file.read()
            if any(raw["order_number"] == order.order_number for raw in orders):
                raise ConflictError(f"Order number {order.order_number} already exists")

            next_id = max((raw["id"] for raw in orders), default=0) + 1
            raw = self._to_raw(order)
            raw["id"] = next_id
            orders.append(raw)
            self._file.write(orders)
            order.id = next_id

    def save(self, order: Order) -> None:
        with self._lock:
            orders = self._file.read()
            for i, raw in enumerate(orders):
                if raw["id"] != order.id:
                    continue
                if raw.get("version", 0) != order.version:
                    raise ConflictError(
                        f"Order #{order.id} was modified concurrently "
                        f"(stored version {raw.get('version', 0)}, have {order.version})"
                    )
                updated = self._to_raw(order)
                updated["version"] = order.version + 1
                orders[i] = updated
                self._file.write(orders)
                order.version += 1
                return
        raise ConflictError(f"Order #{order.id} does not exist; use add() for new orders")

    def last_order_number(self, prefix: str) -> str | None:
        numbers = [
            raw["order_number"]
            for raw in self._file.read()
            if raw["order_number"].startswith(prefix)
        ]
        return max(numbers, default=None)

    def list_by_user(self, user_id: str) -> list[Order]:
        return [o for o in self._newest_first() if o.user_id == user_id]

    def find(
        self,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Order]:
        orders = [o for o in self._newest_first() if status is None or o.status == status]
        end = None if limit is None else offset + limit
        return orders[offset:end]

    def count(self, status: OrderStatus | None = None) -> int:
        return sum(
            1 for raw in self._file.read()
            if status is None or raw["status"] == status.value
        )

    # --- Serialization --------------------------------------------------------

    def _newest_first(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._file.read()]
        return sorted(orders, key=lambda o: (o.created_at, o.id or 0), reverse=True)

    @staticmethod
    def _to_raw(order: Order) -> dict:
        address = order.shipping_address
        service = order.shipping_service
        return {
            "id": order.id,
            "order_number": order.order_number,
            "user_id": order.user_id,
            "status": order.status.value,
            "items": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "brand": item.brand,
                    "image": item.image,
                    "price": str(item.price.amount),
                    "currency": item.price.currency,
                    "quantity": item.quantity.value,
                    "size": item.size,
                }
                for item in order.items
            ],
            "shipping_address": {
                "full_name": address.full_name,
                "phone": address.phone,
                "address": address.address,
                "city": address.city,
                "province": address.province,
                "postal_code": address.postal_code,
            },
            "shipping_service": {
                "name": service.name,
                "cost": str(service.cost.amount),
                "currency": service.cost.currency,
                "estimated_days": service.estimated_days,
            },
            "payment_method": order.payment_method,
            "items_price": str(order.items_price.amount),
            "shipping_price": str(order.shipping_price.amount),
            "total_price": str(order.total_price.amount),
            "status_history": [
                {
                    "status": change.status.value,
                    "note": change.note,
                    "timestamp": change.timestamp.isoformat(),
                }
                for change in order.status_history
            ],
            "cancel_reason": order.cancel_reason,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "version": order.version,
        }

    @classmethod
    def _to_domain(cls, raw: dict) -> Order:
        try:
            return cls._build_order(raw)
        except (KeyError, TypeError, ValueError, InvalidOperation, ValidationError) as exc:
            order_id = raw.get("id") if isinstance(raw, dict) else None
            raise UnexpectedError(f"Malformed order record #{order_id}: {exc!r}") from exc

    @staticmethod
    def _build_order(raw: dict) -> Order:
        service = raw["shipping_service"]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=[
                OrderItem(
                    product_id=i["product_id"],
                    name=i["name"],
                    brand=i["brand"],
                    image=i.get("image", ""),
                    price=Money(Decimal(i["price"]), i.get("currency", DEFAULT_CURRENCY)),
                    quantity=Quantity(i["quantity"]),
                    size=i.get("size"),
                )
                for i in raw["items"]
            ],
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            shipping_service=ShippingService(
                name=service["name"],
                cost=Money(Decimal(service["cost"]), service.get("currency", DEFAULT_CURRENCY)),
                estimated_days=service["estimated_days"],
            ),
            payment_method=raw["payment_method"],
            status=OrderStatus(raw["status"]),
            status_history=[
                StatusChange(
                    status=OrderStatus(h["status"]),
                    note=h["note"],
                    timestamp=datetime.fromisoformat(h["timestamp"]),
                )
                for h in raw["status_history"]
            ],
            order_number=raw["order_number"],
            cancel_reason=raw.get("cancel_reason"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            version=raw.get("version", 0),
        )
