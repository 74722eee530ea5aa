"""JSON-file-backed implementation of CartStorage.

One file per session under the carts directory, each holding that
session's CartLine array as written.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from urllib.parse import quote

from storefront.domain.exceptions import UnexpectedError, ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.cart_storage import CartStorage
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCartStorage(CartStorage):

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def load(self, session_key: str) -> list[CartLine]:
        cart_file = self._file(session_key)
        data = cart_file.read()
        try:
            return [self._to_domain(raw) for raw in data]
        except (KeyError, TypeError, ValueError, InvalidOperation, ValidationError) as exc:
            raise UnexpectedError(f"Malformed cart file {cart_file.path}: {exc!r}") from exc

    def save(self, session_key: str, lines: list[CartLine]) -> None:
        self._file(session_key).write([self._to_raw(line) for line in lines])

    def _file(self, session_key: str) -> JsonFile:
        return JsonFile(self._directory / f"{quote(session_key, safe='')}.json")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        return {
            "product_id": line.product_id,
            "name": line.name,
            "brand": line.brand,
            "price": str(line.price.amount),
            "currency": line.price.currency,
            "image": line.image,
            "size": line.size,
            "quantity": line.quantity,
            "selected": line.selected,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLine:
        return CartLine(
            product_id=raw["product_id"],
            name=raw["name"],
            brand=raw["brand"],
            price=Money(Decimal(raw["price"]), raw.get("currency", DEFAULT_CURRENCY)),
            image=raw.get("image", ""),
            size=raw.get("size"),
            quantity=raw["quantity"],
            selected=raw.get("selected", True),
        )
