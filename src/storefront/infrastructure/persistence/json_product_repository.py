"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(str(product_id))

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.strip().lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {
            str(item["id"]): Product(
                id=str(item["id"]),
                name=item["name"],
                brand=item.get("brand", ""),
                price=Money(Decimal(str(item["price"])), item.get("currency", DEFAULT_CURRENCY)),
                sizes=[str(s) for s in item.get("sizes", [])],
                image=item.get("image", ""),
                description=item.get("description", ""),
            )
            for item in self._file.read()
        }

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.write([
            {
                "id": p.id,
                "name": p.name,
                "brand": p.brand,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "sizes": p.sizes,
                "image": p.image,
                "description": p.description,
            }
            for p in products.values()
        ])
