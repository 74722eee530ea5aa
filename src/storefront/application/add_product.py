"""Application service: Add Product use case (catalog seeding)."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        brand: str,
        price: str,
        sizes: list[str] | None = None,
        image: str = "",
        description: str = "",
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not brand or not brand.strip():
            raise ValidationError("Product brand is required")

        existing = self._product_repo.get_by_name(name)
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        money = Money.of(price)
        if money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        numeric_ids = [int(p.id) for p in all_products if p.id.isdigit()]
        next_id = str(max(numeric_ids) + 1) if numeric_ids else "1"

        product = Product(
            id=next_id,
            name=name.strip(),
            brand=brand.strip(),
            price=money,
            sizes=[s.strip() for s in sizes or [] if s.strip()],
            image=image,
            description=description,
        )
        self._product_repo.save(product)
        return product
