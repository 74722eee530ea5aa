"""Product aggregate.

Products live in the catalog, independently of carts and orders. The
ledger only ever reads them; carts and orders keep their own snapshot of
name, brand, image and price.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog."""

    id: str
    name: str
    brand: str
    price: Money
    sizes: list[str] = field(default_factory=list)
    image: str = ""
    description: str = ""

    @property
    def default_size(self) -> str | None:
        return self.sizes[0] if self.sizes else None

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
