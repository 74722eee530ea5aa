"""Cart aggregate: the shopper's in-progress selection.

The cart is pure in-memory state. Persistence is the job of the
application-level ``CartStore`` which writes the lines through a storage
port after every mutation.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money

LineKey = tuple[str, str | None]


@dataclass
class CartLine:
    """One product + size + quantity selection.

    ``price`` is the catalog price when the line was added. It is only used
    for cart totals; checkout prices the order from the catalog again.
    """

    product_id: str
    name: str
    brand: str
    price: Money
    image: str
    size: str | None
    quantity: int = 1
    selected: bool = True

    @property
    def key(self) -> LineKey:
        return (self.product_id, self.size)

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity


@dataclass(frozen=True)
class CartSummary:
    count: int  # units
    lines: int
    total: Money


@dataclass(frozen=True)
class CartTotals:
    all: CartSummary
    selected: CartSummary


class Cart:
    """Ordered collection of CartLines, unique by ``(product_id, size)``."""

    def __init__(self, lines: list[CartLine] | None = None) -> None:
        self._lines: list[CartLine] = list(lines or [])

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def all_selected(self) -> bool:
        return bool(self._lines) and all(line.selected for line in self._lines)

    # --- Mutations ------------------------------------------------------------

    def add_line(self, product: Product, quantity: int = 1, size: str | None = None) -> CartLine:
        """Add a product, merging into an existing line with the same size."""
        quantity = max(quantity, 1)
        size = size or product.default_size

        existing = self._find(product.id, size)
        if existing is not None:
            existing.quantity += quantity
            return existing

        line = CartLine(
            product_id=product.id,
            name=product.name,
            brand=product.brand,
            price=product.price,
            image=product.image,
            size=size,
            quantity=quantity,
            selected=True,
        )
        self._lines.append(line)
        return line

    def remove_line(self, product_id: str, size: str | None) -> None:
        self._lines = [line for line in self._lines if line.key != (product_id, size)]

    def update_quantity(self, product_id: str, size: str | None, quantity: int) -> None:
        if quantity <= 0:
            self.remove_line(product_id, size)
            return
        line = self._find(product_id, size)
        if line is not None:
            line.quantity = quantity

    def toggle_select(self, product_id: str, size: str | None) -> None:
        line = self._find(product_id, size)
        if line is not None:
            line.selected = not line.selected

    def toggle_select_all(self) -> None:
        """Select every line unless all are already selected, then deselect all."""
        select = not self.all_selected
        for line in self._lines:
            line.selected = select

    def remove_lines(self, keys: set[LineKey]) -> None:
        self._lines = [line for line in self._lines if line.key not in keys]

    def clear_selected(self) -> None:
        self._lines = [line for line in self._lines if not line.selected]

    # --- Queries --------------------------------------------------------------

    def selected_lines(self) -> list[CartLine]:
        return [line for line in self._lines if line.selected]

    def totals(self) -> CartTotals:
        return CartTotals(
            all=self._summarize(self._lines),
            selected=self._summarize(self.selected_lines()),
        )

    # --- Internal helpers -----------------------------------------------------

    def _find(self, product_id: str, size: str | None) -> CartLine | None:
        for line in self._lines:
            if line.key == (product_id, size):
                return line
        return None

    @staticmethod
    def _summarize(lines: list[CartLine]) -> CartSummary:
        return CartSummary(
            count=sum(line.quantity for line in lines),
            lines=len(lines),
            total=Money.total(line.line_total for line in lines),
        )
