"""Application service: Cart Store.

Wraps the Cart aggregate of one client session and writes the full line
list through the storage port after every mutation, so reopening the
session reproduces the same cart. Storage failures never break the
session: they are logged and the in-memory cart keeps working.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import UnexpectedError
from storefront.domain.model.cart import Cart, CartLine, CartTotals, LineKey
from storefront.domain.model.product import Product
from storefront.domain.repository.cart_storage import CartStorage

logger = logging.getLogger(__name__)


class CartStore:

    def __init__(self, storage: CartStorage, session_key: str, cart: Cart | None = None) -> None:
        self._storage = storage
        self._session_key = session_key
        self._cart = cart if cart is not None else Cart()

    @classmethod
    def open(cls, storage: CartStorage, session_key: str) -> CartStore:
        """Rebuild the session's cart from storage (empty if unreadable)."""
        try:
            lines = storage.load(session_key)
        except UnexpectedError as exc:
            logger.warning("Could not load cart for %s, starting empty: %s", session_key, exc)
            lines = []
        return cls(storage, session_key, Cart(lines))

    @property
    def session_key(self) -> str:
        return self._session_key

    @property
    def lines(self) -> list[CartLine]:
        return self._cart.lines

    @property
    def all_selected(self) -> bool:
        return self._cart.all_selected

    # --- Mutations (write-through) --------------------------------------------

    def add_line(self, product: Product, quantity: int = 1, size: str | None = None) -> CartLine:
        line = self._cart.add_line(product, quantity, size)
        self._persist()
        return line

    def remove_line(self, product_id: str, size: str | None) -> None:
        self._cart.remove_line(product_id, size)
        self._persist()

    def update_quantity(self, product_id: str, size: str | None, quantity: int) -> None:
        self._cart.update_quantity(product_id, size, quantity)
        self._persist()

    def toggle_select(self, product_id: str, size: str | None) -> None:
        self._cart.toggle_select(product_id, size)
        self._persist()

    def toggle_select_all(self) -> None:
        self._cart.toggle_select_all()
        self._persist()

    def remove_lines(self, keys: set[LineKey]) -> None:
        self._cart.remove_lines(keys)
        self._persist()

    def clear_selected(self) -> None:
        self._cart.clear_selected()
        self._persist()

    # --- Queries --------------------------------------------------------------

    def selected_lines(self) -> list[CartLine]:
        return self._cart.selected_lines()

    def totals(self) -> CartTotals:
        return self._cart.totals()

    # --- Internal helpers -----------------------------------------------------

    def _persist(self) -> None:
        try:
            self._storage.save(self._session_key, self._cart.lines)
        except UnexpectedError as exc:
            logger.warning("Could not persist cart for %s: %s", self._session_key, exc)
