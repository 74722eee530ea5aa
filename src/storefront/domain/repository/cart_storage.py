"""Port for client-local cart persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import CartLine


class CartStorage(ABC):

    @abstractmethod
    def load(self, session_key: str) -> list[CartLine]:
        """Return the stored lines for a session ([] if nothing stored).

        Raises UnexpectedError if the store cannot be read.
        """

    @abstractmethod
    def save(self, session_key: str, lines: list[CartLine]) -> None:
        """Replace the stored lines for a session.

        Raises UnexpectedError if the store cannot be written.
        """
