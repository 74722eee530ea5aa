"""Value objects for prices, quantities and the caller's identity.

All three are frozen and validate on construction, so a Money, Quantity
or Requester that exists is always usable.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable

from storefront.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "IDR"


@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount tagged with its currency.

    Prices are stored and summed as Decimal so that an order's
    ``items_price + shipping_price`` equals ``total_price`` to the cent.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    def __add__(self, other: Money) -> Money:
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, units: int) -> Money:
        if not isinstance(units, int):
            raise TypeError(f"Can only multiply Money by int, got {type(units).__name__}")
        return Money(self.amount * units, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._check_currency(other)
        return self.amount < other.amount

    def __gt__(self, other: Money) -> bool:
        self._check_currency(other)
        return self.amount > other.amount

    def __str__(self) -> str:
        # Rupiah style with thousands separators, e.g. "Rp 70,000.00"
        return f"Rp {self.amount:,.2f}"

    def _check_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal(0), currency)

    @staticmethod
    def total(amounts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
        """Sum *amounts*; an empty iterable gives zero in *currency*."""
        result = Money.zero(currency)
        for amount in amounts:
            result = result + amount
        return result

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build Money from user input, going through ``str`` to avoid float noise."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """Units of one product on an order line; always a positive int."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Requester:
    """Identity fact resolved by the auth collaborator for a single call."""

    user_id: str
    is_admin: bool = False

    def __post_init__(self) -> None:
        if not self.user_id or not str(self.user_id).strip():
            raise ValidationError("Requester user id is required")

    def can_access(self, owner_id: str) -> bool:
        return self.is_admin or self.user_id == owner_id
