"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity, Requester


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("15000"))
        assert m.amount == Decimal("15000")
        assert m.currency == "IDR"

    def test_of_factory_from_string(self):
        assert Money.of("25000.50").amount == Decimal("25000.50")

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_addition_is_exact(self):
        assert Money.of("0.1") + Money.of("0.2") == Money.of("0.3")

    def test_multiplication_by_int(self):
        assert Money.of("20000") * 2 == Money.of("40000")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 1.5  # type: ignore[operator]

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "IDR") + Money(Decimal("5"), "USD")

    def test_total(self):
        assert Money.total([Money.of(40000), Money.of(15000)]) == Money.of(55000)

    def test_total_of_nothing_is_zero(self):
        assert Money.total([]) == Money.zero()

    def test_str_formatting(self):
        assert str(Money.of("15000")) == "Rp 15,000.00"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") > Money.of("5")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)


# ── Requester ────────────────────────────────────────────────────────────────


class TestRequester:

    def test_owner_can_access(self):
        assert Requester("u1").can_access("u1")

    def test_stranger_cannot_access(self):
        assert not Requester("u2").can_access("u1")

    def test_admin_can_access_anything(self):
        assert Requester("root", is_admin=True).can_access("u1")

    def test_blank_user_rejected(self):
        with pytest.raises(ValidationError, match="user id is required"):
            Requester("  ")
