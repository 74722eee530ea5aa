"""Shipping and payment value objects plus their static tables.

There is no carrier or payment-gateway integration: a shipping service is
a row of a fixed table and a payment method is a label.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class ShippingAddress:
    full_name: str
    phone: str
    address: str
    city: str
    province: str
    postal_code: str

    def __post_init__(self) -> None:
        missing = [
            f.name for f in fields(self)
            if not isinstance(getattr(self, f.name), str) or not getattr(self, f.name).strip()
        ]
        if missing:
            raise ValidationError(
                f"Shipping address is incomplete, missing: {', '.join(missing)}"
            )


@dataclass(frozen=True)
class ShippingService:
    name: str
    cost: Money
    estimated_days: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Shipping service is required")
        if self.name not in SHIPPING_SERVICE_NAMES:
            raise ValidationError(f"Unknown shipping service: '{self.name}'")
        if not self.estimated_days or not self.estimated_days.strip():
            raise ValidationError("Shipping service estimated days are required")

    @staticmethod
    def lookup(name: str) -> ShippingService:
        for service in SHIPPING_SERVICES:
            if service.name.lower() == name.strip().lower():
                return service
        raise ValidationError(f"Unknown shipping service: '{name}'")


SHIPPING_SERVICE_NAMES = (
    "JNE Regular",
    "JNE Express",
    "JNT Regular",
    "JNT Express",
    "SiCepat Regular",
    "SiCepat Express",
)

SHIPPING_SERVICES = (
    ShippingService("JNE Regular", Money.of(15000), "3-4 days"),
    ShippingService("JNE Express", Money.of(25000), "1-2 days"),
    ShippingService("JNT Regular", Money.of(12000), "3-5 days"),
    ShippingService("JNT Express", Money.of(22000), "2-3 days"),
    ShippingService("SiCepat Regular", Money.of(13000), "2-4 days"),
    ShippingService("SiCepat Express", Money.of(23000), "1-2 days"),
)

PAYMENT_METHODS = ("COD", "Bank Transfer", "E-Wallet", "Credit Card")


def validate_payment_method(method: str | None) -> str:
    if not method or not method.strip():
        raise ValidationError("Payment method is required")
    if method not in PAYMENT_METHODS:
        raise ValidationError(f"Unknown payment method: '{method}'")
    return method
