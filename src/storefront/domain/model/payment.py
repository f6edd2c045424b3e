"""Payment and shipping method tables.

Both are fixed lookups. Internal codes are what the customer picks in
the checkout form; the backend enum is what goes on the wire.
"""

from __future__ import annotations

import logging
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


class PaymentMethod(Enum):
    CASH = "cod"
    BANK_TRANSFER = "bank"
    MOMO = "momo"
    CREDIT_CARD = "card"

    @property
    def backend_code(self) -> str:
        return _BACKEND_CODES[self]

    @property
    def requires_redirect(self) -> bool:
        """True when payment needs a full handoff to the external gateway."""
        return self is PaymentMethod.BANK_TRANSFER

    @staticmethod
    def parse(code: str) -> PaymentMethod:
        """Strict lookup used where the customer types a method."""
        try:
            return PaymentMethod((code or "").strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in PaymentMethod)
            raise ValidationError(
                f"Unknown payment method '{code}' (choose one of: {choices})",
                field_errors={"paymentMethod": "Unknown payment method"},
            ) from None


_BACKEND_CODES = {
    PaymentMethod.CASH: "CASH",
    PaymentMethod.BANK_TRANSFER: "VNPAY",
    PaymentMethod.MOMO: "MOMO",
    PaymentMethod.CREDIT_CARD: "CREDIT_CARD",
}

DEFAULT_BACKEND_CODE = _BACKEND_CODES[PaymentMethod.CASH]


def map_payment_method(method: str) -> str:
    """Map an internal payment code to the backend enum.

    Lenient: anything unrecognised becomes cash on delivery so that an
    unexpected code never blocks submission. The fallback is logged.
    """
    try:
        return PaymentMethod(method.lower()).backend_code
    except ValueError:
        logger.warning(
            "Unmapped payment method %r, falling back to %s", method, DEFAULT_BACKEND_CODE
        )
        return DEFAULT_BACKEND_CODE


class ShippingMethod(Enum):
    STANDARD = "standard"
    FAST = "fast"
    EXPRESS = "express"

    @staticmethod
    def parse(code: str) -> ShippingMethod:
        try:
            return ShippingMethod((code or "").strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in ShippingMethod)
            raise ValidationError(
                f"Unknown shipping method '{code}' (choose one of: {choices})",
                field_errors={"shippingMethod": "Unknown shipping method"},
            ) from None


# ---------------------------------------------------------------------------
# Shipping fee policy
# ---------------------------------------------------------------------------
SHIPPING_FEES = {
    ShippingMethod.STANDARD: Money(0),
    ShippingMethod.FAST: Money(30000),
    ShippingMethod.EXPRESS: Money(50000),
}


def calculate_shipping_fee(method: ShippingMethod) -> Money:
    return SHIPPING_FEES[method]
