"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    product_id: int
    name: str
    quantity: int
    available_stock: int
    unit_price: str  # formatted, e.g. "100.000 ₫"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """Output: the whole cart as displayed to the user."""

    lines: list[CartLineDTO]
    item_count: int
    total: str


class OrderOutcome(Enum):
    CONFIRMED = "CONFIRMED"
    REDIRECT = "REDIRECT"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    PAYMENT_LINK_FAILED = "PAYMENT_LINK_FAILED"


@dataclass(frozen=True)
class OrderResult:
    """Output of placing an order.

    ``redirect_url`` is set only for REDIRECT; ``message`` carries the
    user-facing text for every outcome.
    """

    outcome: OrderOutcome
    message: str
    order_id: int | None = None
    total: str | None = None
    redirect_url: str | None = None


class PaymentStatus(Enum):
    VERIFYING = "VERIFYING"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


@dataclass(frozen=True)
class PaymentReturnResult:
    """Output of reconciling a payment gateway return.

    On FAILURE the customer may retry (back to checkout, cart intact) or
    abandon (back home).
    """

    status: PaymentStatus
    message: str
    order_ref: str | None = None
    amount: str | None = None
