"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Monetary amount in minor currency units.

    VND has no subunit in this system, so amounts are plain integers and
    arithmetic never rounds.
    """

    amount: int
    currency: str = "VND"

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError(
                f"Money amount must be an int, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        # vi-VN grouping: 200000 -> "200.000 ₫"
        return f"{self.amount:,}".replace(",", ".") + " ₫"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(0)

    @staticmethod
    def of(amount: str | int | float) -> Money:
        """Convenient factory for values read from JSON or the command line."""
        try:
            value = int(str(amount).strip())
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return Money(value)


@dataclass(frozen=True)
class ContactInfo:
    full_name: str = ""
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class ShippingInfo:
    """Delivery address as typed into the checkout form.

    ``district`` and ``ward`` are optional.
    """

    address: str = ""
    city: str = ""
    district: str = ""
    ward: str = ""
    note: str = ""

    @property
    def full_address(self) -> str:
        """Non-empty parts joined most-specific first: detail, ward, district, city."""
        parts = [self.address, self.ward, self.district, self.city]
        return ", ".join(p.strip() for p in parts if p and p.strip())
