"""Checkout draft and its step machine.

The draft is the in-progress, not-yet-submitted checkout form. It moves
through four steps:

    ADDRESS -> PAYMENT_SHIPPING -> REVIEW -> CONFIRMED

Only the ADDRESS step has a validation gate. REVIEW -> CONFIRMED happens
through order submission (see ``PlaceOrderHandler``); a redirect payment
method never reaches CONFIRMED locally.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import IntEnum

from storefront.domain.exceptions import InvalidTransitionError, ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.model.payment import (
    PaymentMethod,
    ShippingMethod,
    calculate_shipping_fee,
)
from storefront.domain.model.profile import UserProfile
from storefront.domain.model.value_objects import ContactInfo, Money, ShippingInfo

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_RE = re.compile(r"[0-9]{10,11}")

# Form field names, shared with the CLI and the error map.
FULL_NAME = "fullName"
EMAIL = "email"
PHONE = "phone"
ADDRESS = "address"
CITY = "city"

_CONTACT_FIELDS = {"full_name": FULL_NAME, "email": EMAIL, "phone": PHONE}
_SHIPPING_FIELDS = {"address": ADDRESS, "city": CITY, "district": "district",
                    "ward": "ward", "note": "note"}


class CheckoutStep(IntEnum):
    ADDRESS = 1
    PAYMENT_SHIPPING = 2
    REVIEW = 3
    CONFIRMED = 4


def validate_contact_and_address(contact: ContactInfo, shipping: ShippingInfo) -> dict[str, str]:
    """Return a field -> message map; empty when everything is valid."""
    errors: dict[str, str] = {}

    if not contact.full_name.strip():
        errors[FULL_NAME] = "Full name is required"

    if not contact.email.strip():
        errors[EMAIL] = "Email is required"
    elif not EMAIL_RE.fullmatch(contact.email):
        errors[EMAIL] = "Email is not valid"

    if not contact.phone.strip():
        errors[PHONE] = "Phone number is required"
    elif not PHONE_RE.fullmatch(re.sub(r"\s", "", contact.phone)):
        errors[PHONE] = "Phone number must be 10 or 11 digits"

    if not shipping.address.strip():
        errors[ADDRESS] = "Address is required"
    if not shipping.city.strip():
        errors[CITY] = "Please choose a city or province"

    return errors


@dataclass
class CheckoutDraft:

    step: CheckoutStep = CheckoutStep.ADDRESS
    contact: ContactInfo = field(default_factory=ContactInfo)
    shipping: ShippingInfo = field(default_factory=ShippingInfo)
    payment_method: PaymentMethod = PaymentMethod.CASH
    shipping_method: ShippingMethod = ShippingMethod.STANDARD
    field_errors: dict[str, str] = field(default_factory=dict)
    created_order_id: int | None = None
    submitting: bool = False

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def start(profile: UserProfile | None = None) -> CheckoutDraft:
        """Open a fresh draft, pre-filled from the logged-in user where possible."""
        draft = CheckoutDraft()
        if profile is not None and profile.email:
            draft.contact = ContactInfo(
                full_name=profile.display_name,
                email=profile.email,
            )
        return draft

    # --- Field edits ----------------------------------------------------------

    def update_contact(self, **changes: str) -> None:
        self.contact = replace(self.contact, **changes)
        self._field_edited(_CONTACT_FIELDS[name] for name in changes)

    def update_shipping(self, **changes: str) -> None:
        self.shipping = replace(self.shipping, **changes)
        self._field_edited(_SHIPPING_FIELDS[name] for name in changes)

    def select_payment_method(self, method: PaymentMethod | str) -> None:
        if not isinstance(method, PaymentMethod):
            method = PaymentMethod.parse(method)
        self.payment_method = method
        self._field_edited(["paymentMethod"])

    def select_shipping_method(self, method: ShippingMethod | str) -> None:
        if not isinstance(method, ShippingMethod):
            method = ShippingMethod.parse(method)
        self.shipping_method = method
        self._field_edited(["shippingMethod"])

    # --- State transitions ----------------------------------------------------

    def next_step(self) -> CheckoutStep:
        """Advance one step.

        ADDRESS -> PAYMENT_SHIPPING requires valid contact and address
        fields; on failure the errors are recorded on the draft, the step
        is unchanged and ValidationError is raised.
        """
        if self.step == CheckoutStep.ADDRESS:
            errors = validate_contact_and_address(self.contact, self.shipping)
            self.field_errors = errors
            if errors:
                raise ValidationError(
                    "Please fill in all required information", field_errors=errors
                )
            self.step = CheckoutStep.PAYMENT_SHIPPING
        elif self.step == CheckoutStep.PAYMENT_SHIPPING:
            self.step = CheckoutStep.REVIEW
        elif self.step == CheckoutStep.REVIEW:
            raise InvalidTransitionError("Place the order to leave the review step")
        else:
            raise InvalidTransitionError("Checkout is already confirmed")
        return self.step

    def previous_step(self) -> CheckoutStep:
        if self.step in (CheckoutStep.PAYMENT_SHIPPING, CheckoutStep.REVIEW):
            self.step = CheckoutStep(self.step - 1)
            return self.step
        raise InvalidTransitionError(
            f"Cannot go back from step {self.step.value} ({self.step.name})"
        )

    def reset_to_start(self) -> None:
        """Send the customer back to the address step, keeping what they typed."""
        self.step = CheckoutStep.ADDRESS

    def confirm(self, order_id: int) -> None:
        """Transition REVIEW -> CONFIRMED once the order exists server-side."""
        if self.step != CheckoutStep.REVIEW:
            raise InvalidTransitionError(
                f"Cannot confirm checkout from step {self.step.value} ({self.step.name})"
            )
        self.created_order_id = order_id
        self.step = CheckoutStep.CONFIRMED

    # --- Guards and derived values --------------------------------------------

    def needs_cart_redirect(self, cart: Cart) -> bool:
        """True when there is nothing to check out and we are not done yet."""
        return cart.is_empty and self.step != CheckoutStep.CONFIRMED

    def missing_required_fields(self) -> list[str]:
        """Fields that must never be blank at submission time."""
        required = {
            FULL_NAME: self.contact.full_name,
            EMAIL: self.contact.email,
            PHONE: self.contact.phone,
            ADDRESS: self.shipping.address,
        }
        return [name for name, value in required.items() if not value.strip()]

    @property
    def shipping_fee(self) -> Money:
        return calculate_shipping_fee(self.shipping_method)

    def total_amount(self, cart: Cart) -> Money:
        return cart.total + self.shipping_fee

    # --- Internal helpers -----------------------------------------------------

    def _field_edited(self, names) -> None:
        for name in names:
            self.field_errors.pop(name, None)
        # An order created for the old values must not be reused.
        self.created_order_id = None
