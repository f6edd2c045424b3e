"""Unit tests for the checkout draft and its step machine."""

import pytest

from storefront.domain.exceptions import InvalidTransitionError, ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.model.checkout import (
    CheckoutDraft,
    CheckoutStep,
    validate_contact_and_address,
)
from storefront.domain.model.payment import PaymentMethod, ShippingMethod
from storefront.domain.model.product import Product
from storefront.domain.model.profile import UserProfile
from storefront.domain.model.value_objects import ContactInfo, Money, ShippingInfo

VALID_CONTACT = ContactInfo(full_name="Nguyen Van A", email="a@b.com", phone="0912345678")
VALID_SHIPPING = ShippingInfo(address="12 Main St", city="Hồ Chí Minh")


def _valid_draft() -> CheckoutDraft:
    return CheckoutDraft(contact=VALID_CONTACT, shipping=VALID_SHIPPING)


def _cart_with_one_line() -> Cart:
    cart = Cart()
    cart.add(Product(id=1, name="Áo", price=Money(100000), stock=5))
    return cart


class TestValidation:

    def test_valid_example_has_no_errors(self):
        assert validate_contact_and_address(VALID_CONTACT, VALID_SHIPPING) == {}

    def test_bad_email_reports_only_email(self):
        contact = ContactInfo(full_name="Nguyen Van A", email="not-an-email", phone="0912345678")
        errors = validate_contact_and_address(contact, VALID_SHIPPING)
        assert list(errors) == ["email"]

    def test_phone_whitespace_is_ignored(self):
        contact = ContactInfo(full_name="A", email="a@b.com", phone="0912 345 678")
        assert validate_contact_and_address(contact, VALID_SHIPPING) == {}

    @pytest.mark.parametrize("phone", ["091234567", "091234567890", "09123abc78"])
    def test_bad_phone(self, phone):
        contact = ContactInfo(full_name="A", email="a@b.com", phone=phone)
        assert "phone" in validate_contact_and_address(contact, VALID_SHIPPING)

    def test_everything_blank(self):
        errors = validate_contact_and_address(ContactInfo(), ShippingInfo())
        assert set(errors) == {"fullName", "email", "phone", "address", "city"}

    def test_district_and_ward_optional(self):
        shipping = ShippingInfo(address="12 Main St", city="Huế", district="", ward="")
        assert validate_contact_and_address(VALID_CONTACT, shipping) == {}


class TestForwardTransitions:

    def test_valid_draft_advances_to_payment(self):
        draft = _valid_draft()
        assert draft.next_step() == CheckoutStep.PAYMENT_SHIPPING
        assert draft.field_errors == {}

    def test_invalid_draft_stays_on_address_step(self):
        draft = CheckoutDraft(contact=VALID_CONTACT, shipping=ShippingInfo(address="12 Main St"))
        with pytest.raises(ValidationError) as exc_info:
            draft.next_step()
        assert draft.step == CheckoutStep.ADDRESS
        assert draft.field_errors == {"city": "Please choose a city or province"}
        assert exc_info.value.field_errors == draft.field_errors

    def test_payment_step_advances_unconditionally(self):
        draft = _valid_draft()
        draft.next_step()
        assert draft.next_step() == CheckoutStep.REVIEW

    def test_cannot_skip_past_review(self):
        draft = _valid_draft()
        draft.next_step()
        draft.next_step()
        with pytest.raises(InvalidTransitionError, match="Place the order"):
            draft.next_step()

    def test_errors_cleared_once_fixed(self):
        draft = CheckoutDraft(contact=VALID_CONTACT, shipping=ShippingInfo(address="12 Main St"))
        with pytest.raises(ValidationError):
            draft.next_step()
        draft.update_shipping(city="Đà Nẵng")
        assert draft.field_errors == {}
        draft.next_step()
        assert draft.step == CheckoutStep.PAYMENT_SHIPPING


class TestBackTransitions:

    def test_back_preserves_values(self):
        draft = _valid_draft()
        draft.next_step()
        draft.select_shipping_method(ShippingMethod.EXPRESS)
        draft.next_step()
        assert draft.previous_step() == CheckoutStep.PAYMENT_SHIPPING
        assert draft.previous_step() == CheckoutStep.ADDRESS
        assert draft.contact == VALID_CONTACT
        assert draft.shipping_method is ShippingMethod.EXPRESS

    def test_cannot_go_back_from_first_step(self):
        with pytest.raises(InvalidTransitionError):
            CheckoutDraft().previous_step()

    def test_confirmed_is_terminal(self):
        draft = _valid_draft()
        draft.next_step()
        draft.next_step()
        draft.confirm(order_id=5)
        with pytest.raises(InvalidTransitionError):
            draft.previous_step()
        with pytest.raises(InvalidTransitionError, match="already confirmed"):
            draft.next_step()

    def test_confirm_only_from_review(self):
        with pytest.raises(InvalidTransitionError):
            _valid_draft().confirm(order_id=1)


class TestFieldEdits:

    def test_editing_clears_that_fields_error(self):
        draft = CheckoutDraft()
        with pytest.raises(ValidationError):
            draft.next_step()
        draft.update_contact(email="a@b.com")
        assert "email" not in draft.field_errors
        assert "fullName" in draft.field_errors

    def test_editing_discards_pending_order(self):
        draft = _valid_draft()
        draft.created_order_id = 12
        draft.update_shipping(note="Call before delivery")
        assert draft.created_order_id is None

    def test_select_payment_method_by_code(self):
        draft = CheckoutDraft()
        draft.select_payment_method("bank")
        assert draft.payment_method is PaymentMethod.BANK_TRANSFER

    def test_select_unknown_payment_method_rejected(self):
        draft = CheckoutDraft()
        with pytest.raises(ValidationError):
            draft.select_payment_method("bnak")
        assert draft.payment_method is PaymentMethod.CASH


class TestStartAndGuard:

    def test_start_prefills_from_profile(self):
        profile = UserProfile(email="lan@example.com", full_name="Tran Thi Lan")
        draft = CheckoutDraft.start(profile)
        assert draft.contact.full_name == "Tran Thi Lan"
        assert draft.contact.email == "lan@example.com"
        assert draft.contact.phone == ""
        assert draft.step == CheckoutStep.ADDRESS

    def test_start_falls_back_to_username(self):
        draft = CheckoutDraft.start(UserProfile(email="x@y.vn", username="lan99"))
        assert draft.contact.full_name == "lan99"

    def test_start_without_profile_is_blank(self):
        draft = CheckoutDraft.start(None)
        assert draft.contact == ContactInfo()
        assert draft.payment_method is PaymentMethod.CASH
        assert draft.shipping_method is ShippingMethod.STANDARD

    def test_empty_cart_requires_redirect(self):
        for step in (CheckoutStep.ADDRESS, CheckoutStep.PAYMENT_SHIPPING, CheckoutStep.REVIEW):
            assert CheckoutDraft(step=step).needs_cart_redirect(Cart())

    def test_confirmed_draft_never_redirects(self):
        assert not CheckoutDraft(step=CheckoutStep.CONFIRMED).needs_cart_redirect(Cart())

    def test_non_empty_cart_does_not_redirect(self):
        assert not CheckoutDraft().needs_cart_redirect(_cart_with_one_line())


class TestTotals:

    def test_total_includes_shipping_fee(self):
        draft = _valid_draft()
        draft.select_shipping_method("fast")
        assert draft.total_amount(_cart_with_one_line()) == Money(130000)

    def test_missing_required_fields(self):
        draft = CheckoutDraft(contact=ContactInfo(full_name="A", email="a@b.com"))
        assert draft.missing_required_fields() == ["phone", "address"]
