"""Integration tests for the PlaceOrder use case.

Uses in-memory fake repositories and gateways. No file I/O, no network.
"""

import pytest

from storefront.application.cart_store import CartStore
from storefront.application.dto import OrderOutcome
from storefront.application.place_order import GENERIC_ORDER_FAILURE, PlaceOrderHandler
from storefront.domain.exceptions import InvalidTransitionError, ServiceError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.checkout import CheckoutDraft, CheckoutStep
from storefront.domain.model.payment import ShippingMethod
from storefront.domain.model.value_objects import ContactInfo, Money, ShippingInfo
from tests.fakes import FakeCartRepository, FakeOrderGateway, FakePaymentGateway


def _setup(
    order_gateway: FakeOrderGateway | None = None,
    payment_gateway: FakePaymentGateway | None = None,
):
    """Cart with one line {id 1, 100000 VND, quantity 2}."""
    cart_repo = FakeCartRepository([
        CartLine(product_id=1, name="Áo thun", unit_price=Money(100000), available_stock=10, quantity=2),
    ])
    store = CartStore(cart_repo)
    order_gateway = order_gateway or FakeOrderGateway()
    payment_gateway = payment_gateway or FakePaymentGateway()
    handler = PlaceOrderHandler(store, order_gateway, payment_gateway)
    return handler, store, cart_repo, order_gateway, payment_gateway


def _draft_at_review(payment: str = "cod") -> CheckoutDraft:
    draft = CheckoutDraft()
    draft.update_contact(full_name="Nguyen Van A", email="a@b.com", phone="0912345678")
    draft.update_shipping(address="12 Main St", city="Hồ Chí Minh")
    draft.next_step()
    draft.select_payment_method(payment)
    draft.select_shipping_method(ShippingMethod.STANDARD)
    draft.next_step()
    assert draft.step == CheckoutStep.REVIEW
    return draft


class TestCashPath:

    def test_confirms_and_clears_cart(self):
        handler, store, cart_repo, orders, payments = _setup()
        draft = _draft_at_review("cod")

        result = handler.handle(draft)

        assert result.outcome == OrderOutcome.CONFIRMED
        assert result.order_id == 1
        assert result.total == "200.000 ₫"
        assert draft.step == CheckoutStep.CONFIRMED
        assert draft.created_order_id == 1
        assert store.is_empty
        assert cart_repo.lines == []
        assert payments.link_requests == []

    def test_order_request_contents(self):
        handler, _, _, orders, _ = _setup()
        handler.handle(_draft_at_review("cod"))

        request = orders.requests[0]
        assert request.payment_method == "CASH"
        assert request.total_amount == Money(200000)
        assert request.shipping_address == "12 Main St, Hồ Chí Minh"
        assert [(i.product_id, i.quantity) for i in request.items] == [(1, 2)]

    def test_momo_settles_like_cash(self):
        handler, store, _, orders, payments = _setup()
        result = handler.handle(_draft_at_review("momo"))
        assert result.outcome == OrderOutcome.CONFIRMED
        assert orders.requests[0].payment_method == "MOMO"
        assert payments.link_requests == []
        assert store.is_empty


class TestGatewayPath:

    def test_requests_link_with_order_id_and_total(self):
        handler, store, _, orders, payments = _setup()
        draft = _draft_at_review("bank")

        result = handler.handle(draft)

        assert result.outcome == OrderOutcome.REDIRECT
        assert result.redirect_url == "https://pay.example/vnpay?token=abc"
        assert orders.requests[0].payment_method == "VNPAY"
        assert payments.link_requests == [(Money(200000), 1)]
        # The local flow ends here: no confirmation, cart kept until the return.
        assert draft.step == CheckoutStep.REVIEW
        assert not store.is_empty

    def test_link_failure_keeps_state(self):
        handler, store, _, _, payments = _setup(
            payment_gateway=FakePaymentGateway(link_error=ServiceError("gateway down", 502)),
        )
        draft = _draft_at_review("bank")

        result = handler.handle(draft)

        assert result.outcome == OrderOutcome.PAYMENT_LINK_FAILED
        assert result.order_id == 1
        assert draft.step == CheckoutStep.REVIEW
        assert draft.created_order_id == 1
        assert not store.is_empty

    def test_missing_url_is_a_link_failure(self):
        handler, _, _, _, _ = _setup(payment_gateway=FakePaymentGateway(url=None))
        result = handler.handle(_draft_at_review("bank"))
        assert result.outcome == OrderOutcome.PAYMENT_LINK_FAILED

    def test_retry_after_link_failure_reuses_order(self):
        payments = FakePaymentGateway(link_error=ServiceError("gateway down", 502))
        handler, _, _, orders, _ = _setup(payment_gateway=payments)
        draft = _draft_at_review("bank")
        handler.handle(draft)

        payments.link_error = None
        result = handler.handle(draft)

        assert result.outcome == OrderOutcome.REDIRECT
        assert len(orders.requests) == 1
        assert [order_id for _, order_id in payments.link_requests] == [1, 1]


class TestSubmissionFailure:

    def test_server_message_is_surfaced(self):
        handler, store, _, _, _ = _setup(
            order_gateway=FakeOrderGateway(error=ServiceError("Sản phẩm đã hết hàng", 400)),
        )
        draft = _draft_at_review("cod")

        result = handler.handle(draft)

        assert result.outcome == OrderOutcome.SUBMISSION_FAILED
        assert result.message == "Sản phẩm đã hết hàng"
        assert draft.step == CheckoutStep.REVIEW
        assert draft.created_order_id is None
        assert not store.is_empty

    def test_generic_message_without_server_text(self):
        handler, _, _, _, _ = _setup(order_gateway=FakeOrderGateway(error=ServiceError("")))
        result = handler.handle(_draft_at_review("cod"))
        assert result.message == GENERIC_ORDER_FAILURE

    def test_submitting_flag_reset_after_failure(self):
        handler, _, _, _, _ = _setup(order_gateway=FakeOrderGateway(error=ServiceError("x")))
        draft = _draft_at_review("cod")
        handler.handle(draft)
        assert draft.submitting is False


class TestGuards:

    def test_stale_draft_bounced_to_first_step(self):
        handler, store, _, orders, _ = _setup()
        draft = _draft_at_review("cod")
        draft.contact = ContactInfo(full_name="Nguyen Van A", email="a@b.com", phone="")

        result = handler.handle(draft)

        assert result.outcome == OrderOutcome.VALIDATION_FAILED
        assert draft.step == CheckoutStep.ADDRESS
        assert orders.requests == []
        assert not store.is_empty

    def test_only_from_review_step(self):
        handler, _, _, _, _ = _setup()
        draft = CheckoutDraft(
            contact=ContactInfo(full_name="A", email="a@b.com", phone="0912345678"),
            shipping=ShippingInfo(address="x", city="y"),
        )
        with pytest.raises(InvalidTransitionError, match="review step"):
            handler.handle(draft)

    def test_rejects_double_submission(self):
        handler, _, _, orders, _ = _setup()
        draft = _draft_at_review("cod")
        draft.submitting = True
        with pytest.raises(InvalidTransitionError, match="already in progress"):
            handler.handle(draft)
        assert orders.requests == []
