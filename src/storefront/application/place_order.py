"""Application service: Place Order use case.

Create first, then pay: the order is created server-side before any
payment link is requested, so a failed link request never loses the
cart. Such an order stays unpaid on the backend.

Every failure is returned as an OrderResult with the cart and draft left
as they were, so the customer can retry without re-typing anything.
"""

from __future__ import annotations

import logging

from storefront.application.cart_store import CartStore
from storefront.application.dto import OrderOutcome, OrderResult
from storefront.domain.exceptions import InvalidTransitionError, ServiceError
from storefront.domain.gateway.order_gateway import OrderGateway
from storefront.domain.gateway.payment_gateway import PaymentGateway
from storefront.domain.model.checkout import CheckoutDraft, CheckoutStep
from storefront.domain.service.order_request_builder import OrderRequestBuilder

logger = logging.getLogger(__name__)

GENERIC_ORDER_FAILURE = "Placing the order failed. Please try again!"
PAYMENT_LINK_FAILURE = "Could not create the payment link"


class PlaceOrderHandler:

    def __init__(
        self,
        cart_store: CartStore,
        order_gateway: OrderGateway,
        payment_gateway: PaymentGateway,
        request_builder: OrderRequestBuilder | None = None,
    ) -> None:
        self._cart_store = cart_store
        self._order_gateway = order_gateway
        self._payment_gateway = payment_gateway
        self._request_builder = request_builder or OrderRequestBuilder()

    def handle(self, draft: CheckoutDraft) -> OrderResult:
        """Submit the draft's order and branch on the payment method.

        Steps:
        1. Re-check the mandatory contact fields (a stale draft may have
           reached REVIEW with blanks); bounce back to step 1 if so.
        2. Create the order, unless a previous attempt already did and
           only the payment link failed.
        3. Cash-like methods: clear the cart and confirm.
           Redirect methods: request the gateway link and hand it back.
        """
        if draft.step != CheckoutStep.REVIEW:
            raise InvalidTransitionError(
                f"Orders are placed from the review step, not {draft.step.name}"
            )
        if draft.submitting:
            raise InvalidTransitionError("Order submission already in progress")

        draft.submitting = True
        try:
            return self._submit(draft)
        finally:
            draft.submitting = False

    def _submit(self, draft: CheckoutDraft) -> OrderResult:
        missing = draft.missing_required_fields()
        if missing:
            draft.reset_to_start()
            return OrderResult(
                outcome=OrderOutcome.VALIDATION_FAILED,
                message="Please check your contact information again",
            )

        cart = self._cart_store.cart
        total = draft.total_amount(cart)

        order_id = draft.created_order_id
        if order_id is None:
            request = self._request_builder.build(cart, draft)
            try:
                order_id = self._order_gateway.create_order(request)
            except ServiceError as exc:
                logger.warning("Order creation failed: %s", exc.message)
                return OrderResult(
                    outcome=OrderOutcome.SUBMISSION_FAILED,
                    message=exc.message or GENERIC_ORDER_FAILURE,
                )
            draft.created_order_id = order_id
            logger.info("Order #%s created (%s)", order_id, request.payment_method)

        if not draft.payment_method.requires_redirect:
            self._cart_store.clear_cart()
            draft.confirm(order_id)
            return OrderResult(
                outcome=OrderOutcome.CONFIRMED,
                message="Order placed successfully!",
                order_id=order_id,
                total=str(total),
            )

        try:
            url = self._payment_gateway.create_payment_link(total, order_id)
        except ServiceError as exc:
            logger.warning("Payment link for order #%s failed: %s", order_id, exc.message)
            url = None

        if not url:
            return OrderResult(
                outcome=OrderOutcome.PAYMENT_LINK_FAILED,
                message=PAYMENT_LINK_FAILURE,
                order_id=order_id,
                total=str(total),
            )

        return OrderResult(
            outcome=OrderOutcome.REDIRECT,
            message="Redirecting to the payment gateway",
            order_id=order_id,
            total=str(total),
            redirect_url=url,
        )
