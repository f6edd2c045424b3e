"""Application service: reconcile a payment gateway return.

Reached only when the gateway redirects the customer back with its
signed query parameters. Signature checking needs a shared secret, so
the backend verifies; the client only decides what to tell the customer
and whether the cart can be emptied.

A reconciler verifies at most once. Later calls return the first result.
"""

from __future__ import annotations

import logging

from storefront.application.cart_store import CartStore
from storefront.application.dto import PaymentReturnResult, PaymentStatus
from storefront.domain.exceptions import ServiceError, ValidationError
from storefront.domain.gateway.payment_gateway import PaymentGateway
from storefront.domain.model.value_objects import Money

logger = logging.getLogger(__name__)

SECURE_HASH = "vnp_SecureHash"
RESPONSE_CODE = "vnp_ResponseCode"
TXN_REF = "vnp_TxnRef"
AMOUNT = "vnp_Amount"
SUCCESS_CODE = "00"
# The gateway sends amounts multiplied by 100.
GATEWAY_AMOUNT_SCALE = 100


class PaymentReturnReconciler:

    def __init__(self, cart_store: CartStore, payment_gateway: PaymentGateway) -> None:
        self._cart_store = cart_store
        self._payment_gateway = payment_gateway
        self._result = PaymentReturnResult(
            status=PaymentStatus.VERIFYING,
            message="Verifying transaction...",
        )

    @property
    def result(self) -> PaymentReturnResult:
        return self._result

    def reconcile(self, params: dict[str, str]) -> PaymentReturnResult:
        if self._result.status != PaymentStatus.VERIFYING:
            return self._result

        if not params.get(SECURE_HASH):
            self._result = PaymentReturnResult(
                status=PaymentStatus.FAILURE,
                message="Invalid payment return data",
            )
            return self._result

        try:
            self._payment_gateway.verify_return(dict(params))
        except ServiceError as exc:
            logger.warning(
                "Payment verification failed (code=%s): %s",
                params.get(RESPONSE_CODE), exc.message,
            )
            if params.get(RESPONSE_CODE) != SUCCESS_CODE:
                message = "The transaction was cancelled or failed at the payment gateway."
            else:
                message = exc.message or "Security signature verification failed."
            self._result = PaymentReturnResult(
                status=PaymentStatus.FAILURE,
                message=message,
                order_ref=params.get(TXN_REF),
            )
            return self._result

        self._cart_store.clear_cart()
        order_ref = params.get(TXN_REF)
        logger.info("Payment for order %s verified", order_ref)
        self._result = PaymentReturnResult(
            status=PaymentStatus.SUCCESS,
            message=f"Order #{order_ref} has been paid." if order_ref else "Your order has been paid.",
            order_ref=order_ref,
            amount=_display_amount(params.get(AMOUNT)),
        )
        return self._result


def _display_amount(raw: str | None) -> str | None:
    if not raw:
        return None
    try:
        return str(Money(int(raw) // GATEWAY_AMOUNT_SCALE))
    except (ValueError, ValidationError):
        return None
