"""HTTP implementation of PaymentGateway (VNPAY endpoints of the backend)."""

from __future__ import annotations

import pydantic

from storefront.domain.gateway.payment_gateway import PaymentGateway
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.http.api_client import ApiClient
from storefront.infrastructure.http.schemas import PaymentLink


class HttpPaymentGateway(PaymentGateway):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def create_payment_link(self, amount: Money, order_id: int) -> str | None:
        data = self._client.get(
            "/payment/create_payment",
            params={"amount": amount.amount, "orderId": order_id},
        )
        try:
            return PaymentLink.model_validate(data).url
        except pydantic.ValidationError:
            return None

    def verify_return(self, params: dict[str, str]) -> None:
        self._client.get("/payment/vnpay-return", params=params)
