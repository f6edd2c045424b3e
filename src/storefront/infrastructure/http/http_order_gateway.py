"""HTTP implementation of OrderGateway."""

from __future__ import annotations

import pydantic

from storefront.domain.exceptions import ServiceError
from storefront.domain.gateway.order_gateway import OrderGateway
from storefront.domain.model.order_request import OrderRequest
from storefront.infrastructure.http.api_client import ApiClient
from storefront.infrastructure.http.schemas import CreatedOrder, OrderPayloadV2


class HttpOrderGateway(OrderGateway):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def create_order(self, request: OrderRequest) -> int:
        body = OrderPayloadV2.from_request(request).to_json()
        data = self._client.post("/orders", body)
        try:
            return CreatedOrder.model_validate(data).id
        except pydantic.ValidationError as exc:
            raise ServiceError("The server returned an order without an id") from exc
