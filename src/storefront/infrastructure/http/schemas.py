"""Wire schemas for the storefront REST backend.

Requests are always sent in one explicit shape, ``OrderPayloadV2``: the
"fat" order payload with per-line name, price, subtotal and image URL.
The backend may ignore the client-side prices and recompute them.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from storefront.domain.model.order_request import OrderRequest, OrderRequestItem


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderItemPayload(_CamelModel):
    product_id: int
    product_name: str
    product_price: int
    quantity: int
    subtotal: int
    image_url: str = ""

    @classmethod
    def from_item(cls, item: OrderRequestItem) -> OrderItemPayload:
        return cls(
            product_id=item.product_id,
            product_name=item.product_name,
            product_price=item.product_price.amount,
            quantity=item.quantity,
            subtotal=item.subtotal.amount,
            image_url=item.image_url,
        )


class OrderPayloadV2(_CamelModel):
    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: str
    payment_method: str
    payment_status: str = "UNPAID"
    note: Optional[str] = None
    items: List[OrderItemPayload]
    total_amount: int

    @classmethod
    def from_request(cls, request: OrderRequest) -> OrderPayloadV2:
        return cls(
            customer_name=request.customer_name,
            customer_email=request.customer_email,
            customer_phone=request.customer_phone,
            shipping_address=request.shipping_address,
            payment_method=request.payment_method,
            note=request.note,
            items=[OrderItemPayload.from_item(item) for item in request.items],
            total_amount=request.total_amount.amount,
        )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class CreatedOrder(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int


class PaymentLink(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: Optional[str] = None
