"""Outbound order request: what the client asks the backend to create.

Constructed from the cart and the checkout draft, never stored locally.
Prices and subtotals are the client's snapshot; the backend is free to
recompute them.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderRequestItem:

    product_id: int
    product_name: str
    product_price: Money
    quantity: int
    image_url: str = ""

    @property
    def subtotal(self) -> Money:
        return self.product_price * self.quantity


@dataclass(frozen=True)
class OrderRequest:

    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: str
    payment_method: str  # backend enum, e.g. "CASH" / "VNPAY"
    items: tuple[OrderRequestItem, ...]
    total_amount: Money
    note: str | None = None
