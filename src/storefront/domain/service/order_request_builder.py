"""Domain service: turn a cart and a checkout draft into an OrderRequest.

Lives in the domain because it encodes business rules: which fields go
on the order, how the shipping address is flattened, and that the total
includes the shipping fee of the chosen method.
"""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.checkout import CheckoutDraft
from storefront.domain.model.order_request import OrderRequest, OrderRequestItem
from storefront.domain.model.payment import map_payment_method


class OrderRequestBuilder:

    def __init__(self, image_base_url: str = "") -> None:
        self._image_base_url = image_base_url.rstrip("/")

    def build(self, cart: Cart, draft: CheckoutDraft) -> OrderRequest:
        if cart.is_empty:
            raise ValidationError("Cannot place an order for an empty cart")

        note = draft.shipping.note.strip() if draft.shipping.note else ""

        return OrderRequest(
            customer_name=draft.contact.full_name.strip(),
            customer_email=draft.contact.email.strip(),
            customer_phone=draft.contact.phone.strip(),
            shipping_address=draft.shipping.full_address,
            payment_method=map_payment_method(draft.payment_method.value),
            items=tuple(self._to_item(line) for line in cart.lines),
            total_amount=draft.total_amount(cart),
            note=note or None,
        )

    def _to_item(self, line: CartLine) -> OrderRequestItem:
        return OrderRequestItem(
            product_id=line.product_id,
            product_name=line.name,
            product_price=line.unit_price,
            quantity=line.quantity,
            image_url=self.image_url(line.first_image),
        )

    def image_url(self, path: str | None) -> str:
        """Absolute image URL for a stored image path, or "" when there is none."""
        if not path:
            return ""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._image_base_url}{path}"
