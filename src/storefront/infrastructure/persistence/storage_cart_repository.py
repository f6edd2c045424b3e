"""Key/value-storage-backed implementation of CartRepository.

The cart is stored as a JSON array under ``shopping_cart``, one object
per line, using the same field names the web client writes.
"""

from __future__ import annotations

import json
import logging

from storefront.domain.exceptions import DomainException
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)

CART_KEY = "shopping_cart"


class StorageCartRepository(CartRepository):

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    # --- CartRepository interface ---------------------------------------------

    def load(self) -> list[CartLine]:
        try:
            saved = self._storage.get_item(CART_KEY)
            if not saved:
                return []
            raw = json.loads(saved)
            if not isinstance(raw, list):
                raise ValueError("cart is not a JSON array")
            return [self._to_domain(item) for item in raw]
        except (OSError, ValueError, KeyError, TypeError, DomainException) as exc:
            logger.warning("Discarding unreadable cart storage: %s", exc)
            return []

    def save(self, lines: list[CartLine]) -> None:
        payload = json.dumps([self._to_raw(line) for line in lines], ensure_ascii=False)
        try:
            self._storage.set_item(CART_KEY, payload)
        except (OSError, ValueError) as exc:
            logger.warning("Could not persist cart: %s", exc)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        return {
            "id": line.product_id,
            "name": line.name,
            "price": line.unit_price.amount,
            "imageUrls": list(line.image_urls),
            "quantity": line.available_stock,
            "categoryName": line.category_name,
            "cartQuantity": line.quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLine:
        return CartLine(
            product_id=raw["id"],
            name=raw["name"],
            unit_price=Money(int(raw["price"])),
            available_stock=int(raw.get("quantity", 0)),
            quantity=int(raw["cartQuantity"]),
            image_urls=tuple(raw.get("imageUrls") or ()),
            category_name=raw.get("categoryName"),
        )
