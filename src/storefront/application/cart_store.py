"""Application service: the persisted cart store.

Holds the session's Cart in memory, loaded once from the repository when
the store is opened, and writes it back after every mutation. There is
no batching: after any call returns, storage mirrors memory.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO, CartLineDTO
from storefront.domain.model.cart import Cart
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository


class CartStore:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo
        self._cart = Cart(lines=cart_repo.load())

    @property
    def cart(self) -> Cart:
        return self._cart

    # --- Mutations (each persists) --------------------------------------------

    def add_to_cart(self, product: Product) -> None:
        self._cart.add(product)
        self._commit()

    def remove_from_cart(self, product_id: int) -> None:
        self._cart.remove(product_id)
        self._commit()

    def update_quantity(self, product_id: int, new_quantity: int) -> int:
        """Returns the quantity actually applied after clamping to stock."""
        applied = self._cart.update_quantity(product_id, new_quantity)
        self._commit()
        return applied

    def clear_cart(self) -> None:
        self._cart.clear()
        self._commit()

    # --- Queries --------------------------------------------------------------

    def get_cart_total(self) -> Money:
        return self._cart.total

    def get_cart_item_count(self) -> int:
        return self._cart.item_count

    def is_in_cart(self, product_id: int) -> bool:
        return self._cart.is_in_cart(product_id)

    @property
    def is_empty(self) -> bool:
        return self._cart.is_empty

    def snapshot(self) -> CartDTO:
        return CartDTO(
            lines=[
                CartLineDTO(
                    product_id=line.product_id,
                    name=line.name,
                    quantity=line.quantity,
                    available_stock=line.available_stock,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in self._cart.lines
            ],
            item_count=self._cart.item_count,
            total=str(self._cart.total),
        )

    # --- Internal helpers -----------------------------------------------------

    def _commit(self) -> None:
        self._cart_repo.save(list(self._cart.lines))
