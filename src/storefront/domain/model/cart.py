"""Cart aggregate: the customer's line items before checkout.

The Cart owns its lines and enforces the line invariants:
- at most one line per product id
- a line's quantity is at least 1
- quantity updates never exceed the stock snapshot taken when the
  product was added
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


@dataclass
class CartLine:
    """One product entry in the cart with its own quantity.

    ``unit_price`` and ``available_stock`` are snapshots of the product
    at the moment it was first added.
    """

    product_id: int
    name: str
    unit_price: Money
    available_stock: int
    quantity: int = 1
    image_urls: tuple[str, ...] = ()
    category_name: str | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValidationError("Cart line quantity must be at least 1")

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    @property
    def first_image(self) -> str | None:
        return self.image_urls[0] if self.image_urls else None

    @staticmethod
    def from_product(product: Product) -> CartLine:
        return CartLine(
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            available_stock=product.stock,
            quantity=1,
            image_urls=tuple(product.image_urls),
            category_name=product.category_name,
        )


@dataclass
class Cart:
    """Ordered collection of cart lines.

    Persistence is not the cart's concern; see ``CartStore`` in the
    application layer.
    """

    lines: list[CartLine] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product) -> CartLine:
        """Add one unit of *product*.

        Merges into an existing line (quantity + 1) when the product is
        already in the cart. Stock is not checked here; the clamp is
        applied on quantity updates.
        """
        existing = self.find(product.id)
        if existing is not None:
            existing.quantity += 1
            return existing

        line = CartLine.from_product(product)
        self.lines.append(line)
        return line

    def remove(self, product_id: int) -> None:
        """Drop the line for *product_id*. Removing an absent line is a no-op."""
        self.lines = [line for line in self.lines if line.product_id != product_id]

    def update_quantity(self, product_id: int, new_quantity: int) -> int:
        """Set a line's quantity, clamped to ``[1, available_stock]``.

        A quantity of zero or less removes the line. Returns the quantity
        actually applied (0 when removed or when the product is not in
        the cart).
        """
        if new_quantity <= 0:
            self.remove(product_id)
            return 0

        line = self.find(product_id)
        if line is None:
            return 0

        line.quantity = max(1, min(new_quantity, line.available_stock))
        return line.quantity

    def clear(self) -> None:
        self.lines = []

    # --- Queries --------------------------------------------------------------

    def find(self, product_id: int) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def is_in_cart(self, product_id: int) -> bool:
        return self.find(product_id) is not None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)
