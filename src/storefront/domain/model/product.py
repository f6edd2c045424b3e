"""Product as seen by the storefront client.

Products are owned by the backend catalog; the client only holds the
snapshot it was shown when the customer pressed "add to cart".
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:

    id: int
    name: str
    price: Money
    stock: int
    image_urls: tuple[str, ...] = field(default_factory=tuple)
    category_name: str | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if self.stock < 0:
            raise ValidationError("Product stock cannot be negative")
