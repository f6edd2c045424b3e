"""Abstract repository for the Cart aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. The concrete implementation keeps the cart in local
key/value storage.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import CartLine


class CartRepository(ABC):

    @abstractmethod
    def load(self) -> list[CartLine]:
        """Return the persisted lines, or an empty list if absent or unreadable."""

    @abstractmethod
    def save(self, lines: list[CartLine]) -> None:
        """Overwrite the persisted copy. Best effort: must not raise."""
