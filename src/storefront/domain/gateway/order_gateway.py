"""Port to the backend order service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order_request import OrderRequest


class OrderGateway(ABC):

    @abstractmethod
    def create_order(self, request: OrderRequest) -> int:
        """Create the order server-side and return its id.

        Raises ServiceError when the backend rejects the order or cannot
        be reached.
        """
