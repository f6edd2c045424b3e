"""Port to the backend's payment endpoints.

The client never talks to the payment provider directly: the backend
hands out signed payment links and verifies the provider's signed
return, since both need a secret the client must not hold.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.value_objects import Money


class PaymentGateway(ABC):

    @abstractmethod
    def create_payment_link(self, amount: Money, order_id: int) -> str | None:
        """Return the gateway URL to send the customer to, or None if none was issued.

        Raises ServiceError on transport or server failure.
        """

    @abstractmethod
    def verify_return(self, params: dict[str, str]) -> None:
        """Ask the backend to verify the gateway's return parameters.

        Returns normally when payment is confirmed; raises ServiceError
        otherwise.
        """
