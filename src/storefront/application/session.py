"""The browsing session: who is logged in and what is in their cart.

Loaded once through ``Session.open`` and passed explicitly to whatever
needs it, so storage is read in exactly one place.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.application.cart_store import CartStore
from storefront.domain.model.checkout import CheckoutDraft
from storefront.domain.model.profile import UserProfile
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.profile_repository import ProfileRepository


@dataclass
class Session:

    cart_store: CartStore
    profile: UserProfile | None = None
    auth_token: str | None = None

    @staticmethod
    def open(profile_repo: ProfileRepository, cart_repo: CartRepository) -> Session:
        return Session(
            cart_store=CartStore(cart_repo),
            profile=profile_repo.get_profile(),
            auth_token=profile_repo.get_token(),
        )

    @property
    def is_authenticated(self) -> bool:
        return self.profile is not None

    def start_checkout(self) -> CheckoutDraft:
        return CheckoutDraft.start(self.profile)
