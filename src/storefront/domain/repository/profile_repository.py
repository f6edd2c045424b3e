"""Abstract repository for the logged-in user's profile and credentials."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.profile import UserProfile


class ProfileRepository(ABC):

    @abstractmethod
    def get_profile(self) -> UserProfile | None:
        """Return the stored profile, or None when nobody is logged in."""

    @abstractmethod
    def get_token(self) -> str | None:
        """Return the stored bearer token, or None."""

    @abstractmethod
    def save(self, profile: UserProfile, token: str | None = None) -> None:
        """Persist a profile (and optionally a token) after login."""

    @abstractmethod
    def clear(self) -> None:
        """Forget the profile and token."""
