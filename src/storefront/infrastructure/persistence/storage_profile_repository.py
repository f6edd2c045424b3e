"""Key/value-storage-backed implementation of ProfileRepository.

The login flow writes the profile to ``user_auth`` and the bearer token
to ``auth_token``. Older clients wrote the profile to ``user``; it is
still read as a fallback but never written.
"""

from __future__ import annotations

import json
import logging

from storefront.domain.model.profile import UserProfile
from storefront.domain.repository.profile_repository import ProfileRepository
from storefront.infrastructure.persistence.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)

AUTH_KEY = "user_auth"
LEGACY_USER_KEY = "user"
TOKEN_KEY = "auth_token"


class StorageProfileRepository(ProfileRepository):

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    # --- ProfileRepository interface ------------------------------------------

    def get_profile(self) -> UserProfile | None:
        for key in (AUTH_KEY, LEGACY_USER_KEY):
            profile = self._read_profile(key)
            if profile is not None:
                return profile
        return None

    def get_token(self) -> str | None:
        try:
            return self._storage.get_item(TOKEN_KEY) or None
        except (OSError, ValueError) as exc:
            logger.warning("Could not read auth token: %s", exc)
            return None

    def save(self, profile: UserProfile, token: str | None = None) -> None:
        self._storage.set_item(AUTH_KEY, json.dumps(self._to_raw(profile), ensure_ascii=False))
        if token:
            self._storage.set_item(TOKEN_KEY, token)

    def clear(self) -> None:
        self._storage.remove_item(AUTH_KEY)
        self._storage.remove_item(TOKEN_KEY)

    # --- Serialization --------------------------------------------------------

    def _read_profile(self, key: str) -> UserProfile | None:
        try:
            saved = self._storage.get_item(key)
            if not saved:
                return None
            raw = json.loads(saved)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable profile under %r: %s", key, exc)
            return None
        if not isinstance(raw, dict) or not raw.get("email"):
            return None
        return self._to_domain(raw)

    @staticmethod
    def _to_raw(profile: UserProfile) -> dict:
        return {
            "id": profile.id,
            "username": profile.username,
            "email": profile.email,
            "fullName": profile.full_name,
            "role": profile.role,
        }

    @staticmethod
    def _to_domain(raw: dict) -> UserProfile:
        return UserProfile(
            id=raw.get("id"),
            username=raw.get("username") or "",
            email=raw["email"],
            full_name=raw.get("fullName") or raw.get("name") or "",
            role=raw.get("role"),
        )
