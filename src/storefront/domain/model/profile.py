"""Logged-in user profile, as stored by the login flow."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:

    email: str
    full_name: str = ""
    username: str = ""
    id: int | None = None
    role: str | None = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.username
