"""The authenticated user, passed explicitly to every owner-scoped call."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UserSession:
    user_id: str
    display_name: str = ""

    @property
    def label(self) -> str:
        return self.display_name or self.user_id
