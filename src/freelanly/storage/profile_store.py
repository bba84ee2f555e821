"""One profile row per user."""

from __future__ import annotations

import logging
from typing import Any

import pydantic

from freelanly.errors import ValidationError
from freelanly.models.profile import UserProfile
from freelanly.models.session import UserSession
from freelanly.storage.db import Database

logger = logging.getLogger(__name__)

_COLUMNS = ("name", "email", "phone", "location", "website", "job_title")


class ProfileStore:
    def __init__(self, db: Database):
        self.db = db

    def get_profile(self, session: UserSession) -> UserProfile | None:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM profiles WHERE owner_id = ?", (session.user_id,)
            ).fetchone()
        if row is None:
            return None
        return UserProfile(**{column: row[column] for column in _COLUMNS})

    def save_profile(self, session: UserSession, data: UserProfile | dict[str, Any]) -> UserProfile:
        if isinstance(data, UserProfile):
            profile = data
        else:
            try:
                profile = UserProfile.model_validate(data)
            except pydantic.ValidationError as e:
                fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
                raise ValidationError("Invalid profile", fields) from e
        with self.db.connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO profiles
                   (owner_id, name, email, phone, location, website, job_title)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (session.user_id, *(getattr(profile, column) for column in _COLUMNS)),
            )
        logger.info("Saved profile for %s", session.user_id)
        return profile

    def fetch(self, session: UserSession) -> dict[str, str] | None:
        """Profile fetcher for the basic-info step."""
        profile = self.get_profile(session)
        return profile.to_payload() if profile else None
