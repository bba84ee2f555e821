"""Saved resume snapshots."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime

from freelanly.errors import NotFoundError
from freelanly.models.resume import SavedResume
from freelanly.models.session import UserSession
from freelanly.storage.db import Database

logger = logging.getLogger(__name__)


class ResumeStore:
    """Persists completed drafts; every read and write is owner-scoped."""

    def __init__(self, db: Database):
        self.db = db

    def save(self, session: UserSession, resume: SavedResume) -> SavedResume:
        """Insert a new snapshot or overwrite the caller's existing one."""
        if resume.owner_id != session.user_id:
            raise NotFoundError(f"Resume {resume.id} not found")
        resume = resume.model_copy(update={"updated_at": datetime.now()})
        with self.db.connect() as conn:
            existing = conn.execute(
                "SELECT owner_id FROM resumes WHERE id = ?", (resume.id,)
            ).fetchone()
            if existing is not None and existing["owner_id"] != session.user_id:
                raise NotFoundError(f"Resume {resume.id} not found")
            conn.execute(
                """INSERT OR REPLACE INTO resumes
                   (id, owner_id, name, specialization, fields_json, content,
                    created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    resume.id,
                    resume.owner_id,
                    resume.name,
                    resume.specialization,
                    json.dumps(resume.fields, ensure_ascii=False),
                    resume.content,
                    resume.created_at.isoformat(),
                    resume.updated_at.isoformat(),
                ),
            )
        logger.info("Saved resume %s (%s)", resume.id, resume.name)
        return resume

    def get(self, session: UserSession, resume_id: str) -> SavedResume:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM resumes WHERE id = ? AND owner_id = ?",
                (resume_id, session.user_id),
            ).fetchone()
        if row is None:
            raise NotFoundError(f"Resume {resume_id} not found")
        return self._row_to_resume(row)

    def list_resumes(self, session: UserSession) -> list[SavedResume]:
        with self.db.connect() as conn:
            rows = conn.execute(
                "SELECT * FROM resumes WHERE owner_id = ? ORDER BY updated_at DESC",
                (session.user_id,),
            ).fetchall()
        return [self._row_to_resume(row) for row in rows]

    def delete(self, session: UserSession, resume_id: str) -> bool:
        with self.db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM resumes WHERE id = ? AND owner_id = ?",
                (resume_id, session.user_id),
            )
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_resume(row: sqlite3.Row) -> SavedResume:
        return SavedResume(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            specialization=row["specialization"],
            fields=json.loads(row["fields_json"]),
            content=row["content"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
