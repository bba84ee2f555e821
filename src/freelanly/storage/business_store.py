"""Clients, projects and generated documents, scoped to their owner."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Any

import pydantic

from freelanly.errors import NotFoundError, ValidationError
from freelanly.models.business import (
    Client,
    ClientIn,
    DashboardStats,
    Project,
    ProjectIn,
    ProjectStatus,
)
from freelanly.models.documents import DocumentKind, StoredDocument
from freelanly.models.session import UserSession
from freelanly.storage.db import Database

logger = logging.getLogger(__name__)

_INVOICE_IN_PROGRESS = "Cannot mark invoice as sent for projects that are in progress"


def _validated(model: type[pydantic.BaseModel], data: dict[str, Any]):
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(f"Invalid {model.__name__} data", fields) from e


class BusinessStore:
    """SQLite-backed store for the freelancer's clients, projects and documents."""

    def __init__(self, db: Database):
        self.db = db

    # --- Clients ---

    def list_clients(self, session: UserSession) -> list[Client]:
        with self.db.connect() as conn:
            rows = conn.execute(
                "SELECT * FROM clients WHERE owner_id = ? ORDER BY name",
                (session.user_id,),
            ).fetchall()
        return [Client(**dict(row)) for row in rows]

    def get_client(self, session: UserSession, client_id: int) -> Client:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM clients WHERE id = ? AND owner_id = ?",
                (client_id, session.user_id),
            ).fetchone()
        if row is None:
            raise NotFoundError(f"Client {client_id} not found")
        return Client(**dict(row))

    def create_client(self, session: UserSession, data: ClientIn | dict[str, Any]) -> Client:
        client = data if isinstance(data, ClientIn) else _validated(ClientIn, data)
        with self.db.connect() as conn:
            cursor = conn.execute(
                """INSERT INTO clients (owner_id, name, email, company, language)
                   VALUES (?, ?, ?, ?, ?)""",
                (session.user_id, client.name, client.email, client.company, client.language),
            )
            client_id = cursor.lastrowid
        logger.info("Created client %d for %s", client_id, session.user_id)
        return Client(id=client_id, owner_id=session.user_id, **client.model_dump())

    def update_client(self, session: UserSession, client_id: int, changes: dict[str, Any]) -> Client:
        current = self.get_client(session, client_id)
        merged = current.model_dump(exclude={"id", "owner_id"}) | changes
        client = _validated(ClientIn, merged)
        with self.db.connect() as conn:
            conn.execute(
                """UPDATE clients SET name = ?, email = ?, company = ?, language = ?
                   WHERE id = ? AND owner_id = ?""",
                (client.name, client.email, client.company, client.language,
                 client_id, session.user_id),
            )
        logger.info("Updated client %d for %s", client_id, session.user_id)
        return Client(id=client_id, owner_id=session.user_id, **client.model_dump())

    def delete_client(self, session: UserSession, client_id: int) -> bool:
        try:
            with self.db.connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM clients WHERE id = ? AND owner_id = ?",
                    (client_id, session.user_id),
                )
        except sqlite3.IntegrityError as e:
            raise ValidationError("Client still has projects", ["client_id"]) from e
        return cursor.rowcount > 0

    # --- Projects ---

    def list_projects(self, session: UserSession, client_id: int | None = None) -> list[Project]:
        with self.db.connect() as conn:
            if client_id is not None:
                rows = conn.execute(
                    "SELECT * FROM projects WHERE owner_id = ? AND client_id = ? ORDER BY id DESC",
                    (session.user_id, client_id),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM projects WHERE owner_id = ? ORDER BY id DESC",
                    (session.user_id,),
                ).fetchall()
        return [self._row_to_project(row) for row in rows]

    def get_project(self, session: UserSession, project_id: int) -> Project:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM projects WHERE id = ? AND owner_id = ?",
                (project_id, session.user_id),
            ).fetchone()
        if row is None:
            raise NotFoundError(f"Project {project_id} not found")
        return self._row_to_project(row)

    def create_project(self, session: UserSession, data: ProjectIn | dict[str, Any]) -> Project:
        project = data if isinstance(data, ProjectIn) else _validated(ProjectIn, data)
        try:
            self.get_client(session, project.client_id)
        except NotFoundError as e:
            raise ValidationError("Client not found", ["client_id"]) from e
        if project.status == ProjectStatus.IN_PROGRESS and project.invoice_sent:
            raise ValidationError(_INVOICE_IN_PROGRESS, ["invoice_sent"])
        with self.db.connect() as conn:
            cursor = conn.execute(
                """INSERT INTO projects
                   (owner_id, client_id, name, description, deadline, amount, status, invoice_sent)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (session.user_id, *self._project_params(project)),
            )
            project_id = cursor.lastrowid
        logger.info("Created project %d for client %d", project_id, project.client_id)
        return Project(id=project_id, owner_id=session.user_id, **project.model_dump())

    def update_project(self, session: UserSession, project_id: int, changes: dict[str, Any]) -> Project:
        current = self.get_project(session, project_id)
        merged = current.model_dump(exclude={"id", "owner_id"}) | changes
        project = _validated(ProjectIn, merged)

        if project.status == ProjectStatus.IN_PROGRESS:
            if changes.get("invoice_sent") is True:
                raise ValidationError(_INVOICE_IN_PROGRESS, ["invoice_sent"])
            if project.invoice_sent:
                logger.debug("Reset invoice_sent for in-progress project %d", project_id)
                project = project.model_copy(update={"invoice_sent": False})

        if project.client_id != current.client_id:
            try:
                self.get_client(session, project.client_id)
            except NotFoundError as e:
                raise ValidationError("Client not found", ["client_id"]) from e

        with self.db.connect() as conn:
            conn.execute(
                """UPDATE projects SET client_id = ?, name = ?, description = ?, deadline = ?,
                   amount = ?, status = ?, invoice_sent = ?
                   WHERE id = ? AND owner_id = ?""",
                (*self._project_params(project), project_id, session.user_id),
            )
        return Project(id=project_id, owner_id=session.user_id, **project.model_dump())

    def delete_project(self, session: UserSession, project_id: int) -> bool:
        with self.db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM projects WHERE id = ? AND owner_id = ?",
                (project_id, session.user_id),
            )
        return cursor.rowcount > 0

    # --- Documents ---

    def list_documents(self, session: UserSession, project_id: int | None = None) -> list[StoredDocument]:
        with self.db.connect() as conn:
            if project_id is not None:
                rows = conn.execute(
                    """SELECT * FROM documents WHERE owner_id = ? AND project_id = ?
                       ORDER BY created_at DESC""",
                    (session.user_id, project_id),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM documents WHERE owner_id = ? ORDER BY created_at DESC",
                    (session.user_id,),
                ).fetchall()
        return [self._row_to_document(row) for row in rows]

    def get_document(self, session: UserSession, document_id: int) -> StoredDocument:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM documents WHERE id = ? AND owner_id = ?",
                (document_id, session.user_id),
            ).fetchone()
        if row is None:
            raise NotFoundError(f"Document {document_id} not found")
        return self._row_to_document(row)

    def create_document(
        self,
        session: UserSession,
        kind: DocumentKind,
        content: str,
        project_id: int | None = None,
    ) -> StoredDocument:
        created_at = datetime.now()
        with self.db.connect() as conn:
            cursor = conn.execute(
                """INSERT INTO documents (owner_id, kind, project_id, content, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (session.user_id, kind.value, project_id, content, created_at.isoformat()),
            )
            document_id = cursor.lastrowid
        logger.info("Stored %s document %d", kind.value, document_id)
        return StoredDocument(
            id=document_id,
            kind=kind,
            project_id=project_id,
            content=content,
            owner_id=session.user_id,
            created_at=created_at,
        )

    def update_document_content(self, session: UserSession, document_id: int, content: str) -> StoredDocument:
        document = self.get_document(session, document_id)
        with self.db.connect() as conn:
            conn.execute(
                "UPDATE documents SET content = ? WHERE id = ? AND owner_id = ?",
                (content, document_id, session.user_id),
            )
        return document.model_copy(update={"content": content})

    def delete_document(self, session: UserSession, document_id: int) -> bool:
        with self.db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM documents WHERE id = ? AND owner_id = ?",
                (document_id, session.user_id),
            )
        return cursor.rowcount > 0

    # --- Dashboard ---

    def dashboard_stats(self, session: UserSession) -> DashboardStats:
        """Client count, in-progress projects, paid revenue and document count."""
        with self.db.connect() as conn:
            row = conn.execute(
                """SELECT
                       (SELECT COUNT(*) FROM clients WHERE owner_id = :owner),
                       (SELECT COUNT(*) FROM projects
                            WHERE owner_id = :owner AND status = :in_progress),
                       (SELECT SUM(amount) FROM projects
                            WHERE owner_id = :owner AND status = :paid),
                       (SELECT COUNT(*) FROM documents WHERE owner_id = :owner)""",
                {
                    "owner": session.user_id,
                    "in_progress": ProjectStatus.IN_PROGRESS.value,
                    "paid": ProjectStatus.PAID.value,
                },
            ).fetchone()
        return DashboardStats(
            active_clients=row[0] or 0,
            ongoing_projects=row[1] or 0,
            paid_revenue=row[2] or 0.0,
            documents_generated=row[3] or 0,
        )

    @staticmethod
    def _project_params(project: ProjectIn) -> tuple:
        return (
            project.client_id,
            project.name,
            project.description,
            project.deadline.isoformat() if project.deadline else None,
            project.amount,
            project.status.value,
            1 if project.invoice_sent else 0,
        )

    @staticmethod
    def _row_to_project(row: sqlite3.Row) -> Project:
        return Project(
            id=row["id"],
            owner_id=row["owner_id"],
            client_id=row["client_id"],
            name=row["name"],
            description=row["description"],
            deadline=datetime.fromisoformat(row["deadline"]) if row["deadline"] else None,
            amount=row["amount"],
            status=ProjectStatus(row["status"]),
            invoice_sent=bool(row["invoice_sent"]),
        )

    @staticmethod
    def _row_to_document(row: sqlite3.Row) -> StoredDocument:
        return StoredDocument(
            id=row["id"],
            kind=DocumentKind(row["kind"]),
            project_id=row["project_id"],
            content=row["content"],
            owner_id=row["owner_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
