"""Pydantic models for generated documents."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DocumentKind(str, Enum):
    RESUME = "resume"
    INVOICE = "invoice"
    CONTRACT = "contract"
    COVER_LETTER = "cover_letter"

    @property
    def marker(self) -> str:
        """Heading marker that the PDF exporter renders in the heading style."""
        return self.value.replace("_", " ").upper()


class GeneratedDocument(BaseModel):
    """Immutable result of one generation; regeneration makes a new one."""

    model_config = ConfigDict(frozen=True)

    kind: DocumentKind
    body: str
    source_id: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)


class StoredDocument(BaseModel):
    """A generated invoice or contract persisted for a project."""

    id: int
    kind: DocumentKind
    project_id: int | None
    content: str
    owner_id: str
    created_at: datetime
