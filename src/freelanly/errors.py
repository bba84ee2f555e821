"""Exceptions raised by freelanly components.

Every error is scoped to a single user action: raising one never leaves the
wizard's field store or step state partially updated.
"""

from __future__ import annotations


class FreelanlyError(Exception):
    """Base class for all application errors."""


class ValidationError(FreelanlyError):
    """A required field is missing or invalid.

    ``fields`` lists the offending field names so the UI can flag them.
    """

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = list(fields or [])


class GenerationError(FreelanlyError):
    """Document generation failed (missing entity or model call failure)."""


class ExportError(FreelanlyError):
    """Rendering a document to PDF or clipboard failed."""


class NotFoundError(FreelanlyError):
    """A stored record does not exist or belongs to another user."""


class ActionPendingError(FreelanlyError):
    """The same generate or save action is already in flight."""
