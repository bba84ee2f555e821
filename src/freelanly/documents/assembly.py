"""Document assembly: fills invoice, contract and resume templates and
delegates cover letters to the language model."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from freelanly.documents.cover_letter import CoverLetterRequest, CoverLetterWriter
from freelanly.errors import GenerationError, NotFoundError, ValidationError
from freelanly.logging.cost_calculator import calculate_cost
from freelanly.logging.models import UsageLog
from freelanly.logging.usage_store import UsageStore
from freelanly.models.business import Client, Project, ProjectStatus
from freelanly.models.documents import DocumentKind, GeneratedDocument
from freelanly.models.resume import ResumeDraft, SelectedProject
from freelanly.models.session import UserSession
from freelanly.storage.business_store import BusinessStore
from freelanly.storage.resume_store import ResumeStore

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

TEMPLATE_MAP: dict[DocumentKind, str] = {
    DocumentKind.INVOICE: "invoice.j2",
    DocumentKind.CONTRACT: "contract.j2",
    DocumentKind.RESUME: "resume.j2",
}

RESUME_REQUIRED = ("name", "professional_title")


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


class DocumentAssemblyService:
    """Produces document bodies for the four document kinds.

    Invoices and contracts are generated from a project (and its client) and
    stored; resumes come from a saved resume or a draft; cover letters go
    through the ``CoverLetterWriter``. Each attempt is written to the usage
    log when a ``UsageStore`` is given.
    """

    def __init__(
        self,
        business: BusinessStore,
        resumes: ResumeStore,
        writer: CoverLetterWriter | None = None,
        usage: UsageStore | None = None,
    ):
        self.business = business
        self.resumes = resumes
        self.writer = writer
        self.usage = usage
        self.env = _environment()

    async def generate(
        self,
        kind: DocumentKind | str,
        source_id: int | str,
        session: UserSession,
    ) -> GeneratedDocument:
        """Generate a ``kind`` document from the entity ``source_id`` refers to.

        Invoices and contracts take a project id; resumes and cover letters
        take a saved resume id.
        """
        try:
            kind = DocumentKind(kind)
        except ValueError as e:
            raise ValidationError(f"Unknown document kind: {kind}", ["kind"]) from e
        if kind in (DocumentKind.INVOICE, DocumentKind.CONTRACT):
            try:
                project_id = int(source_id)
            except (TypeError, ValueError) as e:
                self._log(session, kind, str(source_id), success=False, error=str(e))
                raise GenerationError(f"Cannot load project {source_id}") from e
            return self.generate_project_document(kind, project_id, session)

        try:
            saved = self.resumes.get(session, str(source_id))
        except NotFoundError as e:
            self._log(session, kind, str(source_id), success=False, error=str(e))
            raise GenerationError(f"Cannot load resume {source_id}") from e
        draft = ResumeDraft.model_validate(saved.fields)
        if kind == DocumentKind.RESUME:
            return self.generate_resume(draft, session, source_id=saved.id)
        return await self.generate_cover_letter(draft, session, source_id=saved.id)

    def generate_project_document(
        self,
        kind: DocumentKind,
        project_id: int,
        session: UserSession,
    ) -> GeneratedDocument:
        """Fill the invoice or contract template for a project and store it."""
        try:
            project = self.business.get_project(session, project_id)
            client = self.business.get_client(session, project.client_id)
        except NotFoundError as e:
            self._log(session, kind, str(project_id), success=False, error=str(e))
            raise GenerationError(str(e)) from e

        if kind == DocumentKind.INVOICE and project.status == ProjectStatus.IN_PROGRESS:
            raise ValidationError(
                "Cannot create invoice for projects that are still in progress", ["status"]
            )

        body = self._render(kind, self._project_context(project, client, session))
        self.business.create_document(session, kind, body, project_id=project.id)
        self._log(session, kind, str(project_id))
        return GeneratedDocument(kind=kind, body=body, source_id=str(project_id))

    def generate_resume(
        self,
        draft: ResumeDraft,
        session: UserSession,
        source_id: str | None = None,
    ) -> GeneratedDocument:
        missing = [name for name in RESUME_REQUIRED if not getattr(draft, name).strip()]
        if missing:
            raise ValidationError("Resume needs a name and professional title", missing)
        contact = " | ".join(
            v for v in (draft.email, draft.phone, draft.location, draft.website) if v
        )
        body = self._render(DocumentKind.RESUME, {"draft": draft, "contact": contact})
        self._log(session, DocumentKind.RESUME, source_id)
        return GeneratedDocument(kind=DocumentKind.RESUME, body=body, source_id=source_id)

    async def generate_cover_letter(
        self,
        draft: ResumeDraft,
        session: UserSession,
        source_id: str | None = None,
    ) -> GeneratedDocument:
        """Ask the model for a cover letter built from the draft.

        When the draft has no selected projects, the user's most recent
        projects are summarized instead.
        """
        if self.writer is None:
            raise GenerationError("Cover letter generation is not configured")
        request = CoverLetterRequest.from_draft(draft)
        request.check_required()
        if not request.projects:
            request = request.model_copy(update={"projects": self._recent_projects(session)})

        start = time.monotonic()
        try:
            letter, response = await self.writer.write(request)
        except GenerationError as e:
            self._log(
                session,
                DocumentKind.COVER_LETTER,
                source_id,
                success=False,
                error=str(e),
                elapsed=time.monotonic() - start,
            )
            raise

        calls = [(response.model, response.input_tokens, response.output_tokens)]
        self._log(
            session,
            DocumentKind.COVER_LETTER,
            source_id,
            elapsed=time.monotonic() - start,
            calls=calls,
        )
        return GeneratedDocument(
            kind=DocumentKind.COVER_LETTER, body=letter, source_id=source_id
        )

    def _recent_projects(self, session: UserSession) -> list[SelectedProject]:
        limit = self.writer.max_projects if self.writer else 3
        return [
            SelectedProject(id=p.id, name=p.name, description=p.description)
            for p in self.business.list_projects(session)[:limit]
        ]

    def _render(self, kind: DocumentKind, context: dict) -> str:
        try:
            template = self.env.get_template(TEMPLATE_MAP[kind])
            return template.render(**context).strip("\n") + "\n"
        except TemplateError as e:
            logger.error("Template fill failed for %s", kind.value, exc_info=True)
            raise GenerationError(f"Missing data for {kind.value}: {e}") from e

    @staticmethod
    def _project_context(project: Project, client: Client, session: UserSession) -> dict:
        return {
            "freelancer": session.display_name or "Freelancer",
            "client": client,
            "project": project,
            "number": project.id,
            "amount": f"{project.amount:.2f}" if project.amount is not None else "0.00",
            "deadline": project.deadline.strftime("%m/%d/%Y") if project.deadline else "N/A",
        }

    def _log(
        self,
        session: UserSession,
        kind: DocumentKind,
        source_id: str | None,
        *,
        success: bool = True,
        error: str | None = None,
        elapsed: float = 0.0,
        calls: list[tuple[str, int, int]] | None = None,
    ) -> None:
        if self.usage is None:
            return
        calls = calls or []
        self.usage.save_log(
            UsageLog(
                user_id=session.user_id,
                kind=kind.value,
                source_id=source_id,
                model=calls[0][0] if calls else None,
                elapsed_seconds=round(elapsed, 3),
                total_input_tokens=sum(c[1] for c in calls),
                total_output_tokens=sum(c[2] for c in calls),
                estimated_cost_usd=calculate_cost(calls),
                success=success,
                error_message=error,
            )
        )
