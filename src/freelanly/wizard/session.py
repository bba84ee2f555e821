"""One user's resume wizard: store, sequencer and sections wired together."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from freelanly.documents.assembly import DocumentAssemblyService
from freelanly.errors import ActionPendingError, ValidationError
from freelanly.models.documents import GeneratedDocument
from freelanly.models.resume import ResumeDraft, SavedResume
from freelanly.models.session import UserSession
from freelanly.storage.resume_store import ResumeStore
from freelanly.wizard.sections import SECTIONS, ProfileFetcher, SectionAssembler
from freelanly.wizard.sequencer import StepSequencer, WizardState
from freelanly.wizard.store import FieldStore

logger = logging.getLogger(__name__)


class PendingAction:
    """Allows at most one outstanding request per action name."""

    def __init__(self):
        self._active: set[str] = set()

    def is_pending(self, action: str) -> bool:
        return action in self._active

    @contextmanager
    def guard(self, action: str) -> Iterator[None]:
        if action in self._active:
            raise ActionPendingError(f"{action} is already in progress")
        self._active.add(action)
        try:
            yield
        finally:
            self._active.discard(action)


class WizardSession:
    """Holds the draft being edited by one user until it is saved.

    Generation and save failures leave the field store and the wizard state
    exactly as they were.
    """

    def __init__(
        self,
        user: UserSession,
        resumes: ResumeStore,
        assembly: DocumentAssemblyService,
        *,
        profile_fetcher: ProfileFetcher | None = None,
        profile_fetch_enabled: bool = False,
    ):
        self.user = user
        self.resumes = resumes
        self.assembly = assembly
        self.store = FieldStore()
        self.sequencer = StepSequencer(self.store)
        self.sections: dict[str, SectionAssembler] = dict(SECTIONS)
        self.profile_fetcher = profile_fetcher
        self.profile_fetch_enabled = profile_fetch_enabled
        self.pending = PendingAction()
        self.resume_id: str | None = None

    @property
    def current_section(self) -> SectionAssembler:
        return self.sections[self.sequencer.current_step.id]

    def draft(self) -> ResumeDraft:
        return ResumeDraft.model_validate(self.store.snapshot())

    def prefill_profile(self) -> bool:
        return self.sections["basic-info"].prefill(
            self.sequencer,
            self.user,
            self.profile_fetcher,
            enabled=self.profile_fetch_enabled,
        )

    def generate_resume(self) -> GeneratedDocument:
        with self.pending.guard("generate"):
            return self.assembly.generate_resume(
                self.draft(), self.user, source_id=self.resume_id
            )

    async def generate_cover_letter(self) -> GeneratedDocument:
        """Generate a cover letter from the current draft and keep it in the draft."""
        with self.pending.guard("generate"):
            document = await self.assembly.generate_cover_letter(
                self.draft(), self.user, source_id=self.resume_id
            )
        self.sections["cover-letter"].submit(self.sequencer, {"cover_letter": document.body})
        return document

    def save(self, name: str, specialization: str = "") -> SavedResume:
        """Persist the draft; saving again overwrites the same resume."""
        name = name.strip()
        if not name:
            raise ValidationError("Resume name is required", ["name"])
        with self.pending.guard("save"):
            draft = self.draft()
            content = self.assembly.generate_resume(
                draft, self.user, source_id=self.resume_id
            ).body
            values = {
                "name": name,
                "specialization": specialization or draft.professional_title,
                "fields": self.store.snapshot(),
                "content": content,
            }
            if self.resume_id is not None:
                existing = self.resumes.get(self.user, self.resume_id)
                resume = existing.model_copy(update=values)
            else:
                resume = SavedResume(owner_id=self.user.user_id, **values)
            saved = self.resumes.save(self.user, resume)
        self.resume_id = saved.id
        return saved

    def load_saved(self, resume_id: str) -> SavedResume:
        """Replace the draft with a saved resume's fields.

        Steps whose required fields are filled are marked complete so the
        user can jump straight to any of them.
        """
        saved = self.resumes.get(self.user, resume_id)
        self.store.load(saved.fields)
        completed = [False] * len(self.sequencer.steps)
        for index in range(len(completed) - 1):
            if self.sequencer.missing_fields(index):
                break
            completed[index] = True
        self.sequencer.restore(WizardState(current=0, completed=completed))
        self.resume_id = saved.id
        logger.info("Loaded resume %s into wizard", saved.id)
        return saved

    def reset(self) -> None:
        self.store.load({})
        self.sequencer.restore(WizardState(completed=[False] * len(self.sequencer.steps)))
        self.resume_id = None
