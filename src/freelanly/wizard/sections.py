"""Per-step section assemblers.

Each assembler owns the closed record for one wizard step. Input is
validated into that record before anything is written, so the field store
only ever receives whole, valid step updates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

import pydantic

from freelanly.errors import ValidationError
from freelanly.models.business import Project
from freelanly.models.resume import (
    BasicInfo,
    CoverLetterStep,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
    PreviewSettings,
    ProjectSelection,
    SelectedProject,
    SkillsExperience,
    TargetPosition,
)
from freelanly.models.session import UserSession
from freelanly.wizard.sequencer import StepSequencer
from freelanly.wizard.store import FieldStore

logger = logging.getLogger(__name__)

ProfileFetcher = Callable[[UserSession], Mapping[str, Any] | None]

# Profile payload keys -> basic-info fields
PROFILE_FIELD_MAP = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "location": "location",
    "website": "website",
    "jobTitle": "professional_title",
}


def _validate(record_type: type[pydantic.BaseModel], data: Mapping[str, Any]):
    try:
        return record_type.model_validate(dict(data))
    except pydantic.ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(
            f"Invalid {record_type.__name__}: {', '.join(fields) or 'input'}", fields
        ) from e


class SectionAssembler:
    step_id: ClassVar[str]
    record_type: ClassVar[type[pydantic.BaseModel]]

    @classmethod
    def field_names(cls) -> list[str]:
        return list(cls.record_type.model_fields)

    def read(self, store: FieldStore):
        return self.record_type.model_validate(
            {name: store.get(name) for name in self.field_names()}
        )

    def submit(self, sequencer: StepSequencer, data: Mapping[str, Any] | pydantic.BaseModel):
        """Validate ``data`` as this step's record and write it to the store."""
        if isinstance(data, pydantic.BaseModel):
            data = data.model_dump()
        unknown = sorted(set(data) - set(self.field_names()))
        if unknown:
            raise ValidationError(
                f"Fields not part of step {self.step_id}: {', '.join(unknown)}", unknown
            )
        current = {name: sequencer.store.get(name) for name in self.field_names()}
        current.update(data)
        record = _validate(self.record_type, current)
        sequencer.update_fields(record.model_dump(mode="json"))
        return record


class BasicInfoSection(SectionAssembler):
    step_id = "basic-info"
    record_type = BasicInfo

    def prefill(
        self,
        sequencer: StepSequencer,
        session: UserSession,
        fetch_profile: ProfileFetcher | None,
        *,
        enabled: bool,
    ) -> bool:
        """Pre-populate from the user's profile when fetching is enabled."""
        if not enabled or fetch_profile is None:
            return False
        profile = fetch_profile(session)
        if not profile:
            return False
        # fields the user already typed win over the profile
        values = {
            field: str(profile[key])
            for key, field in PROFILE_FIELD_MAP.items()
            if profile.get(key) and not sequencer.store.get(field)
        }
        self.submit(sequencer, values)
        logger.info("Basic info pre-filled from profile for %s", session.user_id)
        return True


class ProjectSelectionSection(SectionAssembler):
    step_id = "project-selection"
    record_type = ProjectSelection

    def toggle_project(self, sequencer: StepSequencer, project: Project) -> bool:
        """Select or deselect a project. Returns True when now selected."""
        selected = self.read(sequencer.store).selected_projects
        if any(p.id == project.id for p in selected):
            remaining = [p for p in selected if p.id != project.id]
            self.submit(sequencer, {"selected_projects": remaining})
            return False
        selected.append(
            SelectedProject(id=project.id, name=project.name, description=project.description)
        )
        self.submit(sequencer, {"selected_projects": selected})
        return True


class SkillsExperienceSection(SectionAssembler):
    step_id = "skills-experience"
    record_type = SkillsExperience

    def add_skill(self, sequencer: StepSequencer, skill: str) -> bool:
        skill = skill.strip()
        if not skill:
            return False
        skills = self.read(sequencer.store).skills
        self.submit(sequencer, {"skills": [*skills, skill]})
        return True

    def add_language(self, sequencer: StepSequencer, language: str, level: str) -> bool:
        if not language.strip() or not level.strip():
            return False
        return self._append(sequencer, "languages", LanguageEntry(language=language, level=level))

    def add_experience(self, sequencer: StepSequencer, entry: Mapping[str, Any]) -> bool:
        if not str(entry.get("role", "")).strip() or not str(entry.get("company", "")).strip():
            return False
        return self._append(sequencer, "experience", _validate(ExperienceEntry, entry))

    def add_education(self, sequencer: StepSequencer, entry: Mapping[str, Any]) -> bool:
        if not str(entry.get("degree", "")).strip() or not str(entry.get("institution", "")).strip():
            return False
        return self._append(sequencer, "education", _validate(EducationEntry, entry))

    def remove(self, sequencer: StepSequencer, field: str, index: int) -> None:
        """Remove the item at ``index`` from one of this step's list fields."""
        if field not in self.field_names():
            raise ValidationError(f"Unknown list field: {field}", [field])
        items = list(getattr(self.read(sequencer.store), field))
        if not 0 <= index < len(items):
            return
        del items[index]
        self.submit(sequencer, {field: items})

    def _append(self, sequencer: StepSequencer, field: str, item: pydantic.BaseModel) -> bool:
        items = list(getattr(self.read(sequencer.store), field))
        items.append(item)
        self.submit(sequencer, {field: items})
        return True


class TargetPositionSection(SectionAssembler):
    step_id = "target-position"
    record_type = TargetPosition


class PreviewExportSection(SectionAssembler):
    step_id = "preview-export"
    record_type = PreviewSettings


class CoverLetterSection(SectionAssembler):
    step_id = "cover-letter"
    record_type = CoverLetterStep


SECTIONS: dict[str, SectionAssembler] = {
    section.step_id: section
    for section in (
        BasicInfoSection(),
        ProjectSelectionSection(),
        SkillsExperienceSection(),
        TargetPositionSection(),
        PreviewExportSection(),
        CoverLetterSection(),
    )
}
