"""Pydantic models for the resume builder.

Each wizard step owns a closed record; ``ResumeDraft`` is the union of all
step fields and is what the field store holds (as a plain dict).
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class _StepRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class ExperienceEntry(_StepRecord):
    role: str = Field(min_length=1)
    company: str = Field(min_length=1)
    start_date: str = ""
    end_date: str = ""
    description: str = ""


class EducationEntry(_StepRecord):
    degree: str = Field(min_length=1)
    institution: str = Field(min_length=1)
    year: str = ""
    description: str = ""


class LanguageEntry(_StepRecord):
    language: str = Field(min_length=1)
    level: str = Field(min_length=1)


class SelectedProject(_StepRecord):
    id: int
    name: str
    description: str | None = None


class BasicInfo(_StepRecord):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""
    professional_title: str = ""
    summary: str = ""

    @field_validator("email")
    @classmethod
    def _email_shape(cls, v: str) -> str:
        if v and not _EMAIL_RE.match(v):
            raise ValueError("not an email address")
        return v


class ProjectSelection(_StepRecord):
    selected_projects: list[SelectedProject] = Field(default_factory=list)


class SkillsExperience(_StepRecord):
    skills: list[str] = Field(default_factory=list)
    languages: list[LanguageEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)


class TargetPosition(_StepRecord):
    target_company: str = ""
    target_position: str = ""
    job_description: str = ""


class PreviewSettings(_StepRecord):
    template: str = "professional"


class CoverLetterStep(_StepRecord):
    cover_letter: str = ""


class ResumeDraft(
    BasicInfo,
    ProjectSelection,
    SkillsExperience,
    TargetPosition,
    PreviewSettings,
    CoverLetterStep,
):
    """All wizard fields in one record."""


DRAFT_FIELDS: frozenset[str] = frozenset(ResumeDraft.model_fields)


def empty_draft() -> dict[str, Any]:
    """Initial field-store contents."""
    return ResumeDraft().model_dump(mode="json")


class SavedResume(BaseModel):
    """A persisted snapshot of a completed draft."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    owner_id: str
    name: str
    specialization: str = ""
    fields: dict[str, Any]
    content: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
