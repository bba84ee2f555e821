"""Data models for clients, projects, documents and resumes."""

from freelanly.models.business import (
    Client,
    ClientIn,
    DashboardStats,
    Project,
    ProjectIn,
    ProjectStatus,
)
from freelanly.models.documents import DocumentKind, GeneratedDocument, StoredDocument
from freelanly.models.resume import (
    BasicInfo,
    CoverLetterStep,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
    PreviewSettings,
    ProjectSelection,
    ResumeDraft,
    SavedResume,
    SelectedProject,
    SkillsExperience,
    TargetPosition,
)
from freelanly.models.profile import UserProfile
from freelanly.models.session import UserSession

__all__ = [
    "BasicInfo",
    "Client",
    "ClientIn",
    "CoverLetterStep",
    "DashboardStats",
    "DocumentKind",
    "EducationEntry",
    "ExperienceEntry",
    "GeneratedDocument",
    "LanguageEntry",
    "PreviewSettings",
    "Project",
    "ProjectIn",
    "ProjectSelection",
    "ProjectStatus",
    "ResumeDraft",
    "SavedResume",
    "SelectedProject",
    "SkillsExperience",
    "StoredDocument",
    "TargetPosition",
    "UserProfile",
    "UserSession",
]
