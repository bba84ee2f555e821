"""SQLite persistence for business records, profiles and saved resumes."""

from freelanly.storage.business_store import BusinessStore
from freelanly.storage.db import Database
from freelanly.storage.profile_store import ProfileStore
from freelanly.storage.resume_store import ResumeStore

__all__ = ["BusinessStore", "Database", "ProfileStore", "ResumeStore"]
