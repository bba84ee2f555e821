"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from freelanly.clients.llm_client import LLMClient, LLMResponse
from freelanly.documents.assembly import DocumentAssemblyService
from freelanly.documents.cover_letter import CoverLetterWriter
from freelanly.logging.usage_store import UsageStore
from freelanly.models.business import Client, Project, ProjectStatus
from freelanly.models.session import UserSession
from freelanly.storage import BusinessStore, Database, ProfileStore, ResumeStore
from freelanly.wizard.session import WizardSession

SAMPLE_LETTER = """Dear Hiring Manager,

I am excited to apply for the Backend Engineer role at Acme. Over the past \
five years I have built APIs and data pipelines for clients across fintech and retail.

In my recent Checkout Revamp project I rebuilt a payment flow in Python and \
cut failed payments by a third. That work taught me to ship carefully under pressure.

I would welcome the chance to bring the same focus to your team. Thank you for \
considering my application.

Sincerely,
Jane Doe"""


@pytest.fixture
def user() -> UserSession:
    return UserSession(user_id="user-1", display_name="Jane Doe")


@pytest.fixture
def other_user() -> UserSession:
    return UserSession(user_id="user-2", display_name="Someone Else")


@pytest.fixture
def db(tmp_path: Path) -> Database:
    return Database(tmp_path / "freelanly.db")


@pytest.fixture
def business(db: Database) -> BusinessStore:
    return BusinessStore(db)


@pytest.fixture
def resume_store(db: Database) -> ResumeStore:
    return ResumeStore(db)


@pytest.fixture
def profile_store(db: Database) -> ProfileStore:
    return ProfileStore(db)


@pytest.fixture
def usage_store(tmp_path: Path) -> UsageStore:
    return UsageStore(db_path=tmp_path / "usage.db")


@pytest.fixture
def client(business: BusinessStore, user: UserSession) -> Client:
    return business.create_client(
        user, {"name": "Acme Corp", "email": "billing@acme.test", "company": "Acme"}
    )


@pytest.fixture
def project(business: BusinessStore, user: UserSession, client: Client) -> Project:
    return business.create_project(
        user,
        {
            "client_id": client.id,
            "name": "Website Redesign",
            "description": "New marketing site",
            "amount": 2500,
            "deadline": datetime(2026, 3, 15),
            "status": ProjectStatus.NEW,
        },
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(
            text=SAMPLE_LETTER,
            input_tokens=400,
            output_tokens=200,
            model="claude-sonnet-4-5-20250929",
        )
    )
    return client


@pytest.fixture
def failing_llm_client() -> LLMClient:
    """An LLM client whose endpoint is unreachable."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(side_effect=ConnectionError("connection refused"))
    return client


@pytest.fixture
def writer(mock_llm_client) -> CoverLetterWriter:
    return CoverLetterWriter(mock_llm_client)


@pytest.fixture
def assembly(business, resume_store, writer, usage_store) -> DocumentAssemblyService:
    return DocumentAssemblyService(business, resume_store, writer, usage_store)


@pytest.fixture
def wizard(user, resume_store, assembly) -> WizardSession:
    return WizardSession(user, resume_store, assembly)


@pytest.fixture
def filled_draft() -> dict:
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "location": "Lisbon",
        "website": "https://jane.dev",
        "professional_title": "Backend Engineer",
        "summary": "Builds reliable APIs.",
        "selected_projects": [
            {"id": 7, "name": "Checkout Revamp", "description": "Payment flow rebuild"}
        ],
        "skills": ["Python", "PostgreSQL"],
        "languages": [{"language": "English", "level": "Fluent"}],
        "experience": [
            {
                "role": "Engineer",
                "company": "Globex",
                "start_date": "2020",
                "end_date": "2024",
                "description": "Payments team",
            }
        ],
        "education": [
            {"degree": "BSc Computer Science", "institution": "Uni", "year": "2019", "description": ""}
        ],
        "target_company": "Acme",
        "target_position": "Senior Backend Engineer",
        "job_description": "Python, APIs",
        "template": "professional",
        "cover_letter": "",
    }
