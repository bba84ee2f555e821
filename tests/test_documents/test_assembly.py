"""Tests for invoice, contract and resume assembly."""

from __future__ import annotations

import pytest

from freelanly.documents.assembly import DocumentAssemblyService
from freelanly.errors import GenerationError, ValidationError
from freelanly.models.business import ProjectStatus
from freelanly.models.documents import DocumentKind
from freelanly.models.resume import ResumeDraft, SavedResume


class TestProjectDocuments:
    async def test_invoice(self, assembly: DocumentAssemblyService, project, user, business):
        document = await assembly.generate("invoice", project.id, user)

        lines = document.body.splitlines()
        assert lines[0] == f"INVOICE #{project.id}"
        assert "From: Jane Doe" in lines
        assert "To: Acme Corp" in lines
        assert "Amount: $2500.00" in lines
        assert "Deadline: 03/15/2026" in lines
        assert "Status: New" in lines
        assert document.kind == DocumentKind.INVOICE
        assert document.source_id == str(project.id)

        stored = business.list_documents(user, project_id=project.id)
        assert len(stored) == 1
        assert stored[0].content == document.body

    async def test_contract(self, assembly: DocumentAssemblyService, project, user):
        document = await assembly.generate(DocumentKind.CONTRACT, project.id, user)
        assert document.body.startswith("CONTRACT\n")
        assert "And: Acme Corp (Acme)" in document.body
        assert "Amount: $2500.00" in document.body

    async def test_missing_amount_and_deadline(self, assembly, business, client, user):
        bare = business.create_project(user, {"client_id": client.id, "name": "Bare"})
        document = await assembly.generate("invoice", bare.id, user)
        assert "Amount: $0.00" in document.body
        assert "Deadline: N/A" in document.body
        assert "Description: N/A" in document.body

    async def test_freelancer_fallback_name(self, assembly, project):
        from freelanly.models.session import UserSession

        anonymous = UserSession(user_id="user-1")
        document = await assembly.generate("contract", project.id, anonymous)
        assert "Between: Freelancer" in document.body

    async def test_in_progress_project_cannot_be_invoiced(self, assembly, business, project, user):
        business.update_project(user, project.id, {"status": ProjectStatus.IN_PROGRESS})
        with pytest.raises(ValidationError):
            await assembly.generate("invoice", project.id, user)
        assert business.list_documents(user) == []

    async def test_in_progress_project_can_get_contract(self, assembly, business, project, user):
        business.update_project(user, project.id, {"status": ProjectStatus.IN_PROGRESS})
        document = await assembly.generate("contract", project.id, user)
        assert document.kind == DocumentKind.CONTRACT

    async def test_unknown_project(self, assembly, user, usage_store):
        with pytest.raises(GenerationError):
            await assembly.generate("invoice", 999, user)
        logs = usage_store.get_logs(user.user_id)
        assert len(logs) == 1
        assert logs[0].success is False

    async def test_non_numeric_project_id(self, assembly, user, usage_store):
        with pytest.raises(GenerationError) as exc:
            await assembly.generate("invoice", "abc", user)
        assert isinstance(exc.value.__cause__, ValueError)
        assert [log.success for log in usage_store.get_logs(user.user_id)] == [False]

    async def test_unknown_kind(self, assembly, project, user):
        with pytest.raises(ValidationError) as exc:
            await assembly.generate("memo", project.id, user)
        assert exc.value.fields == ["kind"]

    async def test_other_users_project_not_visible(self, assembly, project, other_user):
        with pytest.raises(GenerationError):
            await assembly.generate("invoice", project.id, other_user)

    async def test_success_logged(self, assembly, project, user, usage_store):
        await assembly.generate("contract", project.id, user)
        logs = usage_store.get_logs(user.user_id)
        assert [(log.kind, log.success) for log in logs] == [("contract", True)]
        assert logs[0].estimated_cost_usd == 0.0


class TestResume:
    def test_resume_from_draft(self, assembly, filled_draft, user):
        document = assembly.generate_resume(ResumeDraft.model_validate(filled_draft), user)
        lines = document.body.splitlines()
        assert lines[0] == "RESUME"
        assert "Jane Doe" in lines
        assert "Backend Engineer" in lines
        assert "jane@example.com | 555-0100 | Lisbon | https://jane.dev" in lines
        assert "Python, PostgreSQL" in lines
        assert "English: Fluent" in lines
        assert "Engineer, Globex (2020 - 2024)" in lines
        assert "BSc Computer Science, Uni (2019)" in lines
        assert "Checkout Revamp: Payment flow rebuild" in lines

    def test_empty_sections_omitted(self, assembly, user):
        draft = ResumeDraft(name="Jane", professional_title="Dev")
        body = assembly.generate_resume(draft, user).body
        assert body == "RESUME\n\nJane\nDev\n"

    def test_requires_name_and_title(self, assembly, user):
        with pytest.raises(ValidationError) as exc:
            assembly.generate_resume(ResumeDraft(name="Jane"), user)
        assert exc.value.fields == ["professional_title"]

    async def test_resume_from_saved_id(self, assembly, resume_store, filled_draft, user):
        saved = resume_store.save(
            user, SavedResume(owner_id=user.user_id, name="cv", fields=filled_draft)
        )
        document = await assembly.generate("resume", saved.id, user)
        assert document.source_id == saved.id
        assert document.body.startswith("RESUME")

    async def test_unknown_saved_resume(self, assembly, user):
        with pytest.raises(GenerationError):
            await assembly.generate("resume", "missing", user)


class TestCoverLetterAssembly:
    async def test_uses_recent_projects_when_none_selected(
        self, assembly, business, client, user, filled_draft, mock_llm_client
    ):
        for i in range(5):
            business.create_project(user, {"client_id": client.id, "name": f"Project {i}"})
        draft = ResumeDraft.model_validate({**filled_draft, "selected_projects": []})

        await assembly.generate_cover_letter(draft, user)

        prompt = mock_llm_client.generate.call_args.kwargs["prompt"]
        assert prompt.count("Project: ") == 3

    async def test_logs_tokens_and_cost(self, assembly, user, filled_draft, usage_store):
        draft = ResumeDraft.model_validate(filled_draft)
        await assembly.generate_cover_letter(draft, user)
        log = usage_store.get_logs(user.user_id)[0]
        assert log.kind == "cover_letter"
        assert log.total_input_tokens == 400
        assert log.total_output_tokens == 200
        assert log.estimated_cost_usd == pytest.approx(400 * 3 / 1e6 + 200 * 15 / 1e6)

    async def test_without_writer(self, business, resume_store, user, filled_draft):
        assembly = DocumentAssemblyService(business, resume_store)
        with pytest.raises(GenerationError):
            await assembly.generate_cover_letter(ResumeDraft.model_validate(filled_draft), user)
